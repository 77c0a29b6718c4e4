"""Fine-tuning job records and the requests that manage them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from oaiclient.api_request import ApiRequest, RequestBuilder, query_suffix

_BUILDER = RequestBuilder()
_JOBS = "/fine_tuning/jobs"


@dataclass
class Hyperparameters:
    """Training settings; ``epochs`` may be a number or ``"auto"``."""

    epochs: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Hyperparameters:
        return cls(epochs=(data or {}).get("n_epochs"))

    def to_dict(self) -> dict[str, Any]:
        return {} if self.epochs is None else {"n_epochs": self.epochs}


@dataclass
class FineTuningJob:
    id: str = ""
    object: str = ""
    created_at: int = 0
    finished_at: int = 0
    model: str = ""
    fine_tuned_model: str = ""
    organization_id: str = ""
    status: str = ""
    hyperparameters: Hyperparameters = field(default_factory=Hyperparameters)
    training_file: str = ""
    validation_file: str = ""
    result_files: list[str] = field(default_factory=list)
    trained_tokens: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FineTuningJob:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            finished_at=data.get("finished_at") or 0,
            model=data.get("model") or "",
            fine_tuned_model=data.get("fine_tuned_model") or "",
            organization_id=data.get("organization_id") or "",
            status=data.get("status") or "",
            hyperparameters=Hyperparameters.from_dict(data.get("hyperparameters")),
            training_file=data.get("training_file") or "",
            validation_file=data.get("validation_file") or "",
            result_files=list(data.get("result_files") or []),
            trained_tokens=data.get("trained_tokens") or 0,
        )


@dataclass
class FineTuningJobRequest:
    training_file: str = ""
    validation_file: str = ""
    model: str = ""
    hyperparameters: Hyperparameters | None = None
    suffix: str = ""

    def to_dict(self) -> dict[str, Any]:
        """The request body; empty optional fields are left out."""
        result: dict[str, Any] = {"training_file": self.training_file}
        if self.validation_file:
            result["validation_file"] = self.validation_file
        if self.model:
            result["model"] = self.model
        if self.hyperparameters is not None:
            result["hyperparameters"] = self.hyperparameters.to_dict()
        if self.suffix:
            result["suffix"] = self.suffix
        return result


@dataclass
class FineTuningJobEvent:
    object: str = ""
    id: str = ""
    created_at: int = 0
    level: str = ""
    message: str = ""
    data: Any = None
    type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FineTuningJobEvent:
        return cls(
            object=data.get("object") or "",
            id=data.get("id") or "",
            created_at=data.get("created_at") or 0,
            level=data.get("level") or "",
            message=data.get("message") or "",
            data=data.get("data"),
            type=data.get("type") or "",
        )


@dataclass
class FineTuningJobEventList:
    object: str = ""
    data: list[FineTuningJobEvent] = field(default_factory=list)
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FineTuningJobEventList:
        return cls(
            object=data.get("object") or "",
            data=[FineTuningJobEvent.from_dict(item) for item in data.get("data") or []],
            has_more=bool(data.get("has_more")),
        )


def create_fine_tuning_job(request: FineTuningJobRequest) -> ApiRequest:
    """Request that starts a fine-tuning job."""
    return _BUILDER.build("POST", _JOBS, request)


def cancel_fine_tuning_job(job_id: str) -> ApiRequest:
    """Request that cancels a fine-tuning job."""
    return _BUILDER.build("POST", f"{_JOBS}/{job_id}/cancel")


def retrieve_fine_tuning_job(job_id: str) -> ApiRequest:
    """Request that fetches a fine-tuning job."""
    return _BUILDER.build("GET", f"{_JOBS}/{job_id}")


def list_fine_tuning_job_events(
    job_id: str, after: str | None = None, limit: int | None = None
) -> ApiRequest:
    """Request that lists a job's events, optionally paged."""
    suffix = query_suffix({"after": after, "limit": limit})
    return _BUILDER.build("GET", f"{_JOBS}/{job_id}/events{suffix}")