"""Assistant runs, their steps, and the requests that drive them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, TypeVar

from oaiclient.api_request import ApiRequest, RequestBuilder, query_suffix
from oaiclient.thread import ThreadRequest

_BUILDER = RequestBuilder()
_ASSISTANTS_BETA = {"OpenAI-Beta": "assistants=v1"}

_E = TypeVar("_E", bound=enum.Enum)


class RunStatus(str, enum.Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RequiredActionType(str, enum.Enum):
    SUBMIT_TOOL_OUTPUTS = "submit_tool_outputs"


class RunError(str, enum.Enum):
    SERVER_ERROR = "server_error"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class RunStepStatus(str, enum.Enum):
    IN_PROGRESS = "in_progress"
    CANCELLING = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RunStepType(str, enum.Enum):
    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


def _as_enum(kind: type[_E], value: Any) -> _E | str:
    """The enum member for ``value``, or the raw text when it is not a known member."""
    value = value or ""
    try:
        return kind(value)
    except ValueError:
        return value


def _text(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


@dataclass
class RunLastError:
    code: RunError | str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunLastError:
        return cls(code=_as_enum(RunError, data.get("code")), message=data.get("message") or "")


@dataclass
class RunRequiredAction:
    type: RequiredActionType | str = ""
    tool_calls: list[Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunRequiredAction:
        submit = data.get("submit_tool_outputs")
        tool_calls = list(submit.get("tool_calls") or []) if isinstance(submit, dict) else None
        return cls(type=_as_enum(RequiredActionType, data.get("type")), tool_calls=tool_calls)


@dataclass
class Run:
    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    assistant_id: str = ""
    status: RunStatus | str = ""
    required_action: RunRequiredAction | None = None
    last_error: RunLastError | None = None
    expires_at: int = 0
    started_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    model: str = ""
    instructions: str = ""
    tools: list[Any] = field(default_factory=list)
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Run:
        required = data.get("required_action")
        last_error = data.get("last_error")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            thread_id=data.get("thread_id") or "",
            assistant_id=data.get("assistant_id") or "",
            status=_as_enum(RunStatus, data.get("status")),
            required_action=RunRequiredAction.from_dict(required) if required is not None else None,
            last_error=RunLastError.from_dict(last_error) if last_error is not None else None,
            expires_at=data.get("expires_at") or 0,
            started_at=data.get("started_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            model=data.get("model") or "",
            instructions=data.get("instructions") or "",
            tools=list(data.get("tools") or []),
            file_ids=list(data.get("file_ids") or []),
            metadata=data.get("metadata"),
        )


@dataclass
class RunList:
    runs: list[Run] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunList:
        return cls(runs=[Run.from_dict(item) for item in data.get("data") or []])


@dataclass
class RunRequest:
    assistant_id: str = ""
    model: str | None = None
    instructions: str | None = None
    tools: list[Any] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """The request body; unset optional fields are left out."""
        result: dict[str, Any] = {"assistant_id": self.assistant_id}
        if self.model is not None:
            result["model"] = self.model
        if self.instructions is not None:
            result["instructions"] = self.instructions
        if self.tools:
            result["tools"] = list(self.tools)
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result


@dataclass
class RunModifyRequest:
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": dict(self.metadata)} if self.metadata else {}


@dataclass
class ToolOutput:
    tool_call_id: str = ""
    output: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"tool_call_id": self.tool_call_id, "output": self.output}


@dataclass
class SubmitToolOutputsRequest:
    tool_outputs: list[ToolOutput] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"tool_outputs": [output.to_dict() for output in self.tool_outputs]}


@dataclass
class CreateThreadAndRunRequest(RunRequest):
    thread: ThreadRequest = field(default_factory=ThreadRequest)

    def to_dict(self) -> dict[str, Any]:
        """The run fields side by side with the thread to create."""
        result = super().to_dict()
        result["thread"] = self.thread.to_dict()
        return result


@dataclass
class StepDetails:
    type: RunStepType | str = ""
    message_id: str | None = None
    tool_calls: list[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> StepDetails:
        data = data or {}
        creation = data.get("message_creation")
        return cls(
            type=_as_enum(RunStepType, data.get("type")),
            message_id=(creation.get("message_id") or "") if isinstance(creation, dict) else None,
            tool_calls=list(data.get("tool_calls") or []),
        )


@dataclass
class RunStep:
    id: str = ""
    object: str = ""
    created_at: int = 0
    assistant_id: str = ""
    thread_id: str = ""
    run_id: str = ""
    type: RunStepType | str = ""
    status: RunStepStatus | str = ""
    step_details: StepDetails = field(default_factory=StepDetails)
    last_error: RunLastError | None = None
    expired_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunStep:
        last_error = data.get("last_error")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            assistant_id=data.get("assistant_id") or "",
            thread_id=data.get("thread_id") or "",
            run_id=data.get("run_id") or "",
            type=_as_enum(RunStepType, data.get("type")),
            status=_as_enum(RunStepStatus, data.get("status")),
            step_details=StepDetails.from_dict(data.get("step_details")),
            last_error=RunLastError.from_dict(last_error) if last_error is not None else None,
            expired_at=data.get("expired_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            metadata=data.get("metadata"),
        )


@dataclass
class RunStepList:
    run_steps: list[RunStep] = field(default_factory=list)
    first_id: str = ""
    last_id: str = ""
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunStepList:
        return cls(
            run_steps=[RunStep.from_dict(item) for item in data.get("data") or []],
            first_id=data.get("first_id") or "",
            last_id=data.get("last_id") or "",
            has_more=bool(data.get("has_more")),
        )


@dataclass
class Pagination:
    limit: int | None = None
    order: str | None = None
    after: str | None = None
    before: str | None = None

    def query(self) -> str:
        """The ``?...`` suffix for the set options, or ``""``."""
        return query_suffix(
            {"limit": self.limit, "order": self.order, "after": self.after, "before": self.before}
        )


def _runs_url(thread_id: str) -> str:
    return f"/threads/{thread_id}/runs"


def create_run(thread_id: str, request: RunRequest) -> ApiRequest:
    """Request that starts a run on a thread."""
    return _BUILDER.build("POST", _runs_url(thread_id), request, _ASSISTANTS_BETA)


def retrieve_run(thread_id: str, run_id: str) -> ApiRequest:
    """Request that fetches a run."""
    return _BUILDER.build("GET", f"{_runs_url(thread_id)}/{run_id}", headers=_ASSISTANTS_BETA)


def modify_run(thread_id: str, run_id: str, request: RunModifyRequest) -> ApiRequest:
    """Request that replaces a run's metadata."""
    return _BUILDER.build("POST", f"{_runs_url(thread_id)}/{run_id}", request, _ASSISTANTS_BETA)


def list_runs(thread_id: str, pagination: Pagination | None = None) -> ApiRequest:
    """Request that lists a thread's runs, optionally paged."""
    suffix = (pagination or Pagination()).query()
    return _BUILDER.build("GET", _runs_url(thread_id) + suffix, headers=_ASSISTANTS_BETA)


def submit_tool_outputs(
    thread_id: str, run_id: str, request: SubmitToolOutputsRequest
) -> ApiRequest:
    """Request that hands tool results back to a waiting run."""
    return _BUILDER.build(
        "POST", f"{_runs_url(thread_id)}/{run_id}/submit_tool_outputs", request, _ASSISTANTS_BETA
    )


def cancel_run(thread_id: str, run_id: str) -> ApiRequest:
    """Request that cancels a run."""
    return _BUILDER.build(
        "POST", f"{_runs_url(thread_id)}/{run_id}/cancel", headers=_ASSISTANTS_BETA
    )


def create_thread_and_run(request: CreateThreadAndRunRequest) -> ApiRequest:
    """Request that creates a thread and starts a run on it at once."""
    return _BUILDER.build("POST", "/threads/runs", request, _ASSISTANTS_BETA)


def retrieve_run_step(thread_id: str, run_id: str, step_id: str) -> ApiRequest:
    """Request that fetches one step of a run."""
    return _BUILDER.build(
        "GET", f"{_runs_url(thread_id)}/{run_id}/steps/{step_id}", headers=_ASSISTANTS_BETA
    )


def list_run_steps(
    thread_id: str, run_id: str, pagination: Pagination | None = None
) -> ApiRequest:
    """Request that lists a run's steps, optionally paged."""
    suffix = (pagination or Pagination()).query()
    return _BUILDER.build(
        "GET", f"{_runs_url(thread_id)}/{run_id}/steps{suffix}", headers=_ASSISTANTS_BETA
    )