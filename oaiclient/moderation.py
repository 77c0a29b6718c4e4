"""Content moderation requests and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from oaiclient.api_request import ApiRequest, RequestBuilder

_BUILDER = RequestBuilder()

MODERATION_TEXT_STABLE = "text-moderation-stable"
MODERATION_TEXT_LATEST = "text-moderation-latest"
# Deprecated: use MODERATION_TEXT_STABLE or MODERATION_TEXT_LATEST.
MODERATION_TEXT_001 = "text-moderation-001"

_VALID_MODELS = frozenset({MODERATION_TEXT_STABLE, MODERATION_TEXT_LATEST})


class ModerationModelError(ValueError):
    """Raised when a moderation request names a model the endpoint does not accept."""

    def __init__(self) -> None:
        super().__init__(
            "this model is not supported with moderation, please use "
            "text-moderation-stable or text-moderation-latest instead"
        )


@dataclass
class ModerationRequest:
    input: str = ""
    model: str = ""

    def to_dict(self) -> dict[str, Any]:
        """The request body; empty fields are left out."""
        result: dict[str, Any] = {}
        if self.input:
            result["input"] = self.input
        if self.model:
            result["model"] = self.model
        return result


@dataclass
class ResultCategories:
    hate: bool = False
    hate_threatening: bool = False
    self_harm: bool = False
    sexual: bool = False
    sexual_minors: bool = False
    violence: bool = False
    violence_graphic: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ResultCategories:
        data = data or {}
        return cls(
            hate=bool(data.get("hate")),
            hate_threatening=bool(data.get("hate/threatening")),
            self_harm=bool(data.get("self-harm")),
            sexual=bool(data.get("sexual")),
            sexual_minors=bool(data.get("sexual/minors")),
            violence=bool(data.get("violence")),
            violence_graphic=bool(data.get("violence/graphic")),
        )


@dataclass
class ResultCategoryScores:
    hate: float = 0.0
    hate_threatening: float = 0.0
    self_harm: float = 0.0
    sexual: float = 0.0
    sexual_minors: float = 0.0
    violence: float = 0.0
    violence_graphic: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ResultCategoryScores:
        data = data or {}
        return cls(
            hate=float(data.get("hate") or 0.0),
            hate_threatening=float(data.get("hate/threatening") or 0.0),
            self_harm=float(data.get("self-harm") or 0.0),
            sexual=float(data.get("sexual") or 0.0),
            sexual_minors=float(data.get("sexual/minors") or 0.0),
            violence=float(data.get("violence") or 0.0),
            violence_graphic=float(data.get("violence/graphic") or 0.0),
        )


@dataclass
class Result:
    categories: ResultCategories = field(default_factory=ResultCategories)
    category_scores: ResultCategoryScores = field(default_factory=ResultCategoryScores)
    flagged: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Result:
        return cls(
            categories=ResultCategories.from_dict(data.get("categories")),
            category_scores=ResultCategoryScores.from_dict(data.get("category_scores")),
            flagged=bool(data.get("flagged")),
        )


@dataclass
class ModerationResponse:
    id: str = ""
    model: str = ""
    results: list[Result] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModerationResponse:
        return cls(
            id=data.get("id") or "",
            model=data.get("model") or "",
            results=[Result.from_dict(item) for item in data.get("results") or []],
        )


def moderations(request: ModerationRequest) -> ApiRequest:
    """Request that checks text against the usage policies."""
    if request.model and request.model not in _VALID_MODELS:
        raise ModerationModelError()
    return _BUILDER.build("POST", "/moderations", request)