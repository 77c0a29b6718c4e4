"""Assistant conversation threads."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from oaiclient.api_request import ApiRequest, RequestBuilder

_BUILDER = RequestBuilder()
_ASSISTANTS_BETA = {"OpenAI-Beta": "assistants=v1"}
_THREADS = "/threads"


class ThreadMessageRole(str, enum.Enum):
    USER = "user"


@dataclass
class ThreadMessage:
    role: ThreadMessageRole | str = ThreadMessageRole.USER
    content: str = ""
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        role = self.role.value if isinstance(self.role, ThreadMessageRole) else self.role
        result: dict[str, Any] = {"role": role, "content": self.content}
        if self.file_ids:
            result["file_ids"] = list(self.file_ids)
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result


@dataclass
class ThreadRequest:
    messages: list[ThreadMessage] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """The request body; empty fields are left out."""
        result: dict[str, Any] = {}
        if self.messages:
            result["messages"] = [message.to_dict() for message in self.messages]
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result


@dataclass
class ModifyThreadRequest:
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """The request body; metadata is always sent."""
        return {"metadata": self.metadata}


@dataclass
class Thread:
    id: str = ""
    object: str = ""
    created_at: int = 0
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Thread:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            metadata=data.get("metadata"),
        )


@dataclass
class ThreadDeleteResponse:
    id: str = ""
    object: str = ""
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ThreadDeleteResponse:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
        )


def create_thread(request: ThreadRequest) -> ApiRequest:
    """Request that creates a thread."""
    return _BUILDER.build("POST", _THREADS, request, _ASSISTANTS_BETA)


def retrieve_thread(thread_id: str) -> ApiRequest:
    """Request that fetches a thread."""
    return _BUILDER.build("GET", f"{_THREADS}/{thread_id}", headers=_ASSISTANTS_BETA)


def modify_thread(thread_id: str, request: ModifyThreadRequest) -> ApiRequest:
    """Request that replaces a thread's metadata."""
    return _BUILDER.build("POST", f"{_THREADS}/{thread_id}", request, _ASSISTANTS_BETA)


def delete_thread(thread_id: str) -> ApiRequest:
    """Request that deletes a thread."""
    return _BUILDER.build("DELETE", f"{_THREADS}/{thread_id}", headers=_ASSISTANTS_BETA)