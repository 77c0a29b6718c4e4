"""Messages inside assistant threads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from oaiclient.api_request import ApiRequest, RequestBuilder, query_suffix

_BUILDER = RequestBuilder()
_ASSISTANTS_BETA = {"OpenAI-Beta": "assistants=v1"}


def _messages_url(thread_id: str) -> str:
    return f"/threads/{thread_id}/messages"


@dataclass
class MessageText:
    value: str = ""
    annotations: list[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageText:
        return cls(value=data.get("value") or "", annotations=list(data.get("annotations") or []))


@dataclass
class ImageFile:
    file_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImageFile:
        return cls(file_id=data.get("file_id") or "")


@dataclass
class MessageContent:
    type: str = ""
    text: MessageText | None = None
    image_file: ImageFile | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageContent:
        text = data.get("text")
        image_file = data.get("image_file")
        return cls(
            type=data.get("type") or "",
            text=MessageText.from_dict(text) if text is not None else None,
            image_file=ImageFile.from_dict(image_file) if image_file is not None else None,
        )


@dataclass
class Message:
    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    role: str = ""
    content: list[MessageContent] = field(default_factory=list)
    file_ids: list[str] = field(default_factory=list)
    assistant_id: str | None = None
    run_id: str | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            thread_id=data.get("thread_id") or "",
            role=data.get("role") or "",
            content=[MessageContent.from_dict(item) for item in data.get("content") or []],
            file_ids=list(data.get("file_ids") or []),
            assistant_id=data.get("assistant_id"),
            run_id=data.get("run_id"),
            metadata=data.get("metadata"),
        )


@dataclass
class MessagesList:
    messages: list[Message] = field(default_factory=list)
    object: str = ""
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessagesList:
        return cls(
            messages=[Message.from_dict(item) for item in data.get("data") or []],
            object=data.get("object") or "",
            first_id=data.get("first_id"),
            last_id=data.get("last_id"),
            has_more=bool(data.get("has_more")),
        )


@dataclass
class MessageRequest:
    role: str = ""
    content: str = ""
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """The request body; empty optional fields are left out."""
        result: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.file_ids:
            result["file_ids"] = list(self.file_ids)
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result


@dataclass
class MessageFile:
    id: str = ""
    object: str = ""
    created_at: int = 0
    message_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageFile:
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            message_id=data.get("message_id") or "",
        )


@dataclass
class MessageFilesList:
    message_files: list[MessageFile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MessageFilesList:
        return cls(message_files=[MessageFile.from_dict(item) for item in data.get("data") or []])


def create_message(thread_id: str, request: MessageRequest) -> ApiRequest:
    """Request that adds a message to a thread."""
    return _BUILDER.build("POST", _messages_url(thread_id), request, _ASSISTANTS_BETA)


def list_messages(
    thread_id: str,
    limit: int | None = None,
    order: str | None = None,
    after: str | None = None,
    before: str | None = None,
) -> ApiRequest:
    """Request that lists a thread's messages, optionally paged."""
    suffix = query_suffix({"limit": limit, "order": order, "after": after, "before": before})
    return _BUILDER.build("GET", _messages_url(thread_id) + suffix, headers=_ASSISTANTS_BETA)


def retrieve_message(thread_id: str, message_id: str) -> ApiRequest:
    """Request that fetches one message."""
    return _BUILDER.build("GET", f"{_messages_url(thread_id)}/{message_id}", headers=_ASSISTANTS_BETA)


def modify_message(thread_id: str, message_id: str, metadata: dict[str, Any]) -> ApiRequest:
    """Request that replaces a message's metadata."""
    return _BUILDER.build(
        "POST", f"{_messages_url(thread_id)}/{message_id}", metadata, _ASSISTANTS_BETA
    )


def retrieve_message_file(thread_id: str, message_id: str, file_id: str) -> ApiRequest:
    """Request that fetches one file attached to a message."""
    return _BUILDER.build(
        "GET",
        f"{_messages_url(thread_id)}/{message_id}/files/{file_id}",
        headers=_ASSISTANTS_BETA,
    )


def list_message_files(thread_id: str, message_id: str) -> ApiRequest:
    """Request that lists the files attached to a message."""
    return _BUILDER.build(
        "GET", f"{_messages_url(thread_id)}/{message_id}/files", headers=_ASSISTANTS_BETA
    )