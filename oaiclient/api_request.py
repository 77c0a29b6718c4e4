"""Request construction and JSON encoding for API calls."""

from __future__ import annotations

import enum
import json
import string
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, BinaryIO
from urllib.parse import urlencode, urlsplit

_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")
_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _default(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, enum.Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def json_marshal(value: Any) -> bytes:
    """Encode ``value`` as compact JSON with HTML-sensitive characters escaped."""
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_default)
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def json_unmarshal(data: bytes | str) -> Any:
    """Decode a JSON document."""
    return json.loads(data)


def query_suffix(params: Mapping[str, Any]) -> str:
    """A ``?key=value`` suffix of the non-None params sorted by key, or ``""``."""
    items = sorted((key, str(value)) for key, value in params.items() if value is not None)
    if not items:
        return ""
    return "?" + urlencode(items)


@dataclass
class ApiRequest:
    """An HTTP request ready to be sent."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | BinaryIO | None = None


class RequestBuilder:
    """Turns a method, URL, body and headers into an :class:`ApiRequest`."""

    def __init__(self, marshal: Callable[[Any], bytes] = json_marshal) -> None:
        self._marshal = marshal

    def build(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> ApiRequest:
        """Build a request; readable bodies pass through, anything else is marshalled."""
        payload: bytes | BinaryIO | None = None
        if body is not None:
            payload = body if hasattr(body, "read") else self._marshal(body)

        method = method or "GET"
        if any(ch not in _TOKEN_CHARS for ch in method):
            raise ValueError(f"invalid method {method!r}")
        if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
            raise ValueError(f"invalid control character in URL {url!r}")
        urlsplit(url)

        return ApiRequest(
            method=method,
            url=url,
            headers=dict(headers) if headers is not None else {},
            body=payload,
        )