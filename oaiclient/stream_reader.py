"""Reads server-sent events from a streaming response."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import IO, Any, Generic, TypeVar

from oaiclient.accumulator import ErrorAccumulator
from oaiclient.api_request import json_unmarshal

T = TypeVar("T")

_HEADER_DATA = b"data: "
_ERROR_PREFIX = b'data: {"error":'
_DONE = b"[DONE]"


class TooManyEmptyStreamMessagesError(Exception):
    """Raised when the stream sends more non-data lines than allowed in a row."""

    def __init__(self) -> None:
        super().__init__("stream has sent too many empty messages")


class StreamAPIError(Exception):
    """An error object the server sent in place of stream events."""

    def __init__(
        self,
        message: str = "",
        type: str = "",
        param: Any = None,
        code: Any = None,
    ) -> None:
        super().__init__(f"error, {message}")
        self.message = message
        self.type = type
        self.param = param
        self.code = code


class StreamReader(Generic[T]):
    """Yields decoded ``data:`` events until ``data: [DONE]``; ``recv`` raises EOFError then."""

    def __init__(
        self,
        reader: IO[bytes],
        decode: Callable[[Any], T] | None = None,
        empty_messages_limit: int = 300,
        accumulator: ErrorAccumulator | None = None,
        unmarshal: Callable[[bytes], Any] = json_unmarshal,
    ) -> None:
        self._reader = reader
        self._decode = decode
        self._empty_messages_limit = empty_messages_limit
        self._accumulator = accumulator if accumulator is not None else ErrorAccumulator()
        self._unmarshal = unmarshal
        self._finished = False

    def recv(self) -> T:
        """The next event; raises EOFError once the stream is over."""
        if self._finished:
            raise EOFError("stream finished")
        return self._process_lines()

    def _convert(self, value: Any) -> Any:
        if self._decode is None:
            return value
        return self._decode(value)

    def _process_lines(self) -> T:
        empty_messages = 0
        has_error_prefix = False
        while True:
            raw = self._reader.readline()
            at_end = not raw.endswith(b"\n")
            if at_end or has_error_prefix:
                error = self._unmarshal_error()
                if error is not None:
                    raise error
                if at_end:
                    raise EOFError("stream ended")
                return self._convert({})

            line = raw.strip()
            if line.startswith(_ERROR_PREFIX):
                has_error_prefix = True
            if not line.startswith(_HEADER_DATA) or has_error_prefix:
                if has_error_prefix:
                    line = line[len(_HEADER_DATA):]
                self._accumulator.write(line)
                empty_messages += 1
                if empty_messages > self._empty_messages_limit:
                    raise TooManyEmptyStreamMessagesError()
                continue

            payload = line[len(_HEADER_DATA):]
            if payload == _DONE:
                self._finished = True
                raise EOFError("stream finished")
            return self._convert(self._unmarshal(payload))

    def _unmarshal_error(self) -> StreamAPIError | None:
        data = self._accumulator.getvalue()
        if not data:
            return None
        try:
            parsed = self._unmarshal(data)
        except Exception:
            return None
        if not isinstance(parsed, dict):
            return None
        detail = parsed.get("error")
        if not isinstance(detail, dict):
            return StreamAPIError()
        return StreamAPIError(
            message=detail.get("message") or "",
            type=detail.get("type") or "",
            param=detail.get("param"),
            code=detail.get("code"),
        )

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.recv()
            except EOFError:
                return

    def close(self) -> None:
        """Close the underlying response body."""
        self._reader.close()

    def __enter__(self) -> StreamReader[T]:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()