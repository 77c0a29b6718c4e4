"""Collects the raw bytes of an error body that arrives inside an event stream."""

from __future__ import annotations

import io
from typing import Protocol


class _ErrorBuffer(Protocol):
    def write(self, data: bytes) -> int: ...

    def getvalue(self) -> bytes: ...


class ErrorAccumulatorWriteError(Exception):
    """Raised when the underlying buffer refuses a write."""


class ErrorAccumulator:
    """Appends stream lines that are not data events, to be decoded as an error later."""

    def __init__(self, buffer: _ErrorBuffer | None = None) -> None:
        self._buffer: _ErrorBuffer = io.BytesIO() if buffer is None else buffer

    def write(self, data: bytes) -> None:
        """Append ``data`` to the buffer."""
        try:
            self._buffer.write(data)
        except Exception as exc:
            raise ErrorAccumulatorWriteError(f"error accumulator write error, {exc}") from exc

    def getvalue(self) -> bytes:
        """Return everything written so far, or ``b""`` when nothing was."""
        return bytes(self._buffer.getvalue())