"""Builds multipart/form-data request bodies."""

from __future__ import annotations

import os
import secrets
import string
from typing import BinaryIO, IO

_CHUNK_SIZE = 64 * 1024
_BOUNDARY_CHARS = frozenset(string.ascii_letters + string.digits + "'()+_,-./:=? ")
_QUOTE_TRIGGERS = frozenset('()<>@,;:\\"/[]?= ')


def _escape_quotes(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _base_name(name: str) -> str:
    """Last element of a slash-separated path; "." for an empty one."""
    if not name:
        return "."
    stripped = name.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _check_boundary(boundary: str) -> None:
    if not 1 <= len(boundary) <= 70:
        raise ValueError("multipart: invalid boundary length")
    if boundary.endswith(" "):
        raise ValueError("multipart: boundary must not end with a space")
    if any(ch not in _BOUNDARY_CHARS for ch in boundary):
        raise ValueError("multipart: invalid boundary character")


class FormBuilder:
    """Writes form fields and files to a binary writer as multipart parts."""

    def __init__(self, body: BinaryIO, boundary: str | None = None) -> None:
        if boundary is None:
            boundary = secrets.token_hex(30)
        else:
            _check_boundary(boundary)
        self._body = body
        self._boundary = boundary
        self._started = False

    @property
    def boundary(self) -> str:
        return self._boundary

    def _begin_part(self, headers: dict[str, str]) -> None:
        if self._started:
            lines = [f"\r\n--{self._boundary}\r\n"]
        else:
            lines = [f"--{self._boundary}\r\n"]
        lines.extend(f"{key}: {value}\r\n" for key, value in sorted(headers.items()))
        lines.append("\r\n")
        self._body.write("".join(lines).encode("utf-8"))
        self._started = True

    def _create_form_file(self, fieldname: str, reader: IO, filename: str) -> None:
        if not filename:
            raise ValueError("filename cannot be empty")
        disposition = (
            f'form-data; name="{_escape_quotes(fieldname)}"; '
            f'filename="{_escape_quotes(filename)}"'
        )
        self._begin_part(
            {
                "Content-Disposition": disposition,
                "Content-Type": "application/octet-stream",
            }
        )
        while chunk := reader.read(_CHUNK_SIZE):
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            self._body.write(chunk)

    def add_file(self, fieldname: str, file: IO) -> None:
        """Add an open file as a part, named by the file's own name."""
        name = file.name
        if isinstance(name, bytes):
            name = os.fsdecode(name)
        self._create_form_file(fieldname, file, str(name))

    def add_file_reader(self, fieldname: str, reader: IO, filename: str) -> None:
        """Add the contents of ``reader`` as a part named by the base of ``filename``."""
        self._create_form_file(fieldname, reader, _base_name(filename))

    def write_field(self, fieldname: str, value: str) -> None:
        """Add a plain text field."""
        self._begin_part({"Content-Disposition": f'form-data; name="{_escape_quotes(fieldname)}"'})
        self._body.write(value.encode("utf-8"))

    def close(self) -> None:
        """Write the closing boundary."""
        self._body.write(f"\r\n--{self._boundary}--\r\n".encode("utf-8"))

    def content_type(self) -> str:
        """The Content-Type header value for this body."""
        boundary = self._boundary
        if any(ch in _QUOTE_TRIGGERS for ch in boundary):
            boundary = f'"{boundary}"'
        return f"multipart/form-data; boundary={boundary}"