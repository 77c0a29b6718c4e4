"""A minimal JSON Schema description for function-calling parameters."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from typing import Any


class DataType(str, enum.Enum):
    OBJECT = "object"
    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"
    ARRAY = "array"
    NULL = "null"
    BOOLEAN = "boolean"


@dataclass
class Definition:
    """A (possibly nested) JSON Schema; ``properties`` is always emitted."""

    type: DataType | str | None = None
    description: str = ""
    enum: list[str] = field(default_factory=list)
    properties: dict[str, Definition] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    items: Definition | None = None

    def to_dict(self) -> dict[str, Any]:
        """The schema as plain JSON-ready data."""
        result: dict[str, Any] = {}
        if self.type:
            result["type"] = self.type.value if isinstance(self.type, DataType) else self.type
        if self.description:
            result["description"] = self.description
        if self.enum:
            result["enum"] = list(self.enum)
        result["properties"] = {name: prop.to_dict() for name, prop in (self.properties or {}).items()}
        if self.required:
            result["required"] = list(self.required)
        if self.items is not None:
            result["items"] = self.items.to_dict()
        return result

    def to_json(self) -> str:
        """The schema as compact JSON text."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)