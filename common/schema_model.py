"""
Parsed representation of an M3 JSON Schema document.

The converter only reads a handful of JSON Schema keywords plus the M3
extensions `x-position` and `x-dateTimeFormat`. Everything here is immutable;
a new document is built from the raw text on every conversion request.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

DEFAULT_POSITION = 999

Position = Union[int, float]


class ParseError(ValueError):
    """Raised when schema text cannot be read as a JSON object."""


def _optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _position(value: Any) -> Position:
    if value is None or isinstance(value, bool):
        return DEFAULT_POSITION
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_POSITION
    if not math.isfinite(number):
        return DEFAULT_POSITION
    # fractional positions keep their value so 1.5 sorts between 1 and 2
    return int(number) if number.is_integer() else number


@dataclass(frozen=True)
class PropertyDescriptor:
    """Metadata for one column, as declared under `properties`."""

    type: Optional[str] = None
    format: Optional[str] = None
    maximum: Any = None
    multiple_of: Any = None
    position: Position = DEFAULT_POSITION
    date_time_format: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_mapping(cls, raw: Any) -> "PropertyDescriptor":
        """Build a descriptor from a raw JSON value; non-objects give an empty descriptor."""
        if not isinstance(raw, Mapping):
            return cls()
        declared_type = raw.get("type")
        return cls(
            type=declared_type if isinstance(declared_type, str) else None,
            format=_optional_text(raw.get("format")),
            maximum=raw.get("maximum"),
            multiple_of=raw.get("multipleOf"),
            position=_position(raw.get("x-position")),
            date_time_format=_optional_text(raw.get("x-dateTimeFormat")),
            description=_optional_text(raw.get("description")),
        )


@dataclass(frozen=True)
class SchemaDocument:
    """A parsed M3 entity schema."""

    title: Optional[str] = None
    description: Optional[str] = None
    properties: Tuple[Tuple[str, PropertyDescriptor], ...] = ()
    required: Tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "SchemaDocument":
        raw_properties = raw.get("properties")
        if not isinstance(raw_properties, Mapping):
            raw_properties = {}
        raw_required = raw.get("required")
        if not isinstance(raw_required, (list, tuple)):
            raw_required = []
        title = raw.get("title")
        return cls(
            title=title if isinstance(title, str) and title else None,
            description=_optional_text(raw.get("description")),
            properties=tuple(
                (str(name), PropertyDescriptor.from_mapping(value))
                for name, value in raw_properties.items()
            ),
            required=tuple(str(name) for name in raw_required),
        )

    def is_required(self, name: str) -> bool:
        return name in self.required

    def ordered_properties(self) -> List[Tuple[str, PropertyDescriptor]]:
        """Return properties sorted by x-position, ties kept in declaration order."""
        indexed = list(enumerate(self.properties))
        indexed.sort(key=lambda item: (item[1][1].position, item[0]))
        return [entry for _, entry in indexed]


@dataclass(frozen=True)
class ColumnSpec:
    """A column derived from a property, ready to be rendered into SQL."""

    name: str
    sql_type: str
    not_null: bool = False
    comment: Optional[str] = None
    position: Position = DEFAULT_POSITION


def parse_schema_text(text: str) -> SchemaDocument:
    """
    Parse raw schema text into a SchemaDocument.

    Raises:
        ParseError: If the text is not valid JSON, nests too deeply, or is not a JSON object
    """
    try:
        raw = json.loads(text)
    except (TypeError, ValueError, RecursionError) as exc:
        # ValueError also covers JSONDecodeError and oversized integer literals
        raise ParseError(str(exc)) from exc
    if not isinstance(raw, Mapping):
        raise ParseError(
            f"Expected a JSON object at the top level, got {type(raw).__name__}"
        )
    return SchemaDocument.from_mapping(raw)


def as_schema_document(schema: Any) -> SchemaDocument:
    """Accept schema text, a parsed mapping, or an existing SchemaDocument."""
    if isinstance(schema, SchemaDocument):
        return schema
    if isinstance(schema, Mapping):
        return SchemaDocument.from_mapping(schema)
    return parse_schema_text(schema)
