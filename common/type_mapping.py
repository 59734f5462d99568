"""Map M3 JSON Schema property descriptors to Snowflake column types."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, Mapping, Optional, Union

from common.schema_model import PropertyDescriptor

DATETIME = "DATETIME"
NUMBER = "NUMBER"
BOOLEAN = "BOOLEAN"
INTEGER = "INTEGER"
STRING = "STRING"

MAX_PRECISION = 38
EPOCH_MILLIS = "epoch-millis"


def _numeric_text(value: Any) -> str:
    """Render a number or numeric string the way it reads in the schema file."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, float):
        # integral floats (500.0) read as plain integers in the source documents
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value).strip()


def fraction_digits(value: Any) -> Optional[int]:
    """Digits after the decimal point, or None when the value has no fractional part."""
    text = _numeric_text(value)
    if not text:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    # never expand to positional form; exponents can be huge
    exponent = number.as_tuple().exponent
    if exponent >= 0:
        return None
    return -exponent


def digit_count(value: Any) -> Optional[int]:
    """
    Count the significant digit positions of a numeric value.

    Scientific notation `m e x` counts |x| plus the digits of the mantissa.
    Returns None when the value cannot be read as a number.
    """
    text = _numeric_text(value).replace("E", "e")
    if not text:
        return None
    if "e" in text:
        mantissa, _, exponent = text.partition("e")
        try:
            shift = abs(int(exponent))
        except ValueError:
            return None
        return shift + sum(ch.isdigit() for ch in mantissa)
    digits = sum(ch.isdigit() for ch in text)
    return digits or None


def resolve_number_type(descriptor: PropertyDescriptor) -> str:
    """Pick NUMBER or NUMBER(p, s) for a `type: number` property."""
    scale = None
    if descriptor.multiple_of:
        scale = fraction_digits(descriptor.multiple_of)
    if scale is None and descriptor.maximum:
        scale = fraction_digits(descriptor.maximum)
    if scale is None:
        return NUMBER

    precision = MAX_PRECISION
    if descriptor.maximum:
        precision = digit_count(descriptor.maximum) or MAX_PRECISION
    precision = min(precision, MAX_PRECISION)
    return f"{NUMBER}({precision}, {scale})"


def _constant(sql_type: str) -> Callable[[PropertyDescriptor], str]:
    return lambda _descriptor: sql_type


@dataclass(frozen=True)
class TypeRule:
    """One entry of the type-mapping decision list."""

    key: str
    description: str
    matches: Callable[[PropertyDescriptor], bool]
    resolve: Callable[[PropertyDescriptor], str]


# Order matters: the first matching rule wins.
TYPE_RULES: List[TypeRule] = [
    TypeRule(
        key="date_time",
        description="format: date-time is stored as a calendar value.",
        matches=lambda d: d.format == "date-time",
        resolve=_constant(DATETIME),
    ),
    TypeRule(
        key="epoch_millis",
        description="Millisecond epoch timestamps are stored as plain numerics.",
        matches=lambda d: d.date_time_format == EPOCH_MILLIS,
        resolve=_constant(NUMBER),
    ),
    TypeRule(
        key="boolean",
        description="JSON booleans.",
        matches=lambda d: d.type == "boolean",
        resolve=_constant(BOOLEAN),
    ),
    TypeRule(
        key="integer",
        description="JSON integers, whatever their maximum.",
        matches=lambda d: d.type == "integer",
        resolve=_constant(INTEGER),
    ),
    TypeRule(
        key="number",
        description="JSON numbers; scale comes from multipleOf or maximum.",
        matches=lambda d: d.type == "number",
        resolve=resolve_number_type,
    ),
    TypeRule(
        key="string",
        description="JSON strings.",
        matches=lambda d: d.type == "string",
        resolve=_constant(STRING),
    ),
    TypeRule(
        key="object",
        description="Nested objects are stored serialized.",
        matches=lambda d: d.type == "object",
        resolve=_constant(STRING),
    ),
]

FALLBACK_RULE = TypeRule(
    key="fallback",
    description="Missing or unrecognized type.",
    matches=lambda d: True,
    resolve=_constant(STRING),
)


def _as_descriptor(descriptor: Union[PropertyDescriptor, Mapping[str, Any], Any]) -> PropertyDescriptor:
    if isinstance(descriptor, PropertyDescriptor):
        return descriptor
    return PropertyDescriptor.from_mapping(descriptor)


def matching_rule(descriptor: Union[PropertyDescriptor, Mapping[str, Any]]) -> TypeRule:
    """Return the first rule that applies to the descriptor."""
    resolved = _as_descriptor(descriptor)
    for rule in TYPE_RULES:
        if rule.matches(resolved):
            return rule
    return FALLBACK_RULE


def map_type(descriptor: Union[PropertyDescriptor, Mapping[str, Any]]) -> str:
    """Return the Snowflake column type for a property descriptor."""
    resolved = _as_descriptor(descriptor)
    return matching_rule(resolved).resolve(resolved)
