"""
Mapping of scalar values to DynamoDB attribute values.

Only a fixed set of kinds is supported: text, numbers, booleans and
timestamps (stored as .NET-style tick counts). Anything else raises
UnsupportedAttributeTypeError and is left for the caller to handle.
"""
import dataclasses
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping

from utils.exceptions import UnsupportedAttributeTypeError

# 0001-01-01T00:00:00, the origin of tick counts
TICKS_EPOCH = datetime(1, 1, 1)
TICKS_PER_SECOND = 10_000_000


class AttributeKind(Enum):
    """Supported scalar kinds."""

    NULL = 'null'
    STRING = 'string'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    TIMESTAMP = 'timestamp'


def attribute_kind(value: Any) -> AttributeKind:
    """
    Classify a value into one of the supported attribute kinds.

    Raises:
        UnsupportedAttributeTypeError: If the value's type is not supported
    """
    if value is None:
        return AttributeKind.NULL
    if isinstance(value, str):
        return AttributeKind.STRING
    # bool must be checked before int
    if isinstance(value, bool):
        return AttributeKind.BOOLEAN
    if isinstance(value, (int, float, Decimal)):
        return AttributeKind.NUMBER
    if isinstance(value, datetime):
        return AttributeKind.TIMESTAMP
    raise UnsupportedAttributeTypeError(value)


def to_ticks(value: datetime) -> int:
    """Number of 100-nanosecond intervals since 0001-01-01 (wall clock)."""
    delta = value.replace(tzinfo=None) - TICKS_EPOCH
    return (
        delta.days * 86_400 * TICKS_PER_SECOND
        + delta.seconds * TICKS_PER_SECOND
        + delta.microseconds * 10
    )


def to_attribute_value(value: Any) -> Dict[str, Any]:
    """
    Convert a scalar into a DynamoDB attribute value.

    Examples:
        "a" -> {"S": "a"}, 3 -> {"N": "3"}, True -> {"BOOL": True}
    """
    kind = attribute_kind(value)

    if kind is AttributeKind.NULL:
        return {'NULL': True}
    if kind is AttributeKind.STRING:
        return {'S': value}
    if kind is AttributeKind.BOOLEAN:
        return {'BOOL': value}
    if kind is AttributeKind.TIMESTAMP:
        return {'N': str(to_ticks(value))}
    return {'N': str(value)}


def to_expression_attribute_values(parameters: Any) -> Dict[str, Dict[str, Any]]:
    """
    Build ExpressionAttributeValues from a mapping or a dataclass instance.

    Each field ``name`` becomes the placeholder ``:name``.
    """
    if dataclasses.is_dataclass(parameters) and not isinstance(parameters, type):
        values = {
            field.name: getattr(parameters, field.name)
            for field in dataclasses.fields(parameters)
        }
    elif isinstance(parameters, Mapping):
        values = dict(parameters)
    else:
        raise UnsupportedAttributeTypeError(parameters)

    return {f':{name}': to_attribute_value(value) for name, value in values.items()}
