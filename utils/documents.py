"""
Conversion between records, JSON-like documents and DynamoDB attribute maps.

Records are dataclasses. A field can be stored under another attribute name
or excluded from storage with ``dynamodb_field``. Documents hold what a JSON
serializer would produce: timestamps become ISO-8601 strings and numbers are
kept as Decimal so boto3 can serialize them.
"""
import dataclasses
import datetime as dt
import typing
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from boto3.dynamodb.types import Binary, TypeDeserializer, TypeSerializer
from dateutil.parser import isoparse

from utils.exceptions import UnsupportedAttributeTypeError

T = TypeVar('T')

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def dynamodb_field(name: Optional[str] = None, ignore: bool = False, **kwargs) -> Any:
    """
    Declare a dataclass field with its storage attribute name.

    Args:
        name: Attribute name used in DynamoDB (defaults to the field name)
        ignore: Never persist this field
        **kwargs: Passed through to dataclasses.field
    """
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata['dynamodb_name'] = name
    metadata['dynamodb_ignore'] = ignore
    return dataclasses.field(metadata=metadata, **kwargs)


def _storage_name(field: dataclasses.Field) -> str:
    return field.metadata.get('dynamodb_name') or field.name


def _is_ignored(field: dataclasses.Field) -> bool:
    return bool(field.metadata.get('dynamodb_ignore'))


@dataclasses.dataclass(kw_only=True)
class DynamoDBRecord:
    """Base record keyed by a partition key stored as ``PK``."""

    pk: Any = dynamodb_field(name='PK')
    is_latest: bool = dynamodb_field(ignore=True, default=False, init=False)

    def mark_as_latest(self) -> None:
        self.is_latest = True


def _normalize(value: Any) -> Any:
    if value is None or isinstance(value, (str, bool, int, Decimal, bytes, Binary)):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, (dt.datetime, dt.date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return _normalize(value.value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_document(value)
    if isinstance(value, Mapping):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_normalize(v) for v in value]
    raise UnsupportedAttributeTypeError(value)


def to_document(item: Any) -> Dict[str, Any]:
    """
    Convert a record (dataclass instance or mapping) to a document.

    Raises:
        UnsupportedAttributeTypeError: If the item or one of its values
            cannot be represented
    """
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return {
            _storage_name(field): _normalize(getattr(item, field.name))
            for field in dataclasses.fields(item)
            if not _is_ignored(field)
        }
    if isinstance(item, Mapping):
        return {str(k): _normalize(v) for k, v in item.items()}
    raise UnsupportedAttributeTypeError(item)


def to_attribute_map(item: Any) -> Dict[str, Dict[str, Any]]:
    """Convert a record to a DynamoDB attribute map."""
    return {
        name: _serializer.serialize(value)
        for name, value in to_document(item).items()
    }


def _restore(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value % 1 == 0 else float(value)
    if isinstance(value, Binary):
        return value.value
    if isinstance(value, dict):
        return {k: _restore(v) for k, v in value.items()}
    if isinstance(value, (list, set)):
        return [_restore(v) for v in value]
    return value


def from_attribute_map(item: Mapping[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Convert a DynamoDB attribute map to a plain document."""
    return {name: _restore(_deserializer.deserialize(value)) for name, value in item.items()}


def _is_datetime_hint(hint: Any) -> bool:
    if hint is dt.datetime:
        return True
    return dt.datetime in typing.get_args(hint)


def from_document(data: Dict[str, Any], item_type: Optional[Type[T]] = None) -> Any:
    """
    Rebuild a record from a document.

    Dataclass fields are looked up by their storage name; ISO-8601 strings
    are parsed back into datetimes for fields annotated as datetime. Other
    types are called with the document as keyword arguments.
    """
    if item_type is None:
        return data

    if not dataclasses.is_dataclass(item_type):
        return item_type(**data)

    hints = typing.get_type_hints(item_type)
    kwargs = {}
    for field in dataclasses.fields(item_type):
        if not field.init or _is_ignored(field):
            continue
        name = _storage_name(field)
        if name not in data:
            continue
        value = data[name]
        if isinstance(value, str) and _is_datetime_hint(hints.get(field.name)):
            value = isoparse(value)
        kwargs[field.name] = value
    return item_type(**kwargs)
