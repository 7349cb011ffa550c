"""
JSON serialization helpers for payloads and response bodies.
"""
import dataclasses
import datetime as dt
import json
from decimal import Decimal
from enum import Enum
from typing import Any


def json_default(obj: Any) -> Any:
    """JSON serializer for dataclasses, timestamps, enums and Decimal values."""
    if isinstance(obj, Decimal):
        if obj % 1 == 0:
            return int(obj)
        return float(obj)
    if isinstance(obj, (dt.datetime, dt.date)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def to_json(obj: Any) -> str:
    return json.dumps(obj, default=json_default)
