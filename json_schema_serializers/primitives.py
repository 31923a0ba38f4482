"""
Built-in serializers for primitive values.

Each primitive merges the schema options it receives over its base schema
and keeps only the keys allowed for its JSON type. String and number
serializers turn None into "", 0 and 0.0.
"""

from __future__ import annotations

import copy
import dataclasses
from datetime import datetime, time
from typing import Any, Mapping

from . import json_schema
from .errors import DeclarationError
from .serializable import Serializable

# fraction_digits option -> datetime.isoformat timespec
_TIMESPECS = {0: "seconds", 3: "milliseconds", 6: "microseconds"}


class PrimitiveSerializer(Serializable):
    """Base class for serializers of a single JSON primitive."""

    base_schema: Mapping[str, Any] = {}
    allowed_keys: tuple[str, ...] = json_schema.COMMON_KEYS

    def schema(self, options=None):
        return json_schema.sanitize({**copy.deepcopy(self.base_schema), **(options or {})}, self.allowed_keys)

    def __repr__(self) -> str:
        return type(self).__name__


class StringSerializer(PrimitiveSerializer):
    base_schema = {"type": "string"}
    allowed_keys = json_schema.STRING_KEYS

    def serialize(self, value, options=None):
        return "" if value is None else str(value)


class IntegerSerializer(PrimitiveSerializer):
    base_schema = {"type": "integer"}
    allowed_keys = json_schema.NUMBER_KEYS

    def serialize(self, value, options=None):
        return 0 if value is None else int(value)


class FloatSerializer(PrimitiveSerializer):
    """Serializes numbers as floats, rounded to the `round` option when given."""

    base_schema = {"type": "number", "format": "float"}
    allowed_keys = json_schema.NUMBER_KEYS

    def serialize(self, value, options=None):
        result = 0.0 if value is None else float(value)
        digits = (options or {}).get("round")
        if digits is not None:
            result = round(result, digits)
        return result


class BooleanSerializer(PrimitiveSerializer):
    base_schema = {"type": "boolean"}
    allowed_keys = json_schema.COMMON_KEYS

    def serialize(self, value, options=None):
        return bool(value)


class ISO8601DateSerializer(PrimitiveSerializer):
    """Serializes dates as ISO 8601, e.g. `date(2020, 1, 24)` -> `"2020-01-24"`."""

    base_schema = {"type": "string", "format": "date"}
    allowed_keys = json_schema.STRING_KEYS

    def serialize(self, value, options=None):
        if isinstance(value, datetime):
            value = value.date()
        return value.isoformat()


class ISO8601DateTimeSerializer(PrimitiveSerializer):
    """
    Serializes datetimes as ISO 8601, e.g. `"2020-01-24T20:13:39.000-05:00"`.

    The `fraction_digits` option (0, 3 or 6, default 3) controls the precision of
    seconds; other values raise `DeclarationError`.
    """

    base_schema = {"type": "string", "format": "date-time"}
    allowed_keys = json_schema.STRING_KEYS

    def serialize(self, value, options=None):
        digits = (options or {}).get("fraction_digits")
        digits = 3 if digits is None else digits
        if digits not in _TIMESPECS:
            raise DeclarationError(f"Unsupported fraction_digits {digits!r}. Expected one of {list(_TIMESPECS)}")
        timespec = _TIMESPECS[digits]
        if not isinstance(value, datetime):
            value = datetime.combine(value, time())
        return value.isoformat(timespec=timespec)


class ArbitraryHashSerializer(PrimitiveSerializer):
    """Serializes a mapping with arbitrary keys, stringifying keys recursively."""

    base_schema = {
        "type": "object",
        "properties": {},
        "required": [],
        "additionalProperties": {"type": "string"},
    }
    allowed_keys = json_schema.OBJECT_KEYS

    def serialize(self, value, options=None):
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            value = dataclasses.asdict(value)
        return self.as_json(dict(value))

    def as_json(self, obj):
        if isinstance(obj, (list, tuple)):
            return [self.as_json(item) for item in obj]
        if isinstance(obj, Mapping):
            return {str(key): self.as_json(item) for key, item in obj.items()}
        return obj


STRING = StringSerializer()
INTEGER = IntegerSerializer()
FLOAT = FloatSerializer()
BOOLEAN = BooleanSerializer()
DATE = ISO8601DateSerializer()
DATETIME = ISO8601DateTimeSerializer()
ARBITRARY_HASH = ArbitraryHashSerializer()
