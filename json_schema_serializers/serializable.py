"""
The serializer capability and the wrapper serializers built on top of it.

Every serializer implements two operations:

- `serialize(value, options)` converts a value into a JSON-compatible value
- `schema(options)` describes every value `serialize` can produce as JSON Schema

Wrappers (`optional()`, `array()`, `with_options()`) decorate another
serializer and forward both operations with a transformation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from . import json_schema


class Serializable(ABC):
    """Base class for anything that can serialize a value and describe it with a schema."""

    @abstractmethod
    def serialize(self, value: Any, options: Mapping[str, Any] | None = None) -> Any:
        """
        Convert `value` into its serialized representation.

        Args:
            value: The object to serialize
            options: Arbitrary call-time options, forwarded to nested serializers

        Returns:
            A value built only from dicts, lists, strings, numbers, booleans and None
        """

    @abstractmethod
    def schema(self, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """
        Return the JSON Schema describing the serialized representation.

        Args:
            options: Extra schema keys (e.g. `description`) and generation flags (`use_refs`)
        """

    def serialize_list(self, values, options: Mapping[str, Any] | None = None) -> list[Any]:
        """Serialize each of `values` with this serializer."""
        return self.array().serialize(values, options)

    def optional(self) -> OptionalSerializer:
        """Get a version of this serializer which serializes None as None."""
        return OptionalSerializer(self)

    def array(self, **schema_args) -> ArraySerializer:
        """
        Get a version of this serializer which serializes a list of values.
        `schema_args` (e.g. `minItems`) are added to the array schema.
        """
        return ArraySerializer(self, schema_args)

    def with_options(self, **default_options) -> ScopedSerializer:
        """Get a version of this serializer with default options, overridable at call time."""
        return ScopedSerializer(self, default_options)

    @property
    def ref_name(self) -> str | None:
        return None

    @property
    def ref_path(self) -> str | None:
        if self.ref_name:
            return f"#/definitions/{self.ref_name}"
        return None

    @property
    def reference_schema(self) -> dict[str, str] | None:
        if self.ref_name:
            return {"$ref": self.ref_path}
        return None

    @property
    def validation_options(self) -> Mapping[str, Any]:
        return {}

    def validate(self, value: Any) -> None:
        """Check that `value` matches the fully inlined schema, or raise `jsonschema.ValidationError`."""
        json_schema.validate(self.schema({"use_refs": False}), value, self.validation_options)

    def is_valid(self, value: Any) -> bool:
        """Check if `value` matches the fully inlined schema."""
        return json_schema.is_valid(self.schema({"use_refs": False}), value, self.validation_options)


def _schema_types(schema: Mapping[str, Any]) -> list[str]:
    types = schema.get("type")
    if types is None:
        return []
    if isinstance(types, (list, tuple)):
        return [str(t) for t in types]
    return [str(types)]


class OptionalSerializer(Serializable):
    """
    Wrapper allowing a value to be None.

    By convention, aliases of optional serializers end with `?`, e.g. `"string?"`.
    """

    def __init__(self, delegate: Serializable):
        self.delegate = delegate

    def serialize(self, value, options=None):
        if value is None:
            return None
        return self.delegate.serialize(value, options)

    def schema(self, options=None):
        parent_schema = dict(self.delegate.schema(options))
        types = _schema_types(parent_schema)
        if "$ref" in parent_schema or not types or "object" in types or "array" in types:
            return {"oneOf": [{"type": "null"}, parent_schema]}

        if "null" not in types:
            types.append("null")
        parent_schema["type"] = types
        enum = parent_schema.get("enum")
        if enum is not None and None not in enum:
            parent_schema["enum"] = [*enum, None]
        return parent_schema

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{self.delegate!r}>"


class ArraySerializer(Serializable):
    """Wrapper serializing a collection of values with `delegate`."""

    def __init__(self, delegate: Serializable, array_options: Mapping[str, Any] | None = None):
        self.delegate = delegate
        self.array_options = dict(array_options or {})

    def serialize(self, value, options=None):
        return [self.delegate.serialize(item, options) for item in value]

    def schema(self, options=None):
        element_schema = self.delegate.schema(options)
        unsanitized = {**self.array_options, "type": "array", "items": element_schema}
        return json_schema.sanitize(unsanitized, json_schema.ARRAY_KEYS + json_schema.COMMON_KEYS)

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{self.delegate!r}>"


class ScopedSerializer(Serializable):
    """Wrapper providing default options to `delegate`. Call-time options take precedence."""

    def __init__(self, delegate: Serializable, default_options: Mapping[str, Any]):
        self.delegate = delegate
        self.default_options = dict(default_options)

    def serialize(self, value, options=None):
        return self.delegate.serialize(value, {**self.default_options, **(options or {})})

    def schema(self, options=None):
        return self.delegate.schema({**self.default_options, **(options or {})})

    @property
    def validation_options(self):
        return self.delegate.validation_options

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{self.delegate!r}>"
