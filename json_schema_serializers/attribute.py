"""
A single declared property of a hash serializer.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Callable, Mapping, Union

from .errors import MissingSourceError

if TYPE_CHECKING:
    from .hash_serializer import HashSerializer, SerializationContext
    from .serializable import Serializable

# A callable `(key) -> key`, or the name of a context method `(context, key) -> key`
# or of a `str` method such as "upper"
KeyTransform = Union[Callable[[str], str], str]

# A callable `(context) -> bool`, or the name of a context method or of a
# method/attribute/key of the value being serialized
Condition = Union[Callable[["SerializationContext"], Any], str]

_MISSING = object()


def transform_key(transform: KeyTransform | None, key: str, context: SerializationContext | None = None) -> str:
    if transform is None:
        return key
    if callable(transform):
        return transform(key)
    if context is not None and context.has_method(transform):
        return context.call(transform, key)
    return getattr(key, transform)()


def _call_accessor(value: Any) -> Any:
    # methods, builtin methods and staticmethods are read by calling them
    return value() if inspect.isroutine(value) else value


class Attribute:
    """
    One output property of a hash serializer.

    Attributes:
        name: The key in the output (before key transforms)
        serializer: The serializer producing and describing the value
        source: The context method, attribute or key the value is read from
        condition: Optional predicate gating inclusion in the output
        key_transform: Optional override of the definition's key transform
        required: Whether the key is listed in the schema's `required`
        options: Passthrough options, forwarded to `serializer` for both operations
    """

    def __init__(self, name: str, serializer: Serializable, options: Mapping[str, Any]):
        options = dict(options)
        self.name = str(name)
        self.serializer = serializer
        self.source = options.pop("source", None) or self.name
        self.condition: Condition | None = options.pop("if_", None)
        self.key_transform: KeyTransform | None = options.pop("key_transform", None)
        explicit_required = options.pop("required", None)
        self.options = options
        if explicit_required is None:
            self.required = not (self.hidden or self.condition is not None)
        else:
            self.required = bool(explicit_required)

    @property
    def hidden(self) -> bool:
        return bool(self.options.get("hidden"))

    @property
    def default(self) -> Any:
        return self.options.get("default")

    @property
    def allow_missing_key(self) -> bool:
        return bool(self.options.get("allow_missing_key"))

    def key(self, context: SerializationContext) -> str:
        """The output key for this attribute."""
        return transform_key(self.key_transform or context.definition.key_transform, self.name, context)

    def schema_key(self, definition: HashSerializer) -> str:
        """The property name for this attribute in the schema of `definition`."""
        transform = self.key_transform or definition.key_transform
        # method based transforms depend on call-time options
        if isinstance(transform, str) and transform in definition.methods:
            return self.name
        return transform_key(transform, self.name)

    def skip(self, context: SerializationContext) -> bool:
        if self.condition is None:
            return False
        return not self._check_condition(context)

    def serialize(self, context: SerializationContext) -> Any:
        value = self.value_for(context)
        if value is None:
            value = self.default
        return self.serializer.serialize(value, {**self.options, **context.options})

    def schema(self, additional_options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.serializer.schema({**self.options, **(additional_options or {})})

    def value_for(self, context: SerializationContext) -> Any:
        obj = context.object
        try:
            if context.has_method(self.source):
                return context.call(self.source)
            if isinstance(obj, Mapping):
                return self._value_from_mapping(obj, context)

            value = getattr(obj, str(self.source), _MISSING)
            if value is _MISSING:
                if self.allow_missing_key:
                    return None
                raise MissingSourceError(
                    f"Unknown method or key `{self.source}` for attribute `{self.name}` of {context.definition!r}",
                    self.source,
                    self.name,
                )
            return _call_accessor(value)
        except TypeError as err:
            raise TypeError(f"Problem accessing `{self.source}` on {obj!r} in {context.definition!r}: {err}") from err

    def _value_from_mapping(self, obj: Mapping, context: SerializationContext) -> Any:
        if self.source in obj:
            return obj[self.source]
        if str(self.source) in obj:
            return obj[str(self.source)]
        if self.allow_missing_key:
            return None
        raise MissingSourceError(
            f"Key `{self.source}` missing from mapping for attribute `{self.name}` in {context.definition!r}. "
            "If this is intentional, specify option `allow_missing_key=True`",
            self.source,
            self.name,
        )

    def _check_condition(self, context: SerializationContext) -> Any:
        if callable(self.condition):
            return self.condition(context)
        if context.has_method(self.condition):
            return context.call(self.condition)
        obj = context.object
        is_mapping = isinstance(obj, Mapping)
        value = obj.get(self.condition, _MISSING) if is_mapping else getattr(obj, self.condition, _MISSING)
        if value is _MISSING:
            raise MissingSourceError(
                f"Unknown method or key `{self.condition}` in condition of attribute `{self.name}` of {context.definition!r}",
                self.condition,
                self.name,
            )
        return value if is_mapping else _call_accessor(value)

    def __repr__(self) -> str:
        return f"Attribute<{self.name}: {self.serializer!r}>"
