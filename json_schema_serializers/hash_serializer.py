"""
Serializers of type `object`, declared attribute by attribute.

A `HashSerializer` is an immutable definition. New definitions are derived
from existing ones with `extend`, which hands a `HashBuilder` to a build
function:

    @Serializer.extend
    def UserSerializer(d):
        d.defines("User")
        d.attribute("id", "integer")
        d.attribute("name", "string")

    UserSerializer.serialize(user)  # {"id": 1, "name": "Ada"}
    UserSerializer.schema()         # {"type": "object", "required": ["id", "name"], ...}
"""

from __future__ import annotations

import functools
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

from .attribute import Attribute, KeyTransform
from .errors import DeclarationError
from .schema_generator import HashSchemaGenerator
from .serializable import Serializable

if TYPE_CHECKING:
    from .builder import HashBuilder
    from .combo import ComboSerializer

logger = logging.getLogger(__name__)

# alias name -> (serializer, default attribute options)
AliasTable = Mapping[str, tuple[Serializable, Mapping[str, Any]]]


def lookup_alias(aliases: AliasTable, name) -> Serializable:
    if isinstance(name, Serializable):
        return name
    entry = aliases.get(str(name))
    if entry is None:
        raise DeclarationError(f"Serializer for alias not found: {name!r}")
    return entry[0]


def alias_default_options(aliases: AliasTable, name) -> dict[str, Any]:
    if isinstance(name, Serializable):
        return {}
    entry = aliases.get(str(name))
    return dict(entry[1]) if entry else {}


class SerializationContext:
    """
    The per-call binding of a definition to the value being serialized.

    Context methods registered with `HashBuilder.method` receive the context
    as their first argument, and are also reachable as bound attributes:

        @d.method
        def total(ctx):
            return ctx.object.price * ctx.options.get("quantity", 1)

        d.attribute("label", "string", if_=lambda ctx: ctx.total() > 0)
    """

    def __init__(self, definition: HashSerializer, obj: Any, options: Mapping[str, Any]):
        self.definition = definition
        self.object = obj
        self.options = options

    def has_method(self, name) -> bool:
        return isinstance(name, str) and name in self.definition.methods

    def call(self, name: str, *args) -> Any:
        return self.definition.methods[name](self, *args)

    def __getattr__(self, name: str):
        definition = self.__dict__.get("definition")
        if definition is None or name not in definition.methods:
            raise AttributeError(f"{type(self).__name__} has no attribute or method {name!r}")
        return functools.partial(definition.methods[name], self)


class HashSerializer(Serializable):
    """An immutable object-serializer definition."""

    def __init__(
        self,
        attributes: Iterable[Attribute] = (),
        aliases: AliasTable | None = None,
        attribute_defaults: Mapping[str, Any] | None = None,
        schema_options: Mapping[str, Any] | None = None,
        key_transform: KeyTransform | None = None,
        name: str | None = None,
        combo: ComboSerializer | None = None,
        methods: Mapping[str, Callable] | None = None,
        validation_options: Mapping[str, Any] | None = None,
    ):
        self._attributes = tuple(attributes)
        self._aliases = MappingProxyType(dict(aliases or {}))
        self._attribute_defaults = MappingProxyType(dict(attribute_defaults or {}))
        self._schema_options = MappingProxyType(dict(schema_options or {}))
        self._key_transform = key_transform
        self._name = name
        self._combo = combo
        self._methods = MappingProxyType(dict(methods or {}))
        self._validation_options = MappingProxyType(dict(validation_options or {}))

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        return self._attributes

    @property
    def aliases(self) -> AliasTable:
        return self._aliases

    @property
    def attribute_defaults(self) -> Mapping[str, Any]:
        return self._attribute_defaults

    @property
    def schema_options(self) -> Mapping[str, Any]:
        return self._schema_options

    @property
    def key_transform(self) -> KeyTransform | None:
        return self._key_transform

    @property
    def ref_name(self) -> str | None:
        return self._name

    @property
    def combo(self) -> ComboSerializer | None:
        return self._combo

    @property
    def methods(self) -> Mapping[str, Callable]:
        return self._methods

    @property
    def validation_options(self) -> Mapping[str, Any]:
        return self._validation_options

    def extend(self, build: Callable[[HashBuilder], Any] | None = None, *, include_attributes: bool = True) -> HashSerializer:
        """
        Derive a new definition from this one.

        Args:
            build: Function receiving the `HashBuilder` for the new definition
            include_attributes: Inherit attributes, attribute defaults, context methods
                and validation options (True for subclass-like extension, False for
                anonymous nested definitions)

        Returns:
            The new definition
        """
        from .builder import HashBuilder

        builder = HashBuilder(self, include_attributes=include_attributes)
        if build is not None:
            build(builder)
        definition = builder.build()
        logger.debug("Extended %r into %r", self, definition)
        return definition

    def lookup_alias(self, name) -> Serializable:
        return lookup_alias(self._aliases, name)

    def alias_default_options(self, name) -> dict[str, Any]:
        return alias_default_options(self._aliases, name)

    def serialize(self, value, options=None):
        options = dict(options or {})
        if self._combo is not None:
            return self._combo.serialize(value, options)

        context = SerializationContext(self, value, options)
        result = {}
        for attribute in self._attributes:
            if attribute.skip(context):
                continue
            result[attribute.key(context)] = attribute.serialize(context)
        return result

    def schema(self, options=None):
        return HashSchemaGenerator(self, options or {}).schema()

    def __repr__(self) -> str:
        if self._name:
            return f"{type(self).__name__}<{self._name}>"
        if self._combo is not None:
            return f"{type(self).__name__}<{self._combo!r}>"
        return f"{type(self).__name__}<{', '.join(a.name for a in self._attributes)}>"
