"""
The declaration DSL for hash serializers.

A `HashBuilder` collects declarations for one definition and is finalized
into an immutable `HashSerializer` by `build()`. Nested scopes
(`hash_attribute`, `array_attribute`, combo options) get their own builder,
which inherits aliases, key transform and schema options, but no attributes.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from . import json_schema
from .attribute import Attribute, KeyTransform
from .combo import ComboBuilder, ComboSerializer
from .errors import DeclarationError
from .hash_serializer import HashSerializer, alias_default_options, lookup_alias
from .serializable import Serializable
from .utils import KEY_INFLECTIONS

logger = logging.getLogger(__name__)

BuildFunction = Callable[["HashBuilder"], Any]


class HashBuilder:
    """Collects the declarations of a hash serializer."""

    def __init__(self, parent: HashSerializer | None = None, include_attributes: bool = True):
        self._attributes: list[Attribute] = []
        self._aliases: dict[str, tuple[Serializable, dict[str, Any]]] = {}
        self._attribute_defaults: dict[str, Any] = {}
        self._schema_options: dict[str, Any] = {}
        self._methods: dict[str, Callable] = {}
        self._validation_options: dict[str, Any] = {}
        self._key_transform: KeyTransform | None = None
        self._name: str | None = None
        self._combo: ComboSerializer | None = None
        self._desc: str | None = None
        if parent is not None:
            self._inherit_from(parent, include_attributes)

    def _inherit_from(self, parent: HashSerializer, include_attributes: bool) -> None:
        self._aliases.update(parent.aliases)
        if include_attributes:
            self._attributes.extend(parent.attributes)
            self._attribute_defaults.update(parent.attribute_defaults)
            self._methods.update(parent.methods)
            self._validation_options.update(parent.validation_options)
        self._key_transform = self._key_transform or parent.key_transform
        self._schema_options.update(parent.schema_options)

    def build(self) -> HashSerializer:
        """Finalize the declarations into an immutable definition."""
        return HashSerializer(
            attributes=self._attributes,
            aliases=self._aliases,
            attribute_defaults=self._attribute_defaults,
            schema_options=self._schema_options,
            key_transform=self._key_transform,
            name=self._name,
            combo=self._combo,
            methods=self._methods,
            validation_options=self._validation_options,
        )

    # Object-level declarations

    def defines(self, name: str) -> None:
        """Set the name used to reference this definition (`#/definitions/<name>`)."""
        self._name = str(name)

    def object_description(self, description: str) -> None:
        self._schema_options["description"] = description.rstrip("\n")

    def schema_options(self, **options) -> dict[str, Any]:
        """Add keys to the object schema, e.g. `minProperties`."""
        self._schema_options.update(options)
        return dict(self._schema_options)

    def attribute_defaults(self, **options) -> dict[str, Any]:
        """Set options applied to every attribute declared afterwards."""
        self._attribute_defaults.update(options)
        return dict(self._attribute_defaults)

    def validation_options(self, **options) -> dict[str, Any]:
        """Set options for `validate`/`is_valid`: `strict`, `check_formats`."""
        self._validation_options.update(options)
        return dict(self._validation_options)

    def transform_keys(self, transform: KeyTransform) -> KeyTransform:
        """
        Transform output keys with a callable `(key) -> key`, or with the name of
        a context method `(context, key) -> key`.
        """
        self._key_transform = transform
        return transform

    def key_inflection(self, inflection: str) -> None:
        """Transform output keys with one of `camel`, `camel_lower`, `dash`, `underscore`, `unaltered`."""
        if inflection not in KEY_INFLECTIONS:
            raise DeclarationError(f"Unknown key inflection {inflection!r}. Expected one of {list(KEY_INFLECTIONS)}")
        self.transform_keys(KEY_INFLECTIONS[inflection])

    def method(self, fn: Callable | None = None, *, name: str | None = None):
        """
        Register a context method, usable as attribute source, condition or key
        transform. It receives the `SerializationContext` as first argument.
        """
        if fn is None:
            return lambda f: self.method(f, name=name)
        self._methods[name or fn.__name__] = fn
        return fn

    # Aliases

    def register_alias(
        self,
        name: str,
        serializer,
        with_optional: bool = True,
        override: bool = False,
        aliases=(),
        default_options=None,
    ) -> str:
        """
        Register a name for a serializer, usable in place of the serializer in `attribute`.

        Args:
            name: The alias
            serializer: The serializer (or an existing alias)
            with_optional: Also register `<name>?` for `serializer.optional()`
            override: Allow replacing an alias that is already registered
            aliases: Other names for the same serializer
            default_options: Attribute options applied whenever the alias is used
        """
        name = str(name)
        if name in self._aliases:
            if not override:
                raise DeclarationError(
                    f"Serializer alias {name} has already been registered. "
                    "If you wish to override the alias, pass option `override=True`"
                )
            logger.debug("Overriding serializer alias %s", name)

        serializer = self.lookup_alias(serializer)
        default_options = dict(default_options or {})
        self._aliases[name] = (serializer, default_options)
        if with_optional:
            self.register_alias(
                f"{name}?", serializer.optional(), with_optional=False, override=override, default_options=default_options
            )
        for alias_name in aliases:
            self.register_alias(
                alias_name, serializer, with_optional=with_optional, override=override, default_options=default_options
            )
        return name

    def lookup_alias(self, name) -> Serializable:
        return lookup_alias(self._aliases, name)

    # Attributes

    def desc(self, description: str) -> None:
        """Describe the next declared attribute."""
        self._desc = description.rstrip("\n")

    def attribute(self, name: str, serializer, **options) -> Attribute:
        """
        Declare an attribute.

        Args:
            name: The key in the output, typically the attribute name on the value
            serializer: A serializer, or the alias of one
            **options: `source`, `if_`, `default`, `required`, `hidden`, `key_transform`,
                `allow_missing_key`, `optional`, and any JSON Schema keys (`format`, `enum`, ...)
                or serializer options (`round`, ...)
        """
        description = {"description": self._desc} if self._desc is not None else {}
        self._desc = None
        options = {
            **self._attribute_defaults,
            **alias_default_options(self._aliases, serializer),
            **description,
            **options,
        }
        optional = options.pop("optional", False)
        serializer = self.lookup_alias(serializer)
        if optional:
            serializer = serializer.optional()

        attribute = Attribute(name, serializer, options)
        for index, existing in enumerate(self._attributes):
            if existing.name == attribute.name:
                self._attributes[index] = attribute
                break
        else:
            self._attributes.append(attribute)
        return attribute

    def hash_attribute(self, name: str, build: BuildFunction | None = None, **options):
        """
        Declare an attribute serialized by an anonymous nested definition.
        Without `build`, returns a decorator.
        """
        if build is None:
            return lambda fn: self.hash_attribute(name, fn, **options)

        optional = options.pop("optional", False)
        serializer = self.build().extend(build, include_attributes=False)
        if optional:
            serializer = serializer.optional()
        self.attribute(name, serializer, **options)
        return serializer

    def array_attribute(self, name: str, build: Callable[[ArrayBuilder], Any] | None = None, **options):
        """
        Declare a list attribute; `build` receives an `ArrayBuilder` and must call `items`.
        Array schema keys (`minItems`, ...) go to the array, other options to the attribute.
        Without `build`, returns a decorator.
        """
        if build is None:
            return lambda fn: self.array_attribute(name, fn, **options)

        description = self._desc
        self._desc = None
        item_serializer, item_options = ArrayBuilder(self.build()).invoke(build)

        optional = options.pop("optional", False)
        array_keys = json_schema.ARRAY_KEYS + json_schema.COMMON_KEYS
        array_options = {k: v for k, v in options.items() if k in array_keys}
        attribute_options = {k: v for k, v in options.items() if k not in array_keys}
        if description is not None:
            array_options = {"description": description, **array_options}

        serializer = item_serializer.array(**array_options)
        if optional:
            serializer = serializer.optional()
        self.attribute(name, serializer, **{**item_options, **attribute_options})
        return serializer

    def remove_attribute(self, name: str) -> None:
        """Remove an attribute, typically one inherited from the parent definition."""
        for attribute in self._attributes:
            if attribute.name == str(name):
                self._attributes.remove(attribute)
                return
        raise DeclarationError(f"Cannot remove undefined attribute {name}")

    # Combinations

    def one_of(self, build: Callable[[ComboBuilder], Any]) -> ComboSerializer:
        return self._combo_serializer("one_of", build)

    def any_of(self, build: Callable[[ComboBuilder], Any]) -> ComboSerializer:
        return self._combo_serializer("any_of", build)

    def all_of(self, build: Callable[[ComboBuilder], Any]) -> ComboSerializer:
        return self._combo_serializer("all_of", build)

    def _combo_serializer(self, kind: str, build: Callable[[ComboBuilder], Any]) -> ComboSerializer:
        if self._combo is not None:
            raise DeclarationError("Can only define one of `one_of`/`all_of`/`any_of`")
        self._combo = ComboBuilder(self.build(), kind).invoke(build)
        return self._combo


class ArrayBuilder:
    """Receives the declarations inside `array_attribute`."""

    def __init__(self, parent: HashSerializer):
        self.parent = parent
        self._called = False
        self._serializer: Serializable | None = None
        self._options: dict[str, Any] = {}

    def items(self, serializer=None, build: BuildFunction | None = None, **options):
        """
        Declare the serializer of the elements: a serializer, an alias, or a build
        function for an anonymous definition. Without either, returns a decorator.
        """
        if serializer is None and build is None:
            return lambda fn: self.items(build=fn, **options)
        if self._called:
            raise DeclarationError("Called `items` twice in `array_attribute`")
        self._called = True

        optional = options.pop("optional", False)
        if serializer is not None:
            options = {**self.parent.alias_default_options(serializer), **options}
            serializer = self.parent.lookup_alias(serializer)
        else:
            serializer = self.parent.extend(build, include_attributes=False)
        if optional:
            serializer = serializer.optional()

        self._serializer = serializer
        self._options = options
        return serializer

    def invoke(self, build: Callable[[ArrayBuilder], Any]) -> tuple[Serializable, dict[str, Any]]:
        build(self)
        if not self._called:
            raise DeclarationError("Must call `items` for `array_attribute`")
        return self._serializer, self._options
