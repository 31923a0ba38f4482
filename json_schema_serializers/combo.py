"""
Combination serializers: oneOf/anyOf/allOf.

oneOf/anyOf are switching: a selector chooses, based on the value and the
options, which option serializes the value. allOf is merging: every option
serializes the value and the results are merged into one object.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Mapping

from .errors import DeclarationError
from .serializable import Serializable

if TYPE_CHECKING:
    from .hash_serializer import HashSerializer

KEY_NAME = {"one_of": "oneOf", "any_of": "anyOf", "all_of": "allOf"}

Selector = Callable[[Any, Mapping[str, Any]], str]


class ComboSerializer(Serializable):
    def __init__(self, kind: str, options: Mapping[str, Serializable], selector: Selector | None = None):
        if kind not in KEY_NAME:
            raise DeclarationError(f"Invalid combo serializer type: {kind}. Expected one of {list(KEY_NAME)}")
        self.kind = kind
        self.options = dict(options)
        self.selector = selector

    @property
    def merging(self) -> bool:
        return self.kind == "all_of"

    def schema(self, options=None):
        return {KEY_NAME[self.kind]: [delegate.schema(options) for delegate in self.options.values()]}

    def serialize(self, value, options=None):
        options = options or {}
        if self.merging:
            result = {}
            for delegate in self.options.values():
                result.update(delegate.serialize(value, options))
            return result

        if self.selector is None:
            raise DeclarationError(f"Must define a selector to use {self.kind} serializer")
        option_name = self.selector(value, options)
        if option_name not in self.options:
            raise DeclarationError(f"Invalid option selected: {option_name!r}. Declared options are: {list(self.options)}")
        return self.options[option_name].serialize(value, options)

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}:{delegate!r}" for name, delegate in self.options.items())
        return f"{type(self).__name__}<{inner}>"


class ComboBuilder:
    """
    Receives the declarations inside `one_of`/`any_of`/`all_of`.

    Example:
        @builder.one_of
        def payment(combo):
            combo.option("card", card_serializer)

            @combo.option("bank")
            def bank(h):
                h.attribute("iban", "string")

            combo.selector(lambda value, options: value["kind"])
    """

    def __init__(self, parent: HashSerializer, kind: str):
        self.parent = parent
        self.kind = kind
        self._options: dict[str, Serializable] = {}
        self._selector: Selector | None = None

    def option(self, name: str, serializer=None, build: Callable | None = None):
        """
        Declare an option, either with an existing serializer (or alias) or with a
        build function for an anonymous definition. Without either, returns a decorator.
        """
        if serializer is None and build is None:
            return lambda fn: self.option(name, build=fn)
        if name in self._options:
            raise DeclarationError(f"Option {name} declared twice for `{self.kind}`")

        if serializer is not None:
            serializer = self.parent.lookup_alias(serializer)
        else:
            serializer = self.parent.extend(build, include_attributes=False)
        self._options[name] = serializer
        return serializer

    def selector(self, fn: Selector) -> Selector:
        if self.kind == "all_of":
            raise DeclarationError("Defining a selector is not supported for `all_of`")
        self._selector = fn
        return fn

    def invoke(self, build: Callable[[ComboBuilder], Any]) -> ComboSerializer:
        build(self)
        if not self._options:
            raise DeclarationError(f"Must define at least one `option` for `{self.kind}`")
        return ComboSerializer(self.kind, self._options, self._selector)
