"""
Exceptions raised by serializer definitions.
"""

from __future__ import annotations


class DeclarationError(Exception):
    """Raised when a serializer is declared or used incorrectly.

    This can happen when:
    - An attribute references an alias that was never registered
    - An alias is registered twice without `override=True`
    - More than one of `one_of`/`any_of`/`all_of` is declared on a definition
    - A `one_of`/`any_of` serializer has no selector, or the selector picks an unknown option
    - An `array_attribute` never declares its `items`
    - A value being serialized lacks the method or key an attribute or its condition reads
    - A datetime is serialized with an unsupported `fraction_digits`
    """

    pass


class MissingSourceError(DeclarationError):
    """Raised when the value being serialized has no method or key for an attribute's source."""

    def __init__(self, message: str, source: str, attribute_name: str):
        super().__init__(message)
        self.source = source
        self.attribute_name = attribute_name
