"""
The base definition for model serializers, with the primitive aliases registered.
"""

from __future__ import annotations

from . import primitives
from .builder import HashBuilder
from .hash_serializer import HashSerializer


def register_default_aliases(d: HashBuilder) -> None:
    d.register_alias("string", primitives.STRING)
    d.register_alias("integer", primitives.INTEGER)
    d.register_alias("float", primitives.FLOAT, aliases=["decimal"], default_options={"format": "float"})
    d.register_alias("double", primitives.FLOAT, default_options={"format": "double"})
    d.register_alias("boolean", primitives.BOOLEAN, aliases=["bool"])
    d.register_alias("arbitrary_hash", primitives.ARBITRARY_HASH, aliases=["hash", "dict", "map"])

    # ISO 8601 by default; register an override for other formats
    d.register_alias("datetime", primitives.DATETIME)
    d.register_alias("date", primitives.DATE)


Serializer = HashSerializer().extend(register_default_aliases)
