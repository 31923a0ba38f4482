"""JSON Schema Serializers

Declarative serializers converting objects into JSON-compatible values,
with a JSON Schema of the output derived from the same declarations.
"""

__version__ = "1.0.1"

from .builder import ArrayBuilder, HashBuilder
from .combo import ComboBuilder, ComboSerializer
from .errors import DeclarationError, MissingSourceError
from .hash_serializer import HashSerializer, SerializationContext
from .serializable import ArraySerializer, OptionalSerializer, ScopedSerializer, Serializable
from .serializer import Serializer

__all__ = [
    "Serializer",
    "HashSerializer",
    "HashBuilder",
    "ArrayBuilder",
    "ComboBuilder",
    "ComboSerializer",
    "SerializationContext",
    "Serializable",
    "OptionalSerializer",
    "ArraySerializer",
    "ScopedSerializer",
    "DeclarationError",
    "MissingSourceError",
]
