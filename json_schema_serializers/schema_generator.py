"""
JSON Schema generation for hash serializers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from . import json_schema

if TYPE_CHECKING:
    from .hash_serializer import HashSerializer


class HashSchemaGenerator:
    """
    Generate the JSON Schema of a hash serializer.

    The `use_refs` option controls references to named definitions (see `defines`):

    - absent: the definition itself is inlined, named children are references
    - True: the definition itself is a reference if it has a name
    - False: everything is inlined

    Definitions declaring `one_of`/`any_of`/`all_of` always expand to their options.
    """

    def __init__(self, definition: HashSerializer, additional_options: Mapping[str, Any]):
        self.definition = definition
        self.additional_options = dict(additional_options)
        self.use_refs = self.additional_options.pop("use_refs", None)

    @property
    def child_use_refs(self) -> bool:
        return self.use_refs is not False

    def schema(self) -> dict[str, Any]:
        if self.definition.combo is not None:
            return self.definition.combo.schema({**self.additional_options, "use_refs": self.child_use_refs})
        if self.use_refs and self.definition.ref_path:
            return self.ref_schema()

        unsanitized = {**self.base_schema(), **self.definition.schema_options, **self.additional_options}
        return json_schema.sanitize(unsanitized, json_schema.OBJECT_KEYS)

    def ref_schema(self) -> dict[str, Any]:
        return json_schema.sanitize({"$ref": self.definition.ref_path, **self.additional_options}, json_schema.OBJECT_KEYS)

    def base_schema(self) -> dict[str, Any]:
        return {
            "required": self.required_keys(),
            "type": "object",
            "properties": self.property_schemas(),
        }

    def required_keys(self) -> list[str]:
        return [
            attribute.schema_key(self.definition)
            for attribute in self.definition.attributes
            if attribute.required and not attribute.hidden
        ]

    def property_schemas(self) -> dict[str, Any]:
        properties = {}
        for attribute in self.definition.attributes:
            if attribute.hidden:
                continue
            properties[attribute.schema_key(self.definition)] = attribute.schema({"use_refs": self.child_use_refs})
        return properties
