"""
JSON Schema vocabulary and validation helpers.

The allow-lists below restrict which keys each kind of serializer may emit,
so that arbitrary attribute options (e.g. `round`, `allow_missing_key`) never
leak into generated schemas. Validation is delegated to the `jsonschema`
package.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from jsonschema.validators import Draft7Validator, validator_for

from .errors import DeclarationError

DRAFT_07_URI = "http://json-schema.org/draft-07/schema#"

COMMON_KEYS = ("description", "type", "format", "example", "examples", "default", "enum")
STRING_KEYS = COMMON_KEYS + ("minLength", "maxLength", "pattern")
NUMBER_KEYS = COMMON_KEYS + ("multipleOf", "minimum", "exclusiveMinimum", "maximum", "exclusiveMaximum")
ARRAY_KEYS = ("type", "items", "minItems", "maxItems", "uniqueItems")
OBJECT_KEYS = COMMON_KEYS + (
    "properties",
    "required",
    "$ref",
    "additionalProperties",
    "propertyNames",
    "minProperties",
    "maxProperties",
    "dependencies",
    "patternProperties",
)

# Options understood by `validate` / `is_valid`
VALIDATION_OPTIONS = ("strict", "check_formats")


def sanitize(schema: Mapping[Any, Any], allowed_keys: Iterable[str]) -> dict[str, Any]:
    """
    Restrict a schema fragment to the allowed keys.

    Keys are stringified, keys outside `allowed_keys` are dropped, and so are
    keys whose value is None. The order of `schema` is preserved.

    Args:
        schema: The unsanitized schema fragment
        allowed_keys: The keys permitted for this kind of value

    Returns:
        A new dictionary
    """
    allowed = set(allowed_keys)
    result = {}
    for key, value in schema.items():
        key = str(key)
        if key in allowed and value is not None:
            result[key] = value
    return result


def strict_schema(schema: Any) -> Any:
    """
    Return a copy of `schema` where every object requires all of its declared
    properties and forbids additional ones, recursively.
    """
    if isinstance(schema, list):
        return [strict_schema(item) for item in schema]
    if not isinstance(schema, dict):
        return schema

    result = {}
    for key, value in schema.items():
        if key == "properties" and isinstance(value, dict):
            result[key] = {name: strict_schema(prop) for name, prop in value.items()}
        elif key in ("items", "oneOf", "anyOf", "allOf"):
            result[key] = strict_schema(value)
        else:
            result[key] = value

    if isinstance(result.get("properties"), dict):
        result["required"] = list(result["properties"])
        result["additionalProperties"] = False
    return result


def _prepare(schema: dict[str, Any], options: Mapping[str, Any] | None):
    options = dict(options or {})
    unknown = sorted(set(options) - set(VALIDATION_OPTIONS))
    if unknown:
        raise DeclarationError(f"Unknown validation options: {unknown}. Supported options are: {list(VALIDATION_OPTIONS)}")

    if options.get("strict"):
        schema = strict_schema(schema)
    validator_class = validator_for(schema, default=Draft7Validator)
    format_checker = validator_class.FORMAT_CHECKER if options.get("check_formats") else None
    return validator_class(schema, format_checker=format_checker)


def validate(schema: dict[str, Any], value: Any, options: Mapping[str, Any] | None = None) -> None:
    """
    Check that `value` matches `schema`.

    Raises:
        jsonschema.ValidationError: if the value does not match
        DeclarationError: if `options` contains unsupported keys
    """
    _prepare(schema, options).validate(value)


def is_valid(schema: dict[str, Any], value: Any, options: Mapping[str, Any] | None = None) -> bool:
    """Check if `value` matches `schema`."""
    return _prepare(schema, options).is_valid(value)

