"""
Key case conversion used by `key_inflection`.
"""

import re

# Regex pattern to split text into words, handling camelCase boundaries and acronyms
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(_normalize_separators(text))


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word.capitalize() for word in words if word)


def camelize(text: str) -> str:
    """Convert snake_case, dash-case or camelCase text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "first 3 rows" -> "First3Rows"
    """
    if not text:
        return ""
    return _capitalize_and_join(_split_into_words(text))


def camelize_lower(text: str) -> str:
    """Convert text to camelCase, e.g. "first_name" -> "firstName"."""
    camel = camelize(text)
    return camel[:1].lower() + camel[1:]


def underscore(text: str) -> str:
    """Convert text to snake_case, e.g. "firstName" -> "first_name", "HTTPServer" -> "http_server"."""
    return "_".join(word.lower() for word in _split_into_words(text))


def dasherize(text: str) -> str:
    """Convert text to dash-case, e.g. "first_name" -> "first-name"."""
    return "-".join(word.lower() for word in _split_into_words(text))


def unaltered(text: str) -> str:
    return text


KEY_INFLECTIONS = {
    "camel": camelize,
    "camel_lower": camelize_lower,
    "dash": dasherize,
    "underscore": underscore,
    "unaltered": unaltered,
}
