"""
Assemble serializer schemas into a single JSON Schema document.

Targets are given as `package.module:Name` or `path/to/file.py:Name`. Each
serializer becomes an entry of `definitions`, keyed by its reference name
(see `defines`) or, failing that, by the attribute name it was loaded from,
so that the `$ref`s produced by nested attributes resolve inside the document.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import Any, Mapping

from .config import ExportConfig
from .serializable import Serializable

logger = logging.getLogger(__name__)


def _load_module(module_name: str) -> ModuleType:
    if not module_name.endswith(".py"):
        return importlib.import_module(module_name)

    path = Path(module_name)
    if not path.exists():
        raise ValueError(f"File not found: {module_name}")
    spec = importlib.util.spec_from_file_location(path.stem, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def load_target(target: str) -> tuple[str, Serializable]:
    """
    Load a serializer from a target string.

    Args:
        target: `package.module:Name` or `path/to/file.py:Name`

    Returns:
        The definition name and the serializer

    Raises:
        ValueError: if the target is malformed or does not name a serializer
    """
    module_name, sep, attr = target.rpartition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Invalid target {target!r}, expected `module:Name` or `file.py:Name`")

    try:
        module = _load_module(module_name)
    except ImportError as err:
        raise ValueError(f"Cannot import {module_name!r}: {err}") from err

    serializer = getattr(module, attr, None)
    if not isinstance(serializer, Serializable):
        raise ValueError(f"{target!r} is not a serializer")
    logger.debug("Loaded %r from %s", serializer, target)
    return serializer.ref_name or attr, serializer


def build_schema_document(serializers: Mapping[str, Serializable], config: ExportConfig) -> dict[str, Any]:
    """
    Build the schema document for `serializers`.

    Args:
        serializers: Serializers keyed by definition name
        config: Export configuration

    Returns:
        The document, with a `definitions` entry per serializer
    """
    options = {} if config.use_refs else {"use_refs": False}
    document: dict[str, Any] = {}
    if config.schema_uri:
        document["$schema"] = config.schema_uri

    if config.root:
        if config.root not in serializers:
            raise ValueError(f"Unknown root definition {config.root!r}. Available definitions: {list(serializers)}")
        document.update(serializers[config.root].schema(options))

    document["definitions"] = {name: serializer.schema(options) for name, serializer in serializers.items()}
    return document
