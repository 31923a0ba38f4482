"""
Configuration for exporting schema documents.
"""

from __future__ import annotations

from dataclasses import dataclass

from .json_schema import DRAFT_07_URI


@dataclass
class ExportConfig:
    """Configuration options for schema document export."""

    # Reference named definitions from nested attributes instead of inlining them
    use_refs: bool = True

    # Value of the "$schema" key (empty = omitted)
    schema_uri: str = DRAFT_07_URI

    # Indentation of the JSON output
    indent: int = 2

    # Add a "$comment" with the command line that generated the document
    add_generation_comment: bool = False

    # Name of the definition used as the document root (empty = definitions only)
    root: str = ""

    @staticmethod
    def from_dict(d: dict) -> ExportConfig:
        """Create a config from a dictionary."""
        config = ExportConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "use_refs": self.use_refs,
            "schema_uri": self.schema_uri,
            "indent": self.indent,
            "add_generation_comment": self.add_generation_comment,
            "root": self.root,
        }
