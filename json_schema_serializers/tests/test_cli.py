#!/usr/bin/env python3

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from json_schema_serializers.cli_utils import reconstruct_command_line
from json_schema_serializers.config import ExportConfig
from json_schema_serializers.export import build_schema_document, load_target
from json_schema_serializers.json_schema import DRAFT_07_URI
from json_schema_serializers.json_schema_serializers import json_schema_serializers

SAMPLE = Path(__file__).parent / "test_data" / "sample_serializers.py"
USER = f"{SAMPLE}:UserSerializer"
ORGANIZATION = f"{SAMPLE}:OrganizationSerializer"


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Test command reconstruction without active Click context (fallback)"""
        assert reconstruct_command_line(json_schema_serializers) == "json_schema_serializers"


class TestExport:
    """Test loading serializers and assembling documents"""

    def test_load_target_from_file(self):
        name, serializer = load_target(USER)

        assert name == "User"
        assert serializer.ref_name == "User"

    def test_load_target_from_module(self):
        name, serializer = load_target("json_schema_serializers.serializer:Serializer")

        assert name == "Serializer"
        assert serializer.schema() == {"type": "object", "required": [], "properties": {}}

    def test_load_target_uses_attribute_name_for_anonymous_definitions(self):
        name, _ = load_target(f"{SAMPLE}:AnonymousSerializer")
        assert name == "AnonymousSerializer"

    @pytest.mark.parametrize(
        "target",
        [
            "no_separator",
            f"{SAMPLE}:",
            f"{SAMPLE}:NOT_A_SERIALIZER",
            f"{SAMPLE}:Missing",
            "missing_file.py:UserSerializer",
            "not.a.real.module:UserSerializer",
        ],
    )
    def test_invalid_targets(self, target):
        with pytest.raises(ValueError):
            load_target(target)

    def test_build_document(self):
        serializers = dict([load_target(USER), load_target(ORGANIZATION)])
        document = build_schema_document(serializers, ExportConfig())

        assert document["$schema"] == DRAFT_07_URI
        assert list(document["definitions"]) == ["User", "Organization"]
        assert document["definitions"]["Organization"]["properties"]["ceo"] == {"$ref": "#/definitions/User"}
        assert document["definitions"]["User"]["type"] == "object"

    def test_build_document_with_root(self):
        serializers = dict([load_target(USER), load_target(ORGANIZATION)])
        document = build_schema_document(serializers, ExportConfig(root="Organization", schema_uri=""))

        assert "$schema" not in document
        assert document["type"] == "object"
        assert document["properties"]["employees"]["items"] == {"$ref": "#/definitions/User"}

    def test_build_document_unknown_root(self):
        with pytest.raises(ValueError, match="Unknown root definition"):
            build_schema_document(dict([load_target(USER)]), ExportConfig(root="Organization"))

    def test_config_round_trip(self):
        config = ExportConfig.from_dict({"use_refs": False, "indent": 4, "unknown": True})

        assert config.use_refs is False
        assert config.indent == 4
        assert config.to_dict()["schema_uri"] == DRAFT_07_URI


class TestCommand:
    """Test the json_schema_serializers command"""

    def test_export_to_stdout(self):
        result = CliRunner().invoke(json_schema_serializers, [USER, ORGANIZATION])

        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        assert set(document["definitions"]) == {"User", "Organization"}
        assert document["definitions"]["Organization"]["properties"]["ceo"] == {"$ref": "#/definitions/User"}

    def test_no_refs(self):
        result = CliRunner().invoke(json_schema_serializers, [ORGANIZATION, "--no-refs"])

        assert result.exit_code == 0, result.output
        ceo = json.loads(result.output)["definitions"]["Organization"]["properties"]["ceo"]
        assert ceo["type"] == "object"

    def test_root(self):
        result = CliRunner().invoke(json_schema_serializers, [USER, ORGANIZATION, "--root", "Organization"])

        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        assert document["required"] == ["ceo", "employees"]
        assert "Organization" in document["definitions"]

    def test_generation_comment(self):
        result = CliRunner().invoke(json_schema_serializers, [USER, "--add-generation-comment"])

        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        assert document["$comment"].startswith("Generated by json_schema_serializers")
        assert "--add-generation-comment" in document["$comment"]

    def test_output_file(self, tmp_path):
        output = tmp_path / "schema.json"
        result = CliRunner().invoke(json_schema_serializers, [USER, "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())["definitions"]["User"]["required"] == ["id", "name"]

    def test_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"use_refs": False, "root": "Organization", "indent": 4}))

        result = CliRunner().invoke(json_schema_serializers, [USER, ORGANIZATION, "-c", str(config)])

        assert result.exit_code == 0, result.output
        assert result.output.startswith('{\n    "$schema"')
        assert json.loads(result.output)["properties"]["ceo"]["type"] == "object"

    def test_invalid_target(self):
        result = CliRunner().invoke(json_schema_serializers, [f"{SAMPLE}:NOT_A_SERIALIZER"])

        assert result.exit_code == 2
        assert "is not a serializer" in result.output

    def test_unknown_root(self):
        result = CliRunner().invoke(json_schema_serializers, [USER, "--root", "Nope"])

        assert result.exit_code == 2
        assert "Unknown root definition" in result.output

    def test_targets_are_required(self):
        result = CliRunner().invoke(json_schema_serializers, [])
        assert result.exit_code == 2


if __name__ == "__main__":
    pytest.main([__file__])
