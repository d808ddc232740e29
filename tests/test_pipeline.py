"""Tests for the full pipeline."""

import json
from pathlib import Path

import pytest

from schema_extract.builder import RootTypeNotFoundError
from schema_extract.models import PipelineConfig, SchemaKind
from schema_extract.pipeline import SourceLayoutError, run_pipeline, run_scan

FIXTURES = Path(__file__).parent / "fixtures"
SOURCE_DIR = FIXTURES / "amper"


def test_scan():
    graph = run_scan(PipelineConfig(source_dir=SOURCE_DIR))

    assert "Module" in graph.classes
    assert "AndroidSettings" in graph.classes
    assert "SettingsBuilder" not in graph.classes
    assert "Helper" not in graph.classes
    assert set(graph.enums) == {"DependencyScope", "Platform", "ProductType"}
    assert graph.classes["Dependency"].subclasses == ["ExternalDependency", "LocalDependency"]
    assert graph.classes["Base"].subclasses == ["Module", "Template"]


def test_scan_progress_callback():
    calls = []
    run_scan(
        PipelineConfig(source_dir=SOURCE_DIR),
        progress=lambda stage, current, total: calls.append((stage, current, total)),
    )
    assert calls[0] == ("Scanning", 0, 7)
    assert calls[-1] == ("Scanning", 7, 7)


def test_missing_schema_directory(tmp_path):
    with pytest.raises(SourceLayoutError, match="Expected to find"):
        run_scan(PipelineConfig(source_dir=tmp_path))


def test_full_pipeline_module(tmp_path):
    output = tmp_path / "module-schema.json"
    result = run_pipeline(PipelineConfig(source_dir=SOURCE_DIR, output_path=output))

    assert result.root_type == "Module"
    assert result.output_path == output
    schema = json.loads(output.read_text())
    assert result.definition_count == len(schema["$defs"])

    defs = schema["$defs"]
    assert list(defs)[0] == "Module"
    module = defs["Module"]
    assert module["title"] == "Module configuration (module.yaml)"
    assert list(module["properties"]) == [
        "product", "aliases", "mainClass", "platforms", "dependencies", "settings",
    ]
    assert module["required"] == ["product", "platforms"]
    assert set(module["patternProperties"]) == {
        "^(test-)?dependencies(@.+)?$",
        "^(test-)?settings(@.+)?$",
    }

    platforms = module["properties"]["platforms"]
    assert platforms["items"]["enum"] == ["common", "jvm", "android", "iosArm64"]
    assert platforms["items"]["x-intellij-enum-order-sensitive"] is True
    assert platforms["title"] == "Platforms the module is built for"
    assert platforms["x-intellij-metadata"] == {"platforms": ["Platform.JVM", "Platform.ANDROID"]}

    aliases = module["properties"]["aliases"]
    assert aliases["items"]["patternProperties"] == {"^[^@+:]+$": {"type": "string"}}

    assert module["properties"]["mainClass"]["x-intellij-metadata"] == {
        "productTypes": ["ProductType.JVM_APP"],
    }

    assert defs["Dependency"] == {
        "anyOf": [
            {"$ref": "#/$defs/ExternalDependency"},
            {"$ref": "#/$defs/LocalDependency"},
        ],
    }
    external = defs["ExternalDependency"]
    assert list(external["properties"]) == ["coordinates", "exported", "scope"]
    assert external["properties"]["scope"]["enum"] == ["all", "compile-only", "runtime-only"]
    assert external["required"] == ["coordinates"]

    jvm = defs["JvmSettings"]
    assert jvm["properties"]["release"] == {"type": "string", "description": "Type: JavaVersion"}

    # Unreferenced types are not materialized
    assert "Template" not in defs
    assert "AndroidSettings" not in defs


@pytest.mark.parametrize("schema_type, root", [
    ("template", "Template"),
    ("project", "Project"),
    ("PROJECT", "Project"),
    ("bogus", "Module"),
])
def test_schema_types(tmp_path, schema_type, root):
    output = tmp_path / "schema.json"
    result = run_pipeline(PipelineConfig(
        source_dir=SOURCE_DIR, output_path=output, schema_type=schema_type,
    ))
    schema = json.loads(output.read_text())

    assert result.root_type == root
    assert schema["$id"] == f"{root}.json"
    assert schema["allOf"] == [{"$ref": f"#/$defs/{root}"}]


def test_unknown_schema_type_warns(caplog):
    with caplog.at_level("WARNING"):
        assert SchemaKind.from_keyword("library") is SchemaKind.MODULE
    assert "library" in caplog.text


def test_pipeline_is_idempotent(tmp_path):
    first = tmp_path / "first.json"
    second = tmp_path / "second.json"
    run_pipeline(PipelineConfig(source_dir=SOURCE_DIR, output_path=first))
    run_pipeline(PipelineConfig(source_dir=SOURCE_DIR, output_path=second))

    assert first.read_bytes() == second.read_bytes()


def test_missing_root_writes_nothing(tmp_path):
    schema_dir = tmp_path / "schema"
    schema_dir.mkdir()
    (schema_dir / "Other.kt").write_text("class Other : SchemaNode() {\n}\n")
    output = tmp_path / "out.json"

    with pytest.raises(RootTypeNotFoundError):
        run_pipeline(PipelineConfig(
            source_dir=tmp_path, schema_subdir="schema", output_path=output,
        ))
    assert not output.exists()


def test_unbalanced_source_writes_nothing(tmp_path):
    schema_dir = tmp_path / "schema"
    schema_dir.mkdir()
    (schema_dir / "Module.kt").write_text("class Module : SchemaNode() {\n    val a by value<String>()\n")
    output = tmp_path / "out.json"

    with pytest.raises(ValueError, match="Unbalanced"):
        run_pipeline(PipelineConfig(
            source_dir=tmp_path, schema_subdir="schema", output_path=output,
        ))
    assert not output.exists()
