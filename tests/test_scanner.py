"""Tests for the scanner layer."""

from pathlib import Path

from schema_extract.models import DeclarationKind
from schema_extract.scanner import KotlinScanner, get_scanner

FIXTURES = Path(__file__).parent / "fixtures"
SCHEMA_DIR = FIXTURES / "amper/frontend-api/src/org/jetbrains/amper/frontend/schema"


def test_kotlin_scanner_classes():
    scanner = KotlinScanner()
    items = scanner.scan_file(SCHEMA_DIR / "Dependency.kt")
    by_name = {d.name: d for d in items}

    assert [d.name for d in items] == [
        "Dependency", "ExternalDependency", "LocalDependency", "DependencyScope",
    ]
    assert by_name["Dependency"].kind == DeclarationKind.CLASS
    assert by_name["Dependency"].modifier == "sealed"
    assert by_name["Dependency"].supertype == "SchemaNode"
    assert by_name["ExternalDependency"].modifier is None
    assert by_name["ExternalDependency"].supertype == "Dependency"
    assert by_name["DependencyScope"].kind == DeclarationKind.ENUM
    assert by_name["LocalDependency"].origin == SCHEMA_DIR / "Dependency.kt"


def test_kotlin_scanner_enum_header_annotations():
    scanner = KotlinScanner()
    items = scanner.scan_file(SCHEMA_DIR / "Platform.kt")
    platform = next(d for d in items if d.name == "Platform")

    assert platform.kind == DeclarationKind.ENUM
    assert platform.annotations == ['SchemaDoc("Target platforms")', "EnumOrderSensitive(reverse = true)"]
    assert platform.supertype == "SchemaEnum"


def test_body_offset_points_at_opening_brace():
    source = 'class Foo : SchemaNode() {\n    val a by value<String>()\n}\n'
    (decl,) = KotlinScanner().scan(source)
    assert source[decl.body_offset] == "{"
    assert decl.line_number == 1


def test_line_numbers():
    source = "package x\n\n@SchemaDoc(\"A\")\nclass Foo : SchemaNode() {\n}\n"
    (decl,) = KotlinScanner().scan(source)
    assert decl.line_number == 4
    assert decl.annotations == ['SchemaDoc("A")']


def test_unrecognized_shapes_are_skipped():
    source = """
    class WithArgs(val x: Int) : SchemaNode() { }
    class NoCall : SchemaNode { }
    enum class Plain { A, B }
    object Singleton : SchemaNode() { }
    fun helper() { }
    """
    assert KotlinScanner().scan(source) == []


def test_visibility_modifier():
    source = "internal sealed class Foo : SchemaNode() {}\n"
    (decl,) = KotlinScanner().scan(source)
    assert decl.name == "Foo"
    assert decl.modifier == "sealed"


def test_iter_files_filters_extension():
    files = get_scanner().iter_files(SCHEMA_DIR)
    names = [f.name for f in files]

    assert "Module.kt" in names
    assert "Builders.kt" in names
    assert "README.md" not in names
    assert files == sorted(files)


def test_headers_in_comments_and_strings_are_skipped():
    source = (
        "// class Legacy : SchemaNode() {\n"
        "/** Example: class Doc : SchemaNode() { val x by value<Int>() } */\n"
        'val sample = "class Quoted : SchemaNode() {"\n'
        "class Module : SchemaNode() {\n"
        "    val name by value<String>()\n"
        "}\n"
    )
    (decl,) = KotlinScanner().scan(source)
    assert decl.name == "Module"
    assert decl.line_number == 4
    assert source[decl.body_offset] == "{"


def test_commented_annotations_are_not_captured():
    source = (
        "// @SchemaDoc(\"old\")\n"
        "@SchemaDoc(\"Current (v2)\")\n"
        "class Foo : SchemaNode() {}\n"
    )
    (decl,) = KotlinScanner().scan(source)
    assert decl.annotations == ['SchemaDoc("Current (v2)")']
