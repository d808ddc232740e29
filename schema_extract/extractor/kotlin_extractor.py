"""Kotlin schema extractor: class bodies, delegated properties and enum entries."""

from __future__ import annotations

import re

from schema_extract.annotations import (
    ANNOTATION_PATTERN,
    ORDER_SENSITIVE_TAG,
    STRING_PATTERN,
    extract_doc,
    find_annotation,
    parse_annotations,
    unescape_literal,
)
from schema_extract.extractor.base import BaseExtractor, iter_code_chars, mask_text
from schema_extract.extractor.type_refs import parse_type_ref, read_type_argument
from schema_extract.models import (
    ClassDescriptor,
    DeclarationKind,
    EnumDescriptor,
    EnumEntry,
    PropertyDescriptor,
    RawDeclaration,
)

# Supertypes that mark a class as part of the schema. Shape-based scanning
# also picks up helper types and builders; only these (plus the *Settings
# suffix rule) are admitted into the type graph.
ROOT_MARKER = "SchemaNode"
SCHEMA_BASE_TYPES = frozenset({
    ROOT_MARKER,
    "Base",
    "Dependency",
    "ScopedDependency",
    "UnscopedDependency",
    "BomDependency",
    "UnscopedBomDependency",
})
SCHEMA_BASE_SUFFIXES = ("Settings",)

# Delegates that bind a schema value; nullableValue always yields a nullable property
VALUE_DELEGATES = ("value", "nullableValue", "nested", "dependentValue")
NULLABLE_DELEGATE = "nullableValue"

_LEADING_ANNOTATIONS = r"(?P<annotations>(?:" + ANNOTATION_PATTERN + r"\s*)*)"

_PROPERTY_RE = re.compile(
    _LEADING_ANNOTATIONS
    + r"(?<![\w.])(?:override\s+)?va[lr]\s+(?P<name>\w+)\s*"
    r"(?::\s*(?P<declared>[^=\n]+?))?"
    r"\s+by\s+(?P<callee>" + "|".join(VALUE_DELEGATES) + r")\b\s*"
    r"(?P<generic><)?",
)
_ENTRY_RE = re.compile(
    _LEADING_ANNOTATIONS
    + r"(?<![\w.])(?P<name>[A-Za-z_]\w*)\s*\(\s*(?P<value>" + STRING_PATTERN + r")"
    r"(?P<rest>(?:" + STRING_PATTERN + r"|[^()\"]|\([^()]*\))*)\)",
)
_OUTDATED_RE = re.compile(r"\boutdated\s*=\s*true\b")
_DEFAULT_PREFIX_RE = re.compile(r"^default\s*=\s*")


def is_schema_class(name: str, supertype: str | None) -> bool:
    """Admission filter for scanned class declarations."""
    if supertype in SCHEMA_BASE_TYPES:
        return True
    candidates = [name] + ([supertype] if supertype else [])
    return any(c.endswith(SCHEMA_BASE_SUFFIXES) for c in candidates)


class KotlinExtractor(BaseExtractor):

    def extract(
        self, declaration: RawDeclaration, source: str,
    ) -> ClassDescriptor | EnumDescriptor:
        if declaration.kind == DeclarationKind.ENUM:
            return self.extract_enum(declaration, source)
        return self.extract_class(declaration, source)

    def extract_class(self, declaration: RawDeclaration, source: str) -> ClassDescriptor:
        body = self._extract_brace_block(source, declaration.body_offset)
        parent = declaration.supertype
        return ClassDescriptor(
            name=declaration.name,
            doc=extract_doc(declaration.annotations),
            properties=self.parse_properties(body),
            is_sealed=declaration.modifier in ("sealed", "abstract"),
            parent=None if parent == ROOT_MARKER else parent,
        )

    def extract_enum(self, declaration: RawDeclaration, source: str) -> EnumDescriptor:
        body = self._extract_brace_block(source, declaration.body_offset)
        return EnumDescriptor(
            name=declaration.name,
            doc=extract_doc(declaration.annotations),
            entries=self.parse_entries(body),
            is_order_sensitive=find_annotation(declaration.annotations, ORDER_SENSITIVE_TAG) is not None,
        )

    def parse_properties(self, body: str) -> list[PropertyDescriptor]:
        """Delegated properties declared at the top level of a class body."""
        masked = self._mask_nested_blocks(mask_text(body, keep_strings=True))
        properties: list[PropertyDescriptor] = []
        seen: set[str] = set()

        for m in _PROPERTY_RE.finditer(masked):
            name = m.group("name")
            if name in seen:
                continue
            seen.add(name)

            type_str = None
            call_offset = m.end()
            if m.group("generic"):
                generic = read_type_argument(masked, m.start("generic"))
                if generic is not None:
                    type_str, call_offset = generic
            if type_str is None and m.group("declared"):
                type_str = m.group("declared").strip()
            ref = parse_type_ref(type_str)

            # Any delegate argument is a declared default; only its text is kept
            arguments = self._read_arguments(masked, call_offset)
            default_value = None
            if arguments and arguments.strip():
                default_value = _DEFAULT_PREFIX_RE.sub("", arguments.strip(), count=1)

            annotations = parse_annotations(m.group("annotations"))
            properties.append(PropertyDescriptor(
                name=name,
                type_name=ref.type_name,
                is_nullable=ref.is_nullable or m.group("callee") == NULLABLE_DELEGATE,
                is_list=ref.is_list,
                is_map=ref.is_map,
                doc=extract_doc(annotations),
                default_value=default_value,
                annotations=annotations,
            ))

        return properties

    def parse_entries(self, body: str) -> list[EnumEntry]:
        """Enum entries, read from the part of the body before the first ';'."""
        masked = self._mask_nested_blocks(mask_text(body, keep_strings=True))
        section_end = next(
            (pos for pos, ch in iter_code_chars(masked) if ch == ";"),
            len(masked),
        )
        entries: list[EnumEntry] = []

        for m in _ENTRY_RE.finditer(masked, 0, section_end):
            annotations = parse_annotations(m.group("annotations"))
            entries.append(EnumEntry(
                name=m.group("name"),
                schema_value=unescape_literal(m.group("value")),
                doc=extract_doc(annotations),
                is_outdated=bool(_OUTDATED_RE.search(m.group("rest"))),
            ))

        return entries
