"""Kotlin schema declaration scanner using regex patterns."""

from __future__ import annotations

import re
from pathlib import Path

from schema_extract.annotations import ANNOTATION_PATTERN, parse_annotations
from schema_extract.extractor.base import mask_text
from schema_extract.models import DeclarationKind, RawDeclaration
from schema_extract.scanner.base import BaseScanner

_LEADING_ANNOTATIONS = r"(?P<annotations>(?:" + ANNOTATION_PATTERN + r"\s*)*)"
_VISIBILITY = r"(?:(?:public|internal)\s+)?"

_ENUM_RE = re.compile(
    _LEADING_ANNOTATIONS
    + _VISIBILITY
    + r"enum\s+class\s+(?P<name>\w+)\s*"
    r"(?:\((?:[^()]|\([^()]*\))*\))?\s*"
    r":\s*(?P<supertype>SchemaEnum)\b(?:\s*,\s*[\w.<>]+(?:\(\s*\))?)*\s*\{",
)
_CLASS_RE = re.compile(
    _LEADING_ANNOTATIONS
    + _VISIBILITY
    + r"(?:(?P<modifier>sealed|abstract)\s+)?"
    r"class\s+(?P<name>\w+)\s*(?:\(\s*\))?\s*"
    r":\s*(?P<supertype>\w+)\s*\(\s*\)\s*\{",
)


class KotlinScanner(BaseScanner):
    extensions = (".kt",)

    def scan(self, source: str, origin: Path | None = None) -> list[RawDeclaration]:
        # Headers are matched on code only; annotation text keeps its strings
        code = mask_text(source)
        uncommented = mask_text(source, keep_strings=True)
        declarations: list[RawDeclaration] = []

        for m in _ENUM_RE.finditer(code):
            declarations.append(self._declaration(DeclarationKind.ENUM, m, uncommented, origin))

        for m in _CLASS_RE.finditer(code):
            declarations.append(self._declaration(DeclarationKind.CLASS, m, uncommented, origin))

        declarations.sort(key=lambda d: d.body_offset)
        return declarations

    def _declaration(
        self,
        kind: DeclarationKind,
        m: re.Match[str],
        source: str,
        origin: Path | None,
    ) -> RawDeclaration:
        annotations = source[m.start("annotations"):m.end("annotations")]
        return RawDeclaration(
            kind=kind,
            name=m.group("name"),
            body_offset=m.end() - 1,
            line_number=source.count("\n", 0, m.start("name")) + 1,
            annotations=parse_annotations(annotations),
            modifier=m.groupdict().get("modifier"),
            supertype=m.group("supertype"),
            origin=origin,
        )
