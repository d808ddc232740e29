"""Extractor registry."""

from __future__ import annotations

from schema_extract.extractor.base import BaseExtractor, UnbalancedBlockError
from schema_extract.extractor.kotlin_extractor import KotlinExtractor, is_schema_class
from schema_extract.models import (
    ClassDescriptor,
    DeclarationKind,
    EnumDescriptor,
    RawDeclaration,
)

_extractor = KotlinExtractor()


def extract_declaration(
    declaration: RawDeclaration, source: str,
) -> ClassDescriptor | EnumDescriptor | None:
    """Build a descriptor for a scanned declaration.

    Returns None for classes rejected by the admission filter; their bodies
    are never read.

    Raises:
        UnbalancedBlockError: if the declaration body cannot be balanced.
    """
    if declaration.kind == DeclarationKind.CLASS and not is_schema_class(
        declaration.name, declaration.supertype,
    ):
        return None
    return _extractor.extract(declaration, source)


__all__ = [
    "BaseExtractor",
    "KotlinExtractor",
    "UnbalancedBlockError",
    "extract_declaration",
    "is_schema_class",
]
