"""Schema builder entry point."""

from __future__ import annotations

from typing import Any

from schema_extract.builder.schema_builder import RootTypeNotFoundError, SchemaBuilder
from schema_extract.models import TypeGraph


def build_schema(graph: TypeGraph, root_type: str) -> dict[str, Any]:
    """Build the JSON Schema document for root_type from a resolved graph."""
    return SchemaBuilder(graph).build(root_type)


__all__ = [
    "RootTypeNotFoundError",
    "SchemaBuilder",
    "build_schema",
]
