"""Exporter layer."""

from schema_extract.exporter.json_exporter import render_schema, write_schema

__all__ = ["render_schema", "write_schema"]
