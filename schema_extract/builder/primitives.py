"""Primitive type table and small schema text helpers."""

from __future__ import annotations

import re

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
DEFS_PREFIX = "#/$defs/"

TEST_PREFIX = "test-"

# Key pattern for the single entry of each item in a map-shaped property
MAP_KEY_PATTERN = "^[^@+:]+$"

TRACEABLE_ENUM = "TraceableEnum"

PRIMITIVE_TYPES: dict[str, str] = {
    "String": "string",
    "TraceableString": "string",
    "Path": "string",
    "TraceablePath": "string",
    "Int": "integer",
    "Integer": "integer",
    "Long": "integer",
    "Boolean": "boolean",
    "Double": "number",
    "Float": "number",
}

_READ_MORE_RE = re.compile(r"\[Read more\](?:\([^)]*\))?")


def ref(type_name: str) -> dict:
    return {"$ref": DEFS_PREFIX + type_name}


def short_doc(doc: str) -> str:
    """Title form of a documentation string."""
    text = _READ_MORE_RE.sub("", doc)
    text = text.replace("(", "").replace(")", "")
    return text.strip().rstrip(".")


def modifier_pattern(name: str) -> str:
    """Key pattern for a modifier-aware property: optional test- prefix, optional @qualifier."""
    if name.startswith(TEST_PREFIX):
        return f"^{name}(@.+)?$"
    return f"^({TEST_PREFIX})?{name}(@.+)?$"


def unwrap_traceable_enum(type_name: str) -> str | None:
    prefix = TRACEABLE_ENUM + "<"
    if type_name.startswith(prefix) and type_name.endswith(">"):
        return type_name[len(prefix):-1].strip()
    return None
