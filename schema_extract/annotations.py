"""Annotation tag patterns and helpers shared by the scanner and extractor."""

from __future__ import annotations

import re

# Tag names recognized on declarations
DOC_TAG = "SchemaDoc"
HIDDEN_TAG = "HiddenFromCompletion"
MODIFIER_AWARE_TAG = "ModifierAware"
PLATFORM_TAG = "PlatformSpecific"
PRODUCT_TYPE_TAG = "ProductTypeSpecific"
ORDER_SENSITIVE_TAG = "EnumOrderSensitive"

# A quoted string literal with escapes
STRING_PATTERN = r'"(?:[^"\\\n]|\\.)*"'

# "@Name" with an optional argument list; strings and one level of
# nested parentheses are allowed inside the arguments.
ANNOTATION_PATTERN = (
    r"@\w+(?:\s*\((?:" + STRING_PATTERN + r"|[^()\"]|\((?:" + STRING_PATTERN + r"|[^()\"])*\))*\))?"
)

_ANNOTATION_RE = re.compile(r"@(" + ANNOTATION_PATTERN[1:] + r")")
_STRING_RE = re.compile(STRING_PATTERN)
_CONCAT_RE = re.compile(r"\s*\+\s*")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


def parse_annotations(text: str) -> list[str]:
    """Return the verbatim tags (without '@') found in text, in order, without duplicates."""
    tags: dict[str, None] = {}
    for m in _ANNOTATION_RE.finditer(text):
        tags[m.group(1).strip()] = None
    return list(tags)


def annotation_name(tag: str) -> str:
    return tag.split("(", 1)[0].strip()


def annotation_values(tag: str) -> list[str]:
    """Extract comma-separated values from a tag like "Name(VAL1, VAL2)"."""
    start = tag.find("(")
    end = tag.rfind(")")
    if start < 0 or end < start:
        return []
    content = tag[start + 1:end]
    return [v.strip() for v in content.split(",") if v.strip()]


def find_annotation(tags: list[str], name: str) -> str | None:
    for tag in tags:
        if annotation_name(tag) == name:
            return tag
    return None


def extract_doc(tags: list[str]) -> str | None:
    """Documentation text from the first SchemaDoc tag, if any.

    Adjacent string literals joined with '+' are concatenated.
    """
    tag = find_annotation(tags, DOC_TAG)
    if tag is None:
        return None

    parts: list[str] = []
    pos = tag.find("(") + 1
    while True:
        m = _STRING_RE.match(tag, pos)
        if not m:
            m = _STRING_RE.search(tag, pos) if not parts else None
            if not m:
                break
        parts.append(unescape_literal(m.group(0)))
        joiner = _CONCAT_RE.match(tag, m.end())
        if not joiner:
            break
        pos = joiner.end()

    if not parts:
        return None
    return "".join(parts)


def unescape_literal(literal: str) -> str:
    """Strip the quotes of a string literal and resolve its escapes."""
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), literal[1:-1])
