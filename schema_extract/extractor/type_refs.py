"""Parsing of declared Kotlin type references into element type + shape flags."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TYPE = "String"


@dataclass
class TypeRef:
    type_name: str
    is_nullable: bool = False
    is_list: bool = False
    is_map: bool = False


def read_type_argument(text: str, lt_offset: int) -> tuple[str, int] | None:
    """Read the generic argument starting at the '<' at lt_offset.

    Returns the text between the angle brackets and the offset just past the
    closing bracket, or None if they never balance.
    """
    depth = 0
    for pos in range(lt_offset, len(text)):
        ch = text[pos]
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth == 0:
                return text[lt_offset + 1:pos].strip(), pos + 1
        elif ch in "{};=":
            return None
    return None


def split_top_level(text: str, sep: str = ",") -> list[str]:
    """Split text on sep, ignoring separators nested inside angle brackets."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        if ch == sep and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    parts.append("".join(current).strip())
    return parts


def _unwrap(type_str: str, wrapper: str) -> str | None:
    prefix = wrapper + "<"
    if type_str.startswith(prefix) and type_str.endswith(">"):
        return type_str[len(prefix):-1].strip()
    return None


def _element(type_str: str) -> str:
    # Nullability of the element itself does not change the schema shape
    return type_str.strip().rstrip("?").strip()


def parse_type_ref(type_str: str | None) -> TypeRef:
    """Strip nullability and list/map wrapping from a declared type."""
    type_str = " ".join((type_str or DEFAULT_TYPE).split())
    is_nullable = type_str.endswith("?")
    type_str = type_str.rstrip("?").strip()

    inner = _unwrap(type_str, "List")
    if inner is not None:
        return TypeRef(_element(inner), is_nullable=is_nullable, is_list=True)

    inner = _unwrap(type_str, "Map")
    if inner is not None:
        args = split_top_level(inner)
        # Keys are always treated as strings; only the value type is kept
        if len(args) == 2:
            return TypeRef(_element(args[1]), is_nullable=is_nullable, is_map=True)

    return TypeRef(type_str, is_nullable=is_nullable)
