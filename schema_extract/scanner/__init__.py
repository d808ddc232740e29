"""Scanner registry."""

from __future__ import annotations

from schema_extract.scanner.base import BaseScanner
from schema_extract.scanner.kotlin_scanner import KotlinScanner


def get_scanner(extensions: tuple[str, ...] | None = None) -> BaseScanner:
    return KotlinScanner(extensions=extensions)


__all__ = [
    "BaseScanner",
    "KotlinScanner",
    "get_scanner",
]
