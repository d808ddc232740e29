"""Abstract base scanner."""

from __future__ import annotations

import abc
from pathlib import Path

from schema_extract.models import RawDeclaration


class BaseScanner(abc.ABC):
    """Base class for declaration scanners."""

    extensions: tuple[str, ...]

    def __init__(self, extensions: tuple[str, ...] | None = None):
        if extensions is not None:
            self.extensions = extensions

    @abc.abstractmethod
    def scan(self, source: str, origin: Path | None = None) -> list[RawDeclaration]:
        """Scan source text and return recognized declaration headers."""

    def scan_file(self, file_path: Path) -> list[RawDeclaration]:
        source = file_path.read_text(encoding="utf-8", errors="replace")
        return self.scan(source, origin=file_path)

    def iter_files(self, directory: Path) -> list[Path]:
        """Files under directory with a scanned extension, in sorted order."""
        return [
            path for path in sorted(directory.rglob("*"))
            if path.is_file() and path.suffix in self.extensions
        ]
