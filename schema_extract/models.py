"""Data models for the schema-extract pipeline."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path

from schema_extract.annotations import (
    HIDDEN_TAG,
    MODIFIER_AWARE_TAG,
    PLATFORM_TAG,
    PRODUCT_TYPE_TAG,
    annotation_name,
    annotation_values,
)

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_SUBDIR = "frontend-api/src/org/jetbrains/amper/frontend/schema"


class DeclarationKind(enum.Enum):
    CLASS = "class"
    ENUM = "enum"


class SchemaKind(enum.Enum):
    """Well-known top-level schema roots."""
    MODULE = "module"
    TEMPLATE = "template"
    PROJECT = "project"

    @property
    def root_type(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_keyword(cls, keyword: str) -> SchemaKind:
        try:
            return cls(keyword.lower())
        except ValueError:
            logger.warning("Unknown schema type %r, defaulting to %r", keyword, cls.MODULE.value)
            return cls.MODULE


@dataclass
class RawDeclaration:
    """Result from the scanner stage: a recognized declaration header."""
    kind: DeclarationKind
    name: str
    body_offset: int  # index of the opening brace
    line_number: int
    annotations: list[str] = field(default_factory=list)
    modifier: str | None = None  # "sealed" / "abstract" for classes
    supertype: str | None = None
    origin: Path | None = None


@dataclass
class PropertyDescriptor:
    name: str
    type_name: str
    is_nullable: bool = False
    is_list: bool = False
    is_map: bool = False
    doc: str | None = None
    default_value: str | None = None
    annotations: list[str] = field(default_factory=list)

    def has_annotation(self, name: str) -> bool:
        return any(annotation_name(tag) == name for tag in self.annotations)

    @property
    def is_hidden(self) -> bool:
        return self.has_annotation(HIDDEN_TAG)

    @property
    def is_modifier_aware(self) -> bool:
        return self.has_annotation(MODIFIER_AWARE_TAG)

    @property
    def is_required(self) -> bool:
        return not self.is_nullable and self.default_value is None

    @property
    def platforms(self) -> list[str]:
        return self._tag_values(PLATFORM_TAG)

    @property
    def product_types(self) -> list[str]:
        return self._tag_values(PRODUCT_TYPE_TAG)

    def _tag_values(self, name: str) -> list[str]:
        values: list[str] = []
        for tag in self.annotations:
            if annotation_name(tag) == name:
                values.extend(annotation_values(tag))
        return values


@dataclass
class ClassDescriptor:
    name: str
    doc: str | None = None
    properties: list[PropertyDescriptor] = field(default_factory=list)
    is_sealed: bool = False
    parent: str | None = None
    subclasses: list[str] = field(default_factory=list)  # filled by the resolver


@dataclass
class EnumEntry:
    name: str
    schema_value: str
    doc: str | None = None
    is_outdated: bool = False


@dataclass
class EnumDescriptor:
    name: str
    doc: str | None = None
    entries: list[EnumEntry] = field(default_factory=list)
    is_order_sensitive: bool = False

    def active_entries(self) -> list[EnumEntry]:
        return [e for e in self.entries if not e.is_outdated]


@dataclass
class TypeGraph:
    """Accumulated result of extraction, keyed by type name."""
    classes: dict[str, ClassDescriptor] = field(default_factory=dict)
    enums: dict[str, EnumDescriptor] = field(default_factory=dict)

    def add_class(self, descriptor: ClassDescriptor) -> None:
        if descriptor.name in self.classes:
            logger.debug("Class %s redeclared, keeping the later declaration", descriptor.name)
        self.classes[descriptor.name] = descriptor

    def add_enum(self, descriptor: EnumDescriptor) -> None:
        if descriptor.name in self.enums:
            logger.debug("Enum %s redeclared, keeping the later declaration", descriptor.name)
        self.enums[descriptor.name] = descriptor

    def sealed_classes(self) -> list[ClassDescriptor]:
        return [c for c in self.classes.values() if c.is_sealed]


@dataclass
class ExportResult:
    """Result from the exporter stage."""
    output_path: Path
    root_type: str
    class_count: int = 0
    enum_count: int = 0
    definition_count: int = 0


@dataclass
class PipelineConfig:
    """Configuration for the extraction pipeline."""
    source_dir: Path = field(default_factory=lambda: Path("."))
    output_path: Path = field(default_factory=lambda: Path("module-schema.json"))
    schema_type: str = SchemaKind.MODULE.value
    schema_subdir: str = DEFAULT_SCHEMA_SUBDIR
    extensions: tuple[str, ...] = (".kt",)

    @property
    def schema_dir(self) -> Path:
        return self.source_dir / self.schema_subdir
