"""Pipeline orchestrator: scan -> extract -> resolve -> build -> export."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from schema_extract.builder import build_schema
from schema_extract.exporter import write_schema
from schema_extract.extractor import extract_declaration
from schema_extract.models import (
    ClassDescriptor,
    ExportResult,
    PipelineConfig,
    SchemaKind,
    TypeGraph,
)
from schema_extract.resolver import resolve_hierarchies
from schema_extract.scanner import BaseScanner, get_scanner

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


class SourceLayoutError(ValueError):
    """The source directory does not contain the expected schema directory."""


def parse_source(
    source: str,
    graph: TypeGraph,
    origin: Path | None = None,
    scanner: BaseScanner | None = None,
) -> TypeGraph:
    """Scan one file's text and add its declarations to graph.

    Declarations are only added once the whole text has been extracted.
    """
    scanner = scanner or get_scanner()
    descriptors = []
    for declaration in scanner.scan(source, origin=origin):
        descriptor = extract_declaration(declaration, source)
        if descriptor is not None:
            descriptors.append(descriptor)

    for descriptor in descriptors:
        if isinstance(descriptor, ClassDescriptor):
            graph.add_class(descriptor)
        else:
            graph.add_enum(descriptor)
    return graph


def run_scan(config: PipelineConfig, progress: ProgressCallback | None = None) -> TypeGraph:
    """Stages 1-3: build the resolved type graph from the source directory."""
    schema_dir = config.schema_dir
    if not schema_dir.is_dir():
        raise SourceLayoutError(
            f"Invalid source directory. Expected to find: {schema_dir}"
        )

    scanner = get_scanner(config.extensions)
    files = scanner.iter_files(schema_dir)
    logger.debug("Scanning %d schema file(s) in %s", len(files), schema_dir)

    graph = TypeGraph()
    for i, path in enumerate(files):
        if progress:
            progress("Scanning", i, len(files))
        logger.debug("Parsing %s", path.name)
        source = path.read_text(encoding="utf-8", errors="replace")
        parse_source(source, graph, origin=path, scanner=scanner)

    if progress:
        progress("Scanning", len(files), len(files))

    resolve_hierarchies(graph)
    logger.debug("Parsed %d types, %d enums", len(graph.classes), len(graph.enums))
    return graph


def run_pipeline(
    config: PipelineConfig,
    progress: ProgressCallback | None = None,
) -> ExportResult:
    """Run the full extraction pipeline and write the schema file."""
    graph = run_scan(config, progress=progress)

    root_type = SchemaKind.from_keyword(config.schema_type).root_type
    if progress:
        progress("Building", 0, 1)
    document = build_schema(graph, root_type)
    if progress:
        progress("Building", 1, 1)

    output_path = write_schema(document, config.output_path)
    logger.debug("Wrote schema to %s", output_path)

    return ExportResult(
        output_path=output_path,
        root_type=root_type,
        class_count=len(graph.classes),
        enum_count=len(graph.enums),
        definition_count=len(document["$defs"]),
    )
