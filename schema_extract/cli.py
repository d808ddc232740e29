"""Click CLI with generate and scan subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from schema_extract import __version__
from schema_extract.builder import RootTypeNotFoundError
from schema_extract.models import DEFAULT_SCHEMA_SUBDIR, PipelineConfig, SchemaKind
from schema_extract.pipeline import run_pipeline, run_scan

_SCHEMA_TYPE_CHOICES = [kind.value for kind in SchemaKind]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.version_option(version=__version__)
def cli():
    """schema-extract: Generate a JSON Schema from Kotlin schema declarations."""


@cli.command()
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-o", "--output", "output_path", type=click.Path(dir_okay=False, path_type=Path),
              default="module-schema.json", show_default=True, help="Output file for the JSON Schema")
@click.option("--schema-type", default=SchemaKind.MODULE.value, show_default=True,
              help=f"Schema root to generate: {', '.join(_SCHEMA_TYPE_CHOICES)}")
@click.option("--schema-subdir", default=DEFAULT_SCHEMA_SUBDIR, show_default=True,
              help="Directory of schema sources, relative to SOURCE_DIR")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def generate(source_dir: Path, output_path: Path, schema_type: str, schema_subdir: str, verbose: bool):
    """Extract a JSON Schema from the schema sources in SOURCE_DIR."""
    _configure_logging(verbose)

    config = PipelineConfig(
        source_dir=source_dir,
        output_path=output_path,
        schema_type=schema_type,
        schema_subdir=schema_subdir,
    )

    def progress(stage: str, current: int, total: int):
        if verbose and current == total:
            click.echo(f"  {stage}: {current}/{total}", err=True)

    if verbose:
        click.echo(f"Source directory: {source_dir}", err=True)
        click.echo(f"Output file: {output_path}", err=True)

    try:
        result = run_pipeline(config, progress=progress)
    except (ValueError, RootTypeNotFoundError, OSError) as e:
        raise click.ClickException(str(e))

    if verbose:
        click.echo(
            f"Parsed {result.class_count} types, {result.enum_count} enums; "
            f"{result.definition_count} definitions for {result.root_type}",
            err=True,
        )
    click.echo(f"Schema extracted successfully: {result.output_path}")


@cli.command()
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--schema-subdir", default=DEFAULT_SCHEMA_SUBDIR, show_default=True,
              help="Directory of schema sources, relative to SOURCE_DIR")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def scan(source_dir: Path, schema_subdir: str, verbose: bool):
    """List the schema classes and enums recovered from SOURCE_DIR."""
    _configure_logging(verbose)

    config = PipelineConfig(source_dir=source_dir, schema_subdir=schema_subdir)
    try:
        graph = run_scan(config)
    except (ValueError, OSError) as e:
        raise click.ClickException(str(e))

    if not graph.classes and not graph.enums:
        click.echo("No schema declarations found.")
        return

    click.echo(click.style("Classes", fg="cyan"))
    for cls in graph.classes.values():
        marker = click.style("sealed", fg="magenta") if cls.is_sealed else ""
        parent = f" : {cls.parent}" if cls.parent else ""
        click.echo(f"  {cls.name}{parent}  {len(cls.properties)} properties  {marker}".rstrip())
        if cls.is_sealed and cls.subclasses:
            click.echo(click.style(f"    variants: {', '.join(cls.subclasses)}", dim=True))

    click.echo(click.style("Enums", fg="cyan"))
    for enum_def in graph.enums.values():
        outdated = len(enum_def.entries) - len(enum_def.active_entries())
        suffix = f" ({outdated} outdated)" if outdated else ""
        click.echo(f"  {enum_def.name}  {len(enum_def.active_entries())} values{suffix}")

    click.echo()
    click.echo("Summary:")
    click.echo(f"  classes: {len(graph.classes)}")
    click.echo(f"  enums: {len(graph.enums)}")


if __name__ == "__main__":
    cli()
