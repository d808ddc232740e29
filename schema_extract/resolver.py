"""Hierarchy resolution: direct subclasses of sealed classes."""

from __future__ import annotations

from schema_extract.models import TypeGraph


def resolve_hierarchies(graph: TypeGraph) -> TypeGraph:
    """Populate ``subclasses`` of every sealed class, in graph order."""
    children: dict[str, list[str]] = {}
    for name, cls in graph.classes.items():
        if cls.parent is not None:
            children.setdefault(cls.parent, []).append(name)

    for sealed in graph.sealed_classes():
        sealed.subclasses = list(children.get(sealed.name, []))

    return graph
