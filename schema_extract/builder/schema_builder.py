"""JSON Schema generation from a resolved type graph."""

from __future__ import annotations

import logging
from typing import Any

from schema_extract.builder.primitives import (
    MAP_KEY_PATTERN,
    PRIMITIVE_TYPES,
    SCHEMA_DIALECT,
    modifier_pattern,
    ref,
    short_doc,
    unwrap_traceable_enum,
)
from schema_extract.models import (
    ClassDescriptor,
    EnumDescriptor,
    PropertyDescriptor,
    TypeGraph,
)

logger = logging.getLogger(__name__)


class RootTypeNotFoundError(LookupError):
    """The requested root type is not part of the type graph."""


class SchemaBuilder:
    """Materializes one definition per type reachable from a root type."""

    def __init__(self, graph: TypeGraph):
        self.graph = graph
        self.definitions: dict[str, dict[str, Any]] = {}
        self._unresolved: set[str] = set()

    def build(self, root_type: str) -> dict[str, Any]:
        root = self.graph.classes.get(root_type)
        if root is None:
            raise RootTypeNotFoundError(f"Root type {root_type!r} not found")

        self.build_class_definition(root)

        return {
            "$schema": SCHEMA_DIALECT,
            "$id": f"{root_type}.json",
            "title": f"{root_type} schema",
            "type": "object",
            "allOf": [ref(root_type)],
            "$defs": self.definitions,
        }

    def build_class_definition(self, cls: ClassDescriptor) -> None:
        if cls.name in self.definitions:
            return
        # Reserve the slot first so cyclic references terminate
        self.definitions[cls.name] = {}

        if cls.is_sealed:
            self.definitions[cls.name] = self._build_variants(cls)
        else:
            self.definitions[cls.name] = self._build_object(cls)

    def _build_variants(self, cls: ClassDescriptor) -> dict[str, Any]:
        if not cls.subclasses:
            logger.debug("Sealed class %s has no subclasses", cls.name)
        variants = []
        for name in cls.subclasses:
            subclass = self.graph.classes.get(name)
            if subclass is None:
                continue
            self.build_class_definition(subclass)
            variants.append(ref(name))
        return {"anyOf": variants}

    def effective_properties(self, cls: ClassDescriptor) -> list[PropertyDescriptor]:
        """Own properties followed by those of every ancestor; the closest declaration wins."""
        properties = list(cls.properties)
        names = {p.name for p in properties}
        visited = {cls.name}

        parent_name = cls.parent
        while parent_name is not None and parent_name not in visited:
            visited.add(parent_name)
            parent = self.graph.classes.get(parent_name)
            if parent is None:
                break
            for prop in parent.properties:
                if prop.name not in names:
                    names.add(prop.name)
                    properties.append(prop)
            parent_name = parent.parent

        return properties

    def _build_object(self, cls: ClassDescriptor) -> dict[str, Any]:
        all_properties = self.effective_properties(cls)

        properties: dict[str, Any] = {}
        pattern_properties: dict[str, Any] = {}
        required: list[str] = []

        for prop in all_properties:
            if prop.is_hidden:
                continue

            prop_schema = self.build_property_schema(prop)

            if prop.is_modifier_aware:
                pattern_properties[modifier_pattern(prop.name)] = dict(prop_schema)

            properties[prop.name] = prop_schema

            if prop.is_required:
                required.append(prop.name)

        schema: dict[str, Any] = {
            "type": "object",
            "additionalProperties": False,
        }
        if properties:
            schema["properties"] = properties
        if pattern_properties:
            schema["patternProperties"] = pattern_properties
        # An all-required list carries no information under this encoding
        if required and len(required) < len(all_properties):
            schema["required"] = required
        if cls.doc:
            schema["title"] = cls.doc
        return schema

    def build_property_schema(self, prop: PropertyDescriptor) -> dict[str, Any]:
        base = self.build_type_schema(prop.type_name)

        if prop.is_list:
            schema = {
                "type": "array",
                "items": base,
                "uniqueItems": True,
            }
        elif prop.is_map:
            schema = {
                "type": "array",
                "items": {
                    "type": "object",
                    "patternProperties": {MAP_KEY_PATTERN: base},
                    "additionalProperties": False,
                    "minProperties": 1,
                    "maxProperties": 1,
                },
                "uniqueItems": True,
            }
        else:
            schema = base

        if prop.doc:
            schema["description"] = prop.doc
            schema["title"] = short_doc(prop.doc)

        platforms = prop.platforms
        product_types = prop.product_types
        if platforms or product_types:
            metadata: dict[str, list[str]] = {}
            if platforms:
                metadata["platforms"] = platforms
            if product_types:
                metadata["productTypes"] = product_types
            schema["x-intellij-metadata"] = metadata

        return schema

    def build_type_schema(self, type_name: str) -> dict[str, Any]:
        enum_def = self.graph.enums.get(type_name)
        if enum_def is not None:
            return self.build_enum_schema(enum_def)

        cls = self.graph.classes.get(type_name)
        if cls is not None:
            self.build_class_definition(cls)
            return ref(type_name)

        inner = unwrap_traceable_enum(type_name)
        if inner is not None and inner in self.graph.enums:
            return self.build_enum_schema(self.graph.enums[inner])

        primitive = PRIMITIVE_TYPES.get(type_name)
        if primitive is not None:
            return {"type": primitive}

        if type_name not in self._unresolved:
            self._unresolved.add(type_name)
            logger.warning("Unresolved type %s, treating it as a string", type_name)
        return {"type": "string", "description": f"Type: {type_name}"}

    def build_enum_schema(self, enum_def: EnumDescriptor) -> dict[str, Any]:
        active = enum_def.active_entries()
        schema: dict[str, Any] = {"enum": [e.schema_value for e in active]}

        metadata = {e.schema_value: e.doc for e in active if e.doc}
        if metadata:
            schema["x-intellij-enum-metadata"] = metadata

        if enum_def.is_order_sensitive:
            schema["x-intellij-enum-order-sensitive"] = True

        return schema
