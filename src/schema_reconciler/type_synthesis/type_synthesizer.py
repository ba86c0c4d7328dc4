"""Schema to TypeScript-style type declaration synthesis."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from schema_reconciler.schema_management.reference_resolver import resolve
from schema_reconciler.schema_management.schema_models import (
    SchemaDocument,
    SchemaKind,
    SchemaNode,
)

from .type_registry import TypeRegistry

logger = logging.getLogger(__name__)

DATE_FORMATS = frozenset({"date", "date-time"})
BANNER_RULE = "// " + "=" * 60
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_INDENT = "  "


@dataclass(frozen=True)
class SchemaSelection:
    """A schema to emit as a top-level named declaration."""

    name: str
    schema: SchemaNode | None


class TypeRenderer:
    """Render schema nodes to type expressions, deferring references to a registry."""

    def __init__(self, document: SchemaDocument, registry: TypeRegistry) -> None:
        self._document = document
        self._registry = registry

    def declaration(self, name: str, schema: SchemaNode | None) -> str:
        """Return ``export type <name> = <type>;`` for one schema."""
        return f"export type {name} = {self.render(schema)};"

    def shared_declarations(self) -> list[str]:
        """Emit every registered reference exactly once, including ones registered meanwhile."""
        declarations: list[str] = []
        while True:
            entry = self._registry.next_pending()
            if entry is None:
                break
            entry.emitted = True
            declarations.append(self.declaration(entry.name, entry.schema))
        logger.debug("Emitted %d shared type declarations", len(declarations))
        return declarations

    def render(self, node: SchemaNode | None, indent: int = 0) -> str:
        """Return the type expression for ``node``."""
        if node is None:
            return "any"
        if node.kind is SchemaKind.REFERENCE:
            return self._render_reference(node.ref or "")
        if node.kind is SchemaKind.OBJECT:
            return self._render_object(node, indent)
        if node.kind is SchemaKind.ARRAY:
            return f"{self._render_array_item(node.items, indent)}[]"
        if node.kind is SchemaKind.ENUM:
            return _render_enum(node)
        if node.kind is SchemaKind.STRING:
            return "Date" if node.format in DATE_FORMATS else "string"
        if node.kind is SchemaKind.NUMBER:
            return "number"
        if node.kind is SchemaKind.BOOLEAN:
            return "boolean"
        if node.kind is SchemaKind.COMPOSITE:
            separator = " & " if node.combinator == "allOf" else " | "
            return separator.join(self.render(member, indent) for member in node.members)
        return "any"

    def _render_reference(self, ref: str) -> str:
        resolved = resolve(ref, self._document)
        if resolved is None:
            return "any"
        return self._registry.register(ref, resolved).name

    def _render_array_item(self, items: SchemaNode | None, indent: int) -> str:
        rendered = self.render(items, indent)
        if items is not None and items.kind in (SchemaKind.COMPOSITE, SchemaKind.ENUM):
            if " | " in rendered or " & " in rendered:
                return f"({rendered})"
        return rendered

    def _render_object(self, node: SchemaNode, indent: int) -> str:
        inner = _INDENT * (indent + 1)
        lines = ["{"]
        for name, prop in node.properties.items():
            if prop.description:
                lines.append(f"{inner}/** {_comment_text(prop.description)} */")
            optional = "" if name in node.required else "?"
            prop_type = self.render(prop, indent + 1)
            lines.append(f"{inner}{_property_key(name)}{optional}: {prop_type};")

        additional = node.additional_properties
        if additional is True:
            lines.append(f"{inner}[key: string]: any;")
        elif isinstance(additional, SchemaNode):
            lines.append(f"{inner}[key: string]: {self.render(additional, indent + 1)};")
        lines.append(f"{_INDENT * indent}}}")
        return "\n".join(lines)


def synthesize(
    selections: Sequence[SchemaSelection],
    document: SchemaDocument,
    *,
    type_prefix: str = "Type",
) -> str:
    """Render each selection as a named declaration followed by shared referenced types."""
    registry = TypeRegistry(
        type_prefix=type_prefix,
        reserved_names={selection.name for selection in selections},
    )
    renderer = TypeRenderer(document, registry)
    blocks = [renderer.declaration(selection.name, selection.schema) for selection in selections]
    shared = renderer.shared_declarations()
    if shared:
        blocks.append(shared_types_banner())
        blocks.extend(shared)
    return "\n\n".join(blocks) + "\n"


def shared_types_banner() -> str:
    """Return the comment block separating shared declarations."""
    return f"{BANNER_RULE}\n// Shared Types\n{BANNER_RULE}"


def _render_enum(node: SchemaNode) -> str:
    if node.type_name in ("number", "integer"):
        return "number"
    if node.type_name == "boolean":
        return "boolean"
    if not node.enum:
        return "string"
    return " | ".join(_literal(value) for value in node.enum)


def _literal(value: Any) -> str:
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    return json.dumps(value)


def _property_key(name: str) -> str:
    if _IDENTIFIER.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _comment_text(description: str) -> str:
    return " ".join(description.split()).replace("*/", "*\\/")
