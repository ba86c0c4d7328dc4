"""Endpoint-level type declaration generation."""

from __future__ import annotations

import re
from collections.abc import Sequence

from schema_reconciler.schema_management.schema_models import Endpoint, SchemaDocument, SchemaNode

from .type_registry import TypeRegistry
from .type_synthesizer import BANNER_RULE, TypeRenderer, shared_types_banner

GENERATED_HEADER = (
    "// Generated TypeScript Types\n"
    "// DO NOT EDIT - Auto-generated from Swagger/OpenAPI specification"
)
NO_ENDPOINTS_SELECTED = "// No endpoints selected\n"
_PATH_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def generate_endpoint_types(
    endpoints: Sequence[Endpoint],
    document: SchemaDocument,
    *,
    type_prefix: str = "Type",
) -> str:
    """Render payload and response declarations for each endpoint plus shared types."""
    if not endpoints:
        return NO_ENDPOINTS_SELECTED

    registry = TypeRegistry(type_prefix=type_prefix)
    renderer = TypeRenderer(document, registry)
    blocks = [GENERATED_HEADER]
    for endpoint in endpoints:
        blocks.append(f"{BANNER_RULE}\n// {endpoint.method} {endpoint.path}\n{BANNER_RULE}")
        for suffix, schema, placeholder in (
            ("Payload", endpoint.request_schema, "No request body schema defined"),
            ("Response", endpoint.response_schema, "No response schema defined"),
        ):
            name = _reserve_name(registry, endpoint, suffix)
            blocks.append(_endpoint_declaration(renderer, name, schema, placeholder))

    shared = renderer.shared_declarations()
    if shared:
        blocks.append(shared_types_banner())
        blocks.extend(shared)
    return "\n\n".join(blocks) + "\n"


def endpoint_type_name(endpoint: Endpoint, suffix: str, *, type_prefix: str = "Type") -> str:
    """Return ``<prefix><PascalPath><suffix>`` for an endpoint."""
    return f"{type_prefix}{_pascal_case(endpoint.path)}{suffix}"


def _reserve_name(registry: TypeRegistry, endpoint: Endpoint, suffix: str) -> str:
    name = endpoint_type_name(endpoint, suffix, type_prefix=registry.type_prefix)
    if name in registry.reserved_names:
        qualified = (
            f"{registry.type_prefix}{_pascal_case(endpoint.method.lower())}"
            f"{_pascal_case(endpoint.path)}"
        )
        name = f"{qualified}{suffix}"
        counter = 2
        while name in registry.reserved_names:
            name = f"{qualified}{suffix}{counter}"
            counter += 1
    registry.reserved_names.add(name)
    return name


def _endpoint_declaration(
    renderer: TypeRenderer, name: str, schema: SchemaNode | None, placeholder: str
) -> str:
    if schema is None:
        return f"export type {name} = {{\n  // {placeholder}\n}};"
    return renderer.declaration(name, schema)


def _pascal_case(text: str) -> str:
    pieces = [piece for piece in _PATH_SEPARATORS.split(text) if piece]
    return "".join(piece[:1].upper() + piece[1:] for piece in pieces)
