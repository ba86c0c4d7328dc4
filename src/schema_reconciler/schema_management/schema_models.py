"""Schema management entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class SchemaKind(str, Enum):
    """Discriminator for translated schema nodes."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    REFERENCE = "reference"
    COMPOSITE = "composite"
    ANY = "any"


@dataclass(frozen=True, eq=False)
class SchemaNode:  # pylint: disable=too-many-instance-attributes
    """One node of a Swagger/OpenAPI schema graph.

    ``type_name`` keeps the declared ``type`` value verbatim (``integer`` stays
    ``integer``) because diff output echoes it back to the user.
    """

    kind: SchemaKind
    type_name: str | None = None
    properties: Mapping[str, SchemaNode] = field(default_factory=dict)
    required: frozenset[str] = frozenset()
    items: SchemaNode | None = None
    ref: str | None = None
    enum: tuple[Any, ...] = ()
    format: str | None = None
    nullable: bool = False
    additional_properties: bool | SchemaNode | None = None
    members: tuple[SchemaNode, ...] = ()
    combinator: str | None = None
    description: str | None = None

    @property
    def is_reference(self) -> bool:
        """Return True when the node is a ``$ref`` placeholder."""
        return self.kind is SchemaKind.REFERENCE

    @property
    def has_object_shape(self) -> bool:
        """Return True when the node declares properties or is typed ``object``."""
        return bool(self.properties) or self.type_name == "object"


@dataclass(frozen=True)
class Endpoint:
    """One HTTP operation with its request and success-response schemas."""

    id: str
    method: str
    path: str
    summary: str
    request_schema: SchemaNode | None
    response_schema: SchemaNode | None


@dataclass(frozen=True)
class SchemaDocument:
    """Structured representation of a Swagger/OpenAPI document."""

    spec_version: str
    definitions: Mapping[str, SchemaNode]
    component_schemas: Mapping[str, SchemaNode]
    endpoints: tuple[Endpoint, ...]
    source_path: Path | None = None

    def find_endpoint(self, endpoint_id: str) -> Endpoint | None:
        """Return the endpoint with the given ``METHOD /path`` id."""
        normalized = _normalize_endpoint_id(endpoint_id)
        for endpoint in self.endpoints:
            if endpoint.id == normalized:
                return endpoint
        return None


def _normalize_endpoint_id(endpoint_id: str) -> str:
    method, _, path = endpoint_id.strip().partition(" ")
    return f"{method.upper()} {path.strip()}"
