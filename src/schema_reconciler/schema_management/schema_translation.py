"""Translation of raw JSON schema fragments into typed schema nodes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .schema_models import SchemaKind, SchemaNode

_COMBINATORS = ("allOf", "oneOf", "anyOf")


def schema_node_from_raw(node: Any) -> SchemaNode:
    """Translate one raw JSON schema fragment into a typed ``SchemaNode``.

    This is the only place that inspects raw schema keys; unknown shapes
    become ``SchemaKind.ANY`` rather than errors.
    """
    if not isinstance(node, Mapping):
        return SchemaNode(kind=SchemaKind.ANY)

    type_name, type_list_nullable = _declared_type(node)
    description = node.get("description")
    common: dict[str, Any] = {
        "type_name": type_name,
        "format": node.get("format") if isinstance(node.get("format"), str) else None,
        "nullable": bool(node.get("nullable") or node.get("x-nullable") or type_list_nullable),
        "description": description if isinstance(description, str) else None,
    }

    ref = node.get("$ref")
    if isinstance(ref, str):
        return SchemaNode(kind=SchemaKind.REFERENCE, ref=ref, **common)

    properties = node.get("properties")
    additional = node.get("additionalProperties")
    if type_name == "object" or isinstance(properties, Mapping) or additional not in (None, False):
        return _object_node(node, properties, additional, common)

    if type_name == "array":
        return SchemaNode(
            kind=SchemaKind.ARRAY, items=schema_node_from_raw(node.get("items")), **common
        )

    enum_values = node.get("enum")
    if _is_sequence(enum_values):
        return SchemaNode(kind=SchemaKind.ENUM, enum=tuple(enum_values), **common)

    for combinator in _COMBINATORS:
        members = node.get(combinator)
        if _is_sequence(members):
            return SchemaNode(
                kind=SchemaKind.COMPOSITE,
                combinator=combinator,
                members=tuple(schema_node_from_raw(member) for member in members),
                **common,
            )

    return SchemaNode(kind=_scalar_kind(type_name), **common)


def translate_named_schemas(value: Any) -> dict[str, SchemaNode]:
    """Translate a ``definitions``/``components.schemas`` style mapping."""
    if not isinstance(value, Mapping):
        return {}
    return {str(name): schema_node_from_raw(schema) for name, schema in value.items()}


def _object_node(
    node: Mapping[str, Any], properties: Any, additional: Any, common: dict[str, Any]
) -> SchemaNode:
    translated_properties = (
        {str(key): schema_node_from_raw(value) for key, value in properties.items()}
        if isinstance(properties, Mapping)
        else {}
    )
    required = node.get("required")
    required_names = (
        frozenset(str(name) for name in required) if _is_sequence(required) else frozenset()
    )
    additional_properties: bool | SchemaNode | None = None
    if isinstance(additional, Mapping):
        additional_properties = schema_node_from_raw(additional)
    elif isinstance(additional, bool):
        additional_properties = additional
    return SchemaNode(
        kind=SchemaKind.OBJECT,
        properties=translated_properties,
        required=required_names,
        additional_properties=additional_properties,
        **common,
    )


def _declared_type(node: Mapping[str, Any]) -> tuple[str | None, bool]:
    node_type = node.get("type")
    if isinstance(node_type, list):
        filtered = [value for value in node_type if isinstance(value, str) and value != "null"]
        return (filtered[0] if filtered else None), "null" in node_type
    if isinstance(node_type, str):
        return node_type, False
    return None, False


def _scalar_kind(type_name: str | None) -> SchemaKind:
    if type_name == "string":
        return SchemaKind.STRING
    if type_name in ("number", "integer"):
        return SchemaKind.NUMBER
    if type_name == "boolean":
        return SchemaKind.BOOLEAN
    return SchemaKind.ANY


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)
