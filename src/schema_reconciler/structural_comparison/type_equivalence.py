"""Loose equivalence between expected and declared type texts."""

from __future__ import annotations

import re

from schema_reconciler.schema_management.reference_resolver import reference_name
from schema_reconciler.schema_management.schema_models import SchemaKind, SchemaNode

CORE_TYPES: tuple[str, ...] = ("string", "number", "boolean", "array", "object", "date")
_PRIMITIVE_KEYWORDS: tuple[str, ...] = ("string", "number", "boolean", "array")
_DATE_FORMATS = frozenset({"date", "date-time"})
_WHITESPACE = re.compile(r"\s+")


def types_match(expected: str, actual: str) -> bool:
    """Return True when two type texts are compatible under the loose rule.

    Sharing one core type across the ``|``-separated alternatives is enough,
    so ``string | undefined`` matches ``string | null``. This also accepts
    ``string`` against ``boolean | string``.
    """
    normalized_expected = _WHITESPACE.sub("", expected).lower()
    normalized_actual = _WHITESPACE.sub("", actual).lower()
    if normalized_expected == normalized_actual:
        return True
    if _normalize_number(normalized_expected) == _normalize_number(normalized_actual):
        return True

    expected_parts = {_normalize_number(part) for part in normalized_expected.split("|")}
    actual_parts = {_normalize_number(part) for part in normalized_actual.split("|")}
    for core_type in CORE_TYPES:
        if core_type in expected_parts and core_type in actual_parts:
            return True
        array_form = f"{core_type}[]"
        if array_form in expected_parts and array_form in actual_parts:
            return True

    return "object" in normalized_expected and not any(
        keyword in normalized_actual for keyword in _PRIMITIVE_KEYWORDS
    )


def expected_type_text(
    node: SchemaNode | None, *, optional: bool = False, include_nullable: bool = True
) -> str:
    """Render the schema-side type text shown in diff entries."""
    type_text = _base_type_text(node)
    if node is not None and node.nullable and include_nullable:
        type_text += " | null"
    if optional:
        type_text += " | undefined"
    return type_text


def _base_type_text(node: SchemaNode | None) -> str:
    if node is None:
        return "any"
    if node.kind is SchemaKind.REFERENCE:
        return reference_name(node.ref or "") or "any"
    if node.type_name == "string":
        return "Date" if node.format in _DATE_FORMATS else "string"
    if node.type_name == "array":
        return f"{expected_type_text(node.items, include_nullable=False)}[]"
    return node.type_name or "any"


def _normalize_number(type_text: str) -> str:
    return type_text.replace("integer", "number").replace("int32", "")
