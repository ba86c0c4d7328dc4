"""Loose type-text equivalence tests."""

from __future__ import annotations

import pytest
from schema_reconciler.schema_management import SchemaKind, SchemaNode, schema_node_from_raw
from schema_reconciler.structural_comparison import expected_type_text, types_match


@pytest.mark.parametrize(
    ("expected", "actual"),
    [
        ("string | undefined", "string | null"),
        ("integer", "number"),
        ("integer | null", "number"),
        ("string[] | undefined", "string[]"),
        ("Date | undefined", "Date"),
        ("object", "Address"),
        ("Customer", "Customer"),
        ("string", "boolean | string"),
    ],
)
def test_compatible_type_texts(expected: str, actual: str) -> None:
    assert types_match(expected, actual) is True


@pytest.mark.parametrize(
    ("expected", "actual"),
    [
        ("string", "number"),
        ("integer", "string"),
        ("Date | undefined", "string"),
        ("object", "string"),
        ("string[]", "number[]"),
        ("Customer", "Client"),
    ],
)
def test_incompatible_type_texts(expected: str, actual: str) -> None:
    assert types_match(expected, actual) is False


def test_expected_text_appends_null_then_undefined() -> None:
    node = schema_node_from_raw({"type": "string", "nullable": True})

    assert expected_type_text(node) == "string | null"
    assert expected_type_text(node, optional=True) == "string | null | undefined"


def test_expected_text_for_references_dates_and_arrays() -> None:
    reference = SchemaNode(kind=SchemaKind.REFERENCE, ref="#/components/schemas/OrderItem")
    timestamp = schema_node_from_raw({"type": "string", "format": "date-time"})
    nullable_items = schema_node_from_raw(
        {"type": "array", "items": {"type": "string", "nullable": True}}
    )
    referenced_items = schema_node_from_raw(
        {"type": "array", "items": {"$ref": "#/components/schemas/OrderItem"}}
    )

    assert expected_type_text(reference) == "OrderItem"
    assert expected_type_text(timestamp) == "Date"
    assert expected_type_text(nullable_items) == "string[]"
    assert expected_type_text(referenced_items) == "OrderItem[]"


def test_expected_text_keeps_declared_scalar_names() -> None:
    assert expected_type_text(schema_node_from_raw({"type": "integer"})) == "integer"
    assert expected_type_text(schema_node_from_raw({})) == "any"
    assert expected_type_text(None) == "any"
