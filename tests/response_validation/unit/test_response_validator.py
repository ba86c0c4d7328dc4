"""Response validator tests."""

from __future__ import annotations

import json
from pathlib import Path

from schema_reconciler.response_validation import (
    IssueKind,
    ValidationIssue,
    validate,
    validate_response,
)
from schema_reconciler.schema_management import (
    SchemaDocument,
    SchemaKind,
    SchemaNode,
    load_schema_document,
    load_schema_file,
    schema_node_from_raw,
)


def _document() -> SchemaDocument:
    return load_schema_document(json.dumps({"openapi": "3.0.0", "paths": {}}))


def test_type_mismatch_at_root_short_circuits_children() -> None:
    schema = schema_node_from_raw({"type": "object", "properties": {"x": {"type": "string"}}})

    issues = validate("oops", schema, _document())

    assert issues == [
        ValidationIssue(
            path="response",
            kind=IssueKind.TYPE_MISMATCH,
            message="Expected type 'object' but got 'string'",
            expected="object",
            actual="string",
        )
    ]


def test_runtime_kinds_are_checked_strictly() -> None:
    document = _document()
    object_schema = schema_node_from_raw({"type": "object"})
    number_schema = schema_node_from_raw({"type": "integer"})

    assert [issue.actual for issue in validate(None, object_schema, document)] == ["null"]
    assert [issue.actual for issue in validate([], object_schema, document)] == ["array"]
    assert [issue.actual for issue in validate(True, number_schema, document)] == ["boolean"]
    assert validate(3.5, number_schema, document) == []


def test_enum_membership_distinguishes_booleans_from_numbers() -> None:
    document = _document()
    schema = schema_node_from_raw({"enum": [1, 2]})

    issues = validate(True, schema, document)

    assert [issue.kind for issue in issues] == [IssueKind.INVALID_VALUE]
    assert issues[0].expected == "one of: 1, 2"
    assert validate(2, schema, document) == []


def test_enum_values_are_rendered_as_json() -> None:
    document = _document()
    schema = schema_node_from_raw({"enum": [None, True, "on"]})

    issues = validate(False, schema, document)

    assert issues[0].expected == "one of: null, true, on"
    assert issues[0].message == "Value 'false' is not in the allowed enum values"


def test_unknown_properties_are_reported_only_when_forbidden() -> None:
    document = _document()
    open_schema = schema_node_from_raw({"type": "object", "properties": {"a": {}}})
    closed_schema = schema_node_from_raw(
        {"type": "object", "properties": {"a": {}}, "additionalProperties": False}
    )

    assert validate({"a": 1, "b": 2}, open_schema, document) == []
    assert [issue.path for issue in validate({"a": 1, "b": 2}, closed_schema, document)] == [
        "response.b"
    ]


def test_missing_required_properties_use_resolved_labels() -> None:
    document = load_schema_document(
        json.dumps(
            {
                "openapi": "3.0.0",
                "paths": {},
                "components": {"schemas": {"Address": {"type": "object"}}},
            }
        )
    )
    schema = schema_node_from_raw(
        {
            "type": "object",
            "required": ["address", "status", "ghost"],
            "properties": {
                "address": {"$ref": "#/components/schemas/Address"},
                "status": {"type": "string", "enum": ["on", "off"]},
            },
        }
    )

    issues = validate({}, schema, document, "payload")

    assert [(issue.path, issue.expected) for issue in issues] == [
        ("payload.address", "object"),
        ("payload.status", "enum: on | off"),
        ("payload.ghost", "defined"),
    ]
    assert {issue.kind for issue in issues} == {IssueKind.MISSING}


def test_unresolvable_schema_produces_no_issues() -> None:
    schema = SchemaNode(kind=SchemaKind.REFERENCE, ref="#/components/schemas/Missing")

    assert validate({"anything": True}, schema, _document()) == []
    assert validate("x", None, _document()) == []


def test_sample_order_response_reports_every_issue_kind() -> None:
    samples = Path(__file__).resolve().parents[3] / "samples"
    document = load_schema_file(samples / "sample-openapi.json")
    endpoint = document.find_endpoint("GET /orders/{orderId}")
    assert endpoint is not None
    payload = json.loads((samples / "sample-order-response.json").read_text(encoding="utf-8"))

    report = validate_response(payload, endpoint.response_schema, document)

    assert not report.is_valid
    assert [(issue.path, issue.kind) for issue in report.errors] == [
        ("response.status", IssueKind.INVALID_VALUE),
        ("response.items[0].quantity", IssueKind.TYPE_MISMATCH),
        ("response.items[1].sku", IssueKind.MISSING),
        ("response.coupon", IssueKind.EXTRA),
    ]
    assert report.errors[0].message == "Value 'lost' is not in the allowed enum values"
    assert report.errors[2].message == "Required property 'sku' is missing"
    assert report.errors[3].message == "Property 'coupon' is not defined in schema"
    assert report.summary.total_errors == 4
    assert report.summary.missing_count == 1
    assert report.summary.type_mismatch_count == 1
    assert report.summary.extra_count == 1


def test_valid_payload_yields_valid_report() -> None:
    schema = schema_node_from_raw(
        {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id"],
                "properties": {"id": {"type": "string"}},
            },
        }
    )

    report = validate_response([{"id": "a"}, {"id": "b"}], schema, _document())

    assert report.is_valid
    assert report.summary.total_errors == 0
