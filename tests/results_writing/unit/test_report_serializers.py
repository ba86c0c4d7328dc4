"""JSON serialisation tests for comparison and validation outcomes."""

from __future__ import annotations

import json

from schema_reconciler.response_validation import (
    IssueKind,
    ValidationIssue,
    ValidationReport,
    ValidationSummary,
)
from schema_reconciler.results_writing import (
    serialize_comparison,
    serialize_diff,
    serialize_validation_report,
)
from schema_reconciler.structural_comparison import (
    AddedField,
    DiffResult,
    ModifiedField,
    RemovedField,
)
from schema_reconciler.type_parsing import RecordTypeDefinition


def test_serialize_diff_lists_every_entry() -> None:
    diff = DiffResult(
        added=[AddedField(name="b.d", type_text="boolean")],
        removed=[RemovedField(name="legacy", type_text="string")],
        modified=[ModifiedField(name="n", expected_type_text="integer", actual_type_text="string")],
    )

    assert serialize_diff(diff) == {
        "added": [{"name": "b.d", "type": "boolean", "description": None}],
        "removed": [{"name": "legacy", "type": "string"}],
        "modified": [{"name": "n", "expected_type": "integer", "actual_type": "string"}],
    }


def test_serialize_comparison_names_the_selected_type() -> None:
    document = serialize_comparison(RecordTypeDefinition(name="OrderList"), DiffResult())

    assert document == {
        "selected_type": "OrderList",
        "diff": {"added": [], "removed": [], "modified": []},
    }
    assert serialize_comparison(None, DiffResult())["selected_type"] is None


def test_serialize_validation_report_is_json_ready() -> None:
    issues = (
        ValidationIssue(
            path="response.extra",
            kind=IssueKind.EXTRA,
            message="Property 'extra' is not defined in schema",
            expected="not defined",
            actual="string",
        ),
    )
    report = ValidationReport(errors=issues, summary=ValidationSummary.from_issues(issues))

    serialized = serialize_validation_report(report)

    assert json.loads(json.dumps(serialized)) == {
        "is_valid": False,
        "errors": [
            {
                "path": "response.extra",
                "type": "extra",
                "expected": "not defined",
                "actual": "string",
                "message": "Property 'extra' is not defined in schema",
            }
        ],
        "summary": {
            "total_errors": 1,
            "missing_count": 0,
            "type_mismatch_count": 0,
            "extra_count": 1,
        },
    }
