"""JSON-ready serialisation of comparison and validation outcomes."""

from __future__ import annotations

from typing import Any

from schema_reconciler.response_validation.validation_outcomes import ValidationReport
from schema_reconciler.structural_comparison.diff_models import DiffResult
from schema_reconciler.type_parsing.record_models import RecordTypeDefinition


def serialize_diff(diff: DiffResult) -> dict[str, list[dict[str, Any]]]:
    """Convert a diff into plain dictionaries."""
    return {
        "added": [
            {"name": item.name, "type": item.type_text, "description": item.description}
            for item in diff.added
        ],
        "removed": [{"name": item.name, "type": item.type_text} for item in diff.removed],
        "modified": [
            {
                "name": item.name,
                "expected_type": item.expected_type_text,
                "actual_type": item.actual_type_text,
            }
            for item in diff.modified
        ],
    }


def serialize_comparison(
    selected_type: RecordTypeDefinition | None, diff: DiffResult
) -> dict[str, Any]:
    """Convert a comparison outcome into the ``{selected_type, diff}`` document."""
    return {
        "selected_type": selected_type.name if selected_type is not None else None,
        "diff": serialize_diff(diff),
    }


def serialize_validation_report(report: ValidationReport) -> dict[str, Any]:
    """Convert a validation report into plain dictionaries."""
    return {
        "is_valid": report.is_valid,
        "errors": [
            {
                "path": issue.path,
                "type": issue.kind.value,
                "expected": issue.expected,
                "actual": issue.actual,
                "message": issue.message,
            }
            for issue in report.errors
        ],
        "summary": {
            "total_errors": report.summary.total_errors,
            "missing_count": report.summary.missing_count,
            "type_mismatch_count": report.summary.type_mismatch_count,
            "extra_count": report.summary.extra_count,
        },
    }
