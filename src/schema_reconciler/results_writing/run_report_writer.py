"""Comparison and validation workbook writer service."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from schema_reconciler.response_validation.validation_outcomes import ValidationReport
from schema_reconciler.structural_comparison.diff_models import DiffResult

from .report_models import ChangeKind, RunMetadata

DIFF_SHEET_NAME = "Diff"
VALIDATION_SHEET_NAME = "Validation"
RUN_INFO_SHEET_NAME = "RunInfo"

DIFF_COLUMNS: tuple[str, ...] = ("Change", "Field", "Expected", "Actual", "Description")
VALIDATION_COLUMNS: tuple[str, ...] = ("Path", "Kind", "Expected", "Actual", "Message")


def write_diff_workbook(
    output_path: Path | str,
    diff: DiffResult,
    run_metadata: RunMetadata,
    selected_type: str | None = None,
) -> Path:
    """Write one row per diff entry plus a RunInfo sheet."""
    rows: list[tuple[Any, ...]] = []
    rows.extend(
        (ChangeKind.ADDED.value, item.name, item.type_text, None, item.description)
        for item in diff.added
    )
    rows.extend(
        (ChangeKind.REMOVED.value, item.name, None, item.type_text, None) for item in diff.removed
    )
    rows.extend(
        (ChangeKind.MODIFIED.value, item.name, item.expected_type_text, item.actual_type_text, None)
        for item in diff.modified
    )

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = DIFF_SHEET_NAME
    _write_table(sheet, DIFF_COLUMNS, rows)
    _write_run_info_sheet(
        workbook,
        run_metadata,
        (
            ("selected_type", selected_type),
            ("added", len(diff.added)),
            ("removed", len(diff.removed)),
            ("modified", len(diff.modified)),
        ),
    )
    return _save(workbook, output_path)


def write_validation_workbook(
    output_path: Path | str,
    report: ValidationReport,
    run_metadata: RunMetadata,
) -> Path:
    """Write one row per validation issue plus a RunInfo sheet."""
    rows = [
        (
            issue.path,
            issue.kind.value,
            issue.expected,
            _normalize_output_value(issue.actual),
            issue.message,
        )
        for issue in report.errors
    ]

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = VALIDATION_SHEET_NAME
    _write_table(sheet, VALIDATION_COLUMNS, rows)
    _write_run_info_sheet(
        workbook,
        run_metadata,
        (
            ("is_valid", report.is_valid),
            ("total_errors", report.summary.total_errors),
            ("missing", report.summary.missing_count),
            ("type_mismatch", report.summary.type_mismatch_count),
            ("extra", report.summary.extra_count),
        ),
    )
    return _save(workbook, output_path)


def _write_table(sheet, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    for column_index, header in enumerate(columns, start=1):
        cell = sheet.cell(row=1, column=column_index, value=header)
        cell.style = "Headline 1"

    widths = [len(header) for header in columns]
    for row_index, row in enumerate(rows, start=2):
        for column_index, value in enumerate(row, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)
            if value is not None:
                widths[column_index - 1] = max(widths[column_index - 1], len(str(value)))

    for column_index, width in enumerate(widths, start=1):
        sheet.column_dimensions[get_column_letter(column_index)].width = max(12, min(width + 4, 60))
    sheet.freeze_panes = "A2"


def _write_run_info_sheet(
    workbook,
    run_metadata: RunMetadata,
    counts: Sequence[tuple[str, Any]],
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("command", run_metadata.command),
        ("schema_source", run_metadata.schema_source),
        ("endpoint", run_metadata.endpoint_id),
        ("direction", run_metadata.direction),
        ("output_path", str(run_metadata.output_path)),
        *counts,
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
    sheet.column_dimensions["A"].width = 16
    sheet.column_dimensions["B"].width = 60


def _normalize_output_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return json.dumps(value, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return value


def _save(workbook, output_path: Path | str) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()
