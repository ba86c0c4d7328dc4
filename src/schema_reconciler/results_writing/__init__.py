"""Results writing domain exports."""

from .report_models import ChangeKind, RunMetadata
from .report_serializers import serialize_comparison, serialize_diff, serialize_validation_report
from .run_report_writer import (
    DIFF_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    VALIDATION_SHEET_NAME,
    write_diff_workbook,
    write_validation_workbook,
)

__all__ = [
    "ChangeKind",
    "RunMetadata",
    "serialize_comparison",
    "serialize_diff",
    "serialize_validation_report",
    "DIFF_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "VALIDATION_SHEET_NAME",
    "write_diff_workbook",
    "write_validation_workbook",
]
