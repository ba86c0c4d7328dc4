"""Response validation entities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


class IssueKind(str, Enum):
    """Category of one payload validation finding."""

    MISSING = "missing"
    TYPE_MISMATCH = "type_mismatch"
    EXTRA = "extra"
    INVALID_VALUE = "invalid_value"


@dataclass(frozen=True)
class ValidationIssue:
    """One validation error located by its dotted/indexed payload path."""

    path: str
    kind: IssueKind
    message: str
    expected: str | None = None
    actual: object | None = None


@dataclass(frozen=True)
class ValidationSummary:
    """Per-kind issue counters."""

    total_errors: int
    missing_count: int
    type_mismatch_count: int
    extra_count: int

    @classmethod
    def from_issues(cls, issues: Sequence[ValidationIssue]) -> ValidationSummary:
        """Count issues by kind."""
        return cls(
            total_errors=len(issues),
            missing_count=sum(1 for issue in issues if issue.kind is IssueKind.MISSING),
            type_mismatch_count=sum(
                1 for issue in issues if issue.kind is IssueKind.TYPE_MISMATCH
            ),
            extra_count=sum(1 for issue in issues if issue.kind is IssueKind.EXTRA),
        )


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of validating one payload against one schema."""

    errors: tuple[ValidationIssue, ...]
    summary: ValidationSummary

    @property
    def is_valid(self) -> bool:
        """Return True when no issues were found."""
        return not self.errors
