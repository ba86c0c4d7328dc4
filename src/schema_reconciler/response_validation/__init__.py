"""Response validation exports."""

from .response_validator import ROOT_PATH, validate, validate_response
from .validation_outcomes import IssueKind, ValidationIssue, ValidationReport, ValidationSummary

__all__ = [
    "IssueKind",
    "ROOT_PATH",
    "ValidationIssue",
    "ValidationReport",
    "ValidationSummary",
    "validate",
    "validate_response",
]
