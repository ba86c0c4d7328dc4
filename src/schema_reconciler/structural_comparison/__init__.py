"""Structural comparison exports."""

from .diff_models import (
    AddedField,
    DiffResult,
    ModifiedField,
    RemovedField,
    RootSelectionStrategy,
)
from .structural_comparator import compare, select_root_type
from .type_equivalence import CORE_TYPES, expected_type_text, types_match

__all__ = [
    "AddedField",
    "CORE_TYPES",
    "DiffResult",
    "ModifiedField",
    "RemovedField",
    "RootSelectionStrategy",
    "compare",
    "expected_type_text",
    "select_root_type",
    "types_match",
]
