"""Structural comparison entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RootSelectionStrategy(str, Enum):
    """Tie-break used when several candidate types overlap the schema equally."""

    FIRST = "first"
    TIGHTEST = "tightest"


@dataclass(frozen=True)
class AddedField:
    """Field present in the schema but missing from the candidate type."""

    name: str
    type_text: str
    description: str | None = None


@dataclass(frozen=True)
class RemovedField:
    """Field declared by the candidate type but absent from the schema."""

    name: str
    type_text: str


@dataclass(frozen=True)
class ModifiedField:
    """Field present on both sides with incompatible type texts."""

    name: str
    expected_type_text: str
    actual_type_text: str


@dataclass
class DiffResult:
    """Accumulated added/removed/modified entries keyed by dotted path."""

    added: list[AddedField] = field(default_factory=list)
    removed: list[RemovedField] = field(default_factory=list)
    modified: list[ModifiedField] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Return True when both sides agree."""
        return not (self.added or self.removed or self.modified)

    def merge(self, other: DiffResult) -> None:
        """Append every entry of ``other`` to this result."""
        self.added.extend(other.added)
        self.removed.extend(other.removed)
        self.modified.extend(other.modified)
