"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from schema_reconciler.structural_comparison.diff_models import RootSelectionStrategy

DIRECTIONS: tuple[str, ...] = ("request", "response")


@dataclass(frozen=True)
class SchemaSource:
    """Normalized schema document settings."""

    text: str
    source_path: Path | None


@dataclass(frozen=True)
class ComparisonSettings:
    """Which endpoint schema to compare and how to pick the root type."""

    direction: str = "response"
    root_selection: RootSelectionStrategy = RootSelectionStrategy.FIRST


@dataclass(frozen=True)
class SynthesisSettings:
    """Naming settings for generated declarations."""

    type_prefix: str = "Type"


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    schema: SchemaSource
    comparison: ComparisonSettings
    synthesis: SynthesisSettings
