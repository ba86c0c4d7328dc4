"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from schema_reconciler.configuration.runtime_settings import Configuration
from schema_reconciler.response_validation.validation_outcomes import ValidationReport
from schema_reconciler.schema_management.schema_models import SchemaDocument
from schema_reconciler.structural_comparison.diff_models import DiffResult
from schema_reconciler.type_parsing.record_models import RecordTypeDefinition


@dataclass(frozen=True)
class SourceRequest:
    """Where to read the schema document from; exactly one field is set."""

    config_path: str | None = None
    schema_path: str | None = None


@dataclass(frozen=True)
class GenerateRequest:
    """Input contract for generating endpoint type declarations."""

    source: SourceRequest
    endpoint_ids: tuple[str, ...] = ()
    output_path: str | None = None


@dataclass(frozen=True)
class GenerateOutcome:
    """Generated declaration text and where it was written."""

    text: str
    endpoint_ids: tuple[str, ...]
    output_path: Path | None


@dataclass(frozen=True)
class CompareRequest:
    """Input contract for comparing record types against an endpoint schema."""

    source: SourceRequest
    endpoint_id: str
    types_path: str
    direction: str | None = None
    root_selection: str | None = None
    report_path: str | None = None


@dataclass(frozen=True)
class CompareOutcome:
    """Selected root type and the diff against the endpoint schema."""

    endpoint_id: str
    direction: str
    selected_type: RecordTypeDefinition
    diff: DiffResult
    report_path: Path | None


@dataclass(frozen=True)
class ValidateRequest:
    """Input contract for validating a JSON payload against an endpoint response."""

    source: SourceRequest
    endpoint_id: str
    payload_path: str
    report_path: str | None = None


@dataclass(frozen=True)
class ValidateOutcome:
    """Validation report for one payload."""

    endpoint_id: str
    report: ValidationReport
    report_path: Path | None


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded domain artifacts required during run execution."""

    configuration: Configuration
    document: SchemaDocument

    @property
    def schema_source(self) -> str:
        """Describe where the schema text came from."""
        source_path = self.configuration.schema.source_path
        return str(source_path) if source_path is not None else "inline"
