"""Reconciliation use-case services."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from schema_reconciler.configuration import (
    ConfigurationError,
    configuration_for_schema,
    load_configuration,
)
from schema_reconciler.configuration.runtime_settings import ComparisonSettings
from schema_reconciler.response_validation import validate_response
from schema_reconciler.results_writing import (
    RunMetadata,
    write_diff_workbook,
    write_validation_workbook,
)
from schema_reconciler.schema_management import (
    Endpoint,
    SchemaError,
    SchemaNode,
    load_schema_document,
)
from schema_reconciler.structural_comparison import (
    RootSelectionStrategy,
    compare,
    select_root_type,
)
from schema_reconciler.type_parsing import ParseError, parse
from schema_reconciler.type_synthesis import generate_endpoint_types

from .run_contracts import (
    CompareOutcome,
    CompareRequest,
    GenerateOutcome,
    GenerateRequest,
    RunArtifacts,
    SourceRequest,
    ValidateOutcome,
    ValidateRequest,
)

logger = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


class NoRecordTypesFoundError(RunExecutionError):
    """Raised when the record-type source declares no interfaces or object aliases."""


class MissingSchemaError(RunExecutionError):
    """Raised when an endpoint is unknown or lacks the requested schema."""


def load_run_artifacts(source: SourceRequest) -> RunArtifacts:
    """Load the configuration and schema document named by ``source``."""
    if bool(source.config_path) == bool(source.schema_path):
        raise RunExecutionError("Provide exactly one of a configuration file or a schema file.")
    try:
        configuration = (
            load_configuration(source.config_path)
            if source.config_path
            else configuration_for_schema(source.schema_path or "")
        )
        document = load_schema_document(
            configuration.schema.text, source_path=configuration.schema.source_path
        )
    except (ConfigurationError, SchemaError, OSError, UnicodeDecodeError) as exc:
        raise RunExecutionError(str(exc)) from exc
    logger.info(
        "Loaded %s document with %d endpoints", document.spec_version, len(document.endpoints)
    )
    return RunArtifacts(configuration=configuration, document=document)


def list_endpoints(source: SourceRequest) -> tuple[Endpoint, ...]:
    """Return every endpoint of the configured schema document."""
    return load_run_artifacts(source).document.endpoints


def execute_type_generation(request: GenerateRequest) -> GenerateOutcome:
    """Generate declarations for the requested endpoints, or all endpoints when none given."""
    artifacts = load_run_artifacts(request.source)
    document = artifacts.document
    if request.endpoint_ids:
        endpoints = tuple(
            _require_endpoint(artifacts, endpoint_id)
            for endpoint_id in dict.fromkeys(request.endpoint_ids)
        )
    else:
        endpoints = document.endpoints

    text = generate_endpoint_types(
        endpoints, document, type_prefix=artifacts.configuration.synthesis.type_prefix
    )
    logger.info("Generated declarations for %d endpoints", len(endpoints))

    output_path: Path | None = None
    if request.output_path:
        output_path = Path(request.output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise RunExecutionError(str(exc)) from exc
        output_path = output_path.resolve()
    return GenerateOutcome(
        text=text,
        endpoint_ids=tuple(endpoint.id for endpoint in endpoints),
        output_path=output_path,
    )


def execute_structural_comparison(request: CompareRequest) -> CompareOutcome:
    """Compare record types from a source file against one endpoint schema."""
    run_start = datetime.now(UTC)
    artifacts = load_run_artifacts(request.source)
    settings = _comparison_settings(artifacts.configuration.comparison, request)
    endpoint = _require_endpoint(artifacts, request.endpoint_id)
    expected_schema = _require_schema(endpoint, settings.direction)

    try:
        source_text = Path(request.types_path).read_text(encoding="utf-8")
        record_types = parse(source_text)
    except (OSError, UnicodeDecodeError, ParseError) as exc:
        raise RunExecutionError(str(exc)) from exc
    if not record_types:
        raise NoRecordTypesFoundError("No interfaces found in the provided TypeScript code")

    selected = select_root_type(
        expected_schema, record_types, artifacts.document, settings.root_selection
    )
    if selected is None:
        raise NoRecordTypesFoundError("No interfaces found in the provided TypeScript code")
    diff = compare(expected_schema, selected, artifacts.document, record_types)
    logger.info(
        "Compared %s against %s %s: %d added, %d removed, %d modified",
        selected.name,
        endpoint.id,
        settings.direction,
        len(diff.added),
        len(diff.removed),
        len(diff.modified),
    )

    report_path: Path | None = None
    if request.report_path:
        metadata = _run_metadata(
            run_start, "compare", artifacts, endpoint, settings.direction, request.report_path
        )
        report_path = _write_report(
            write_diff_workbook, request.report_path, diff, metadata, selected_type=selected.name
        )
    return CompareOutcome(
        endpoint_id=endpoint.id,
        direction=settings.direction,
        selected_type=selected,
        diff=diff,
        report_path=report_path,
    )


def execute_response_validation(request: ValidateRequest) -> ValidateOutcome:
    """Validate a JSON payload file against one endpoint's response schema."""
    run_start = datetime.now(UTC)
    artifacts = load_run_artifacts(request.source)
    endpoint = _require_endpoint(artifacts, request.endpoint_id)
    response_schema = _require_schema(endpoint, "response")
    payload = _read_payload(request.payload_path)

    report = validate_response(payload, response_schema, artifacts.document)
    logger.info(
        "Validated payload against %s: %d issues", endpoint.id, report.summary.total_errors
    )

    report_path: Path | None = None
    if request.report_path:
        metadata = _run_metadata(
            run_start, "validate", artifacts, endpoint, "response", request.report_path
        )
        report_path = _write_report(
            write_validation_workbook, request.report_path, report, metadata
        )
    return ValidateOutcome(endpoint_id=endpoint.id, report=report, report_path=report_path)


def _comparison_settings(
    configured: ComparisonSettings, request: CompareRequest
) -> ComparisonSettings:
    settings = configured
    if request.direction:
        settings = replace(settings, direction=request.direction)
    if request.root_selection:
        settings = replace(settings, root_selection=RootSelectionStrategy(request.root_selection))
    return settings


def _require_endpoint(artifacts: RunArtifacts, endpoint_id: str) -> Endpoint:
    endpoint = artifacts.document.find_endpoint(endpoint_id)
    if endpoint is None:
        raise MissingSchemaError(f"Endpoint not found: {endpoint_id}")
    return endpoint


def _require_schema(endpoint: Endpoint, direction: str) -> SchemaNode:
    schema = endpoint.request_schema if direction == "request" else endpoint.response_schema
    if schema is None:
        raise MissingSchemaError(f"Endpoint {endpoint.id} has no {direction} schema defined")
    return schema


def _read_payload(payload_path: str) -> Any:
    try:
        return json.loads(Path(payload_path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RunExecutionError(f"Payload is not valid JSON: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise RunExecutionError(str(exc)) from exc


def _run_metadata(  # pylint: disable=too-many-arguments
    run_start: datetime,
    command: str,
    artifacts: RunArtifacts,
    endpoint: Endpoint,
    direction: str,
    output_path: str,
) -> RunMetadata:
    return RunMetadata(
        run_start=run_start,
        command=command,
        schema_source=artifacts.schema_source,
        endpoint_id=endpoint.id,
        direction=direction,
        output_path=Path(output_path).resolve(),
    )


def _write_report(writer, output_path: str, *args: Any, **kwargs: Any) -> Path:
    try:
        return writer(output_path, *args, **kwargs)
    except OSError as exc:
        raise RunExecutionError(str(exc)) from exc
