"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys

import click

from schema_reconciler.configuration import (
    DEFAULT_CONFIG_FILENAME,
    DIRECTIONS,
    write_placeholder_configuration,
)
from schema_reconciler.results_writing import serialize_comparison, serialize_validation_report
from schema_reconciler.run_execution import (
    CompareRequest,
    GenerateRequest,
    RunExecutionError,
    SourceRequest,
    ValidateRequest,
    execute_response_validation,
    execute_structural_comparison,
    execute_type_generation,
    list_endpoints,
)
from schema_reconciler.structural_comparison import RootSelectionStrategy


class CliError(Exception):
    """Custom CLI error."""


def _source_options(command):
    command = click.option(
        "--schema",
        "schema_path",
        required=False,
        type=click.Path(path_type=str),
        help="Path to a Swagger/OpenAPI document (JSON or YAML)",
    )(command)
    command = click.option(
        "--config",
        "config_path",
        required=False,
        type=click.Path(path_type=str),
        help="Path to the YAML reconciler configuration file",
    )(command)
    return command


def _source_request(config_path: str | None, schema_path: str | None) -> SourceRequest:
    if bool(config_path) == bool(schema_path):
        raise click.UsageError("Provide exactly one of --config or --schema.")
    return SourceRequest(config_path=config_path, schema_path=schema_path)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-type-reconciler")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Reconcile Swagger/OpenAPI schemas with TypeScript record types."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML reconciler configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="endpoints")
@_source_options
def endpoints(config_path: str | None, schema_path: str | None) -> None:
    """List endpoint ids and which schemas they carry."""
    source = _source_request(config_path, schema_path)
    try:
        found = list_endpoints(source)
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    for endpoint in found:
        carried = [
            label
            for label, schema in (
                ("request", endpoint.request_schema),
                ("response", endpoint.response_schema),
            )
            if schema is not None
        ]
        summary = f"  {endpoint.summary}" if endpoint.summary != endpoint.id else ""
        click.echo(f"{endpoint.id}\t[{', '.join(carried) or '-'}]{summary}")


@cli.command(name="generate")
@_source_options
@click.option(
    "--endpoint",
    "endpoint_ids",
    multiple=True,
    help="Endpoint id such as 'GET /users'; repeatable. Defaults to every endpoint.",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the declaration file to write instead of printing it",
)
def generate(
    config_path: str | None,
    schema_path: str | None,
    endpoint_ids: tuple[str, ...],
    output_path: str | None,
) -> None:
    """Generate TypeScript declarations from endpoint schemas."""
    source = _source_request(config_path, schema_path)
    try:
        outcome = execute_type_generation(
            GenerateRequest(source=source, endpoint_ids=endpoint_ids, output_path=output_path)
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    if outcome.output_path is not None:
        click.echo(str(outcome.output_path))
    else:
        click.echo(outcome.text, nl=False)


@cli.command(name="compare")
@_source_options
@click.option("--endpoint", "endpoint_id", required=True, help="Endpoint id such as 'GET /users'")
@click.option(
    "--types",
    "types_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the TypeScript record-type source",
)
@click.option(
    "--direction",
    type=click.Choice(DIRECTIONS, case_sensitive=False),
    default=None,
    help="Compare against the request or response schema (overrides configuration)",
)
@click.option(
    "--root-selection",
    "root_selection",
    type=click.Choice([strategy.value for strategy in RootSelectionStrategy]),
    default=None,
    help="Tie-break between equally overlapping root types (overrides configuration)",
)
@click.option(
    "--report",
    "report_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional .xlsx diff report to write",
)
def compare_types(  # pylint: disable=too-many-arguments
    config_path: str | None,
    schema_path: str | None,
    endpoint_id: str,
    types_path: str,
    direction: str | None,
    root_selection: str | None,
    report_path: str | None,
) -> None:
    """Diff record types against an endpoint schema and print the JSON result."""
    source = _source_request(config_path, schema_path)
    try:
        outcome = execute_structural_comparison(
            CompareRequest(
                source=source,
                endpoint_id=endpoint_id,
                types_path=types_path,
                direction=direction.lower() if direction else None,
                root_selection=root_selection,
                report_path=report_path,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(json.dumps(serialize_comparison(outcome.selected_type, outcome.diff), indent=2))
    if outcome.report_path is not None:
        click.echo(f"report written: {outcome.report_path}", err=True)


@cli.command(name="validate")
@_source_options
@click.option("--endpoint", "endpoint_id", required=True, help="Endpoint id such as 'GET /users'")
@click.option(
    "--payload",
    "payload_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON payload to validate",
)
@click.option(
    "--report",
    "report_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional .xlsx validation report to write",
)
def validate_payload(
    config_path: str | None,
    schema_path: str | None,
    endpoint_id: str,
    payload_path: str,
    report_path: str | None,
) -> None:
    """Validate a JSON payload against an endpoint response schema."""
    source = _source_request(config_path, schema_path)
    try:
        outcome = execute_response_validation(
            ValidateRequest(
                source=source,
                endpoint_id=endpoint_id,
                payload_path=payload_path,
                report_path=report_path,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(json.dumps(serialize_validation_report(outcome.report), indent=2, default=str))
    if outcome.report_path is not None:
        click.echo(f"report written: {outcome.report_path}", err=True)
    if not outcome.report.is_valid:
        raise CliError(f"Payload has {outcome.report.summary.total_errors} validation errors.")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
