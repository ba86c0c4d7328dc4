"""Configuration loader service."""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from schema_reconciler.structural_comparison.diff_models import RootSelectionStrategy

from .runtime_settings import (
    DIRECTIONS,
    ComparisonSettings,
    Configuration,
    SchemaSource,
    SynthesisSettings,
)

_IDENTIFIER_PREFIX = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        schema=_parse_schema_section(parsed.get("schema"), path.parent),
        comparison=_parse_comparison_section(parsed.get("comparison")),
        synthesis=_parse_synthesis_section(parsed.get("synthesis")),
    )


def configuration_for_schema(schema_path: Path | str) -> Configuration:
    """Build a default configuration around a schema file given on the command line."""
    path = Path(schema_path)
    if not path.exists():
        raise ConfigurationError(f"Schema file not found: {path}")
    return Configuration(
        path=None,
        schema=SchemaSource(text=path.read_text(encoding="utf-8"), source_path=path.resolve()),
        comparison=ComparisonSettings(),
        synthesis=SynthesisSettings(),
    )


def _parse_schema_section(value: Any, base_path: Path) -> SchemaSource:
    section = _require_mapping(value, "schema")
    inline = section.get("inline")
    path_value = section.get("path")
    if inline and path_value:
        raise ConfigurationError("Schema section must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("schema.inline must be a string.")
        return SchemaSource(text=inline, source_path=None)
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError("schema.path must be a string.")
        schema_path = _resolve_path(base_path, path_value)
        if not schema_path.exists():
            raise ConfigurationError(f"Schema file not found: {schema_path}")
        text = schema_path.read_text(encoding="utf-8")
        if not text.strip():
            raise ConfigurationError("Schema text cannot be empty.")
        return SchemaSource(text=text, source_path=schema_path)
    raise ConfigurationError("Schema section requires either inline or path.")


def _parse_comparison_section(value: Any) -> ComparisonSettings:
    if value is None:
        return ComparisonSettings()
    section = _require_mapping(value, "comparison")
    direction = _require_choice(
        section.get("direction", "response"), "comparison.direction", DIRECTIONS
    )
    root_selection = _require_choice(
        section.get("root_selection", RootSelectionStrategy.FIRST.value),
        "comparison.root_selection",
        tuple(strategy.value for strategy in RootSelectionStrategy),
    )
    return ComparisonSettings(
        direction=direction,
        root_selection=RootSelectionStrategy(root_selection),
    )


def _parse_synthesis_section(value: Any) -> SynthesisSettings:
    if value is None:
        return SynthesisSettings()
    section = _require_mapping(value, "synthesis")
    type_prefix = section.get("type_prefix", "Type")
    if not isinstance(type_prefix, str):
        raise ConfigurationError("synthesis.type_prefix must be a string.")
    if type_prefix and not _IDENTIFIER_PREFIX.match(type_prefix):
        raise ConfigurationError("synthesis.type_prefix must be a valid identifier prefix.")
    return SynthesisSettings(type_prefix=type_prefix)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_choice(value: Any, field_name: str, choices: tuple[str, ...]) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    normalized = value.strip().lower()
    if normalized not in choices:
        raise ConfigurationError(f"{field_name} must be one of: {', '.join(choices)}.")
    return normalized
