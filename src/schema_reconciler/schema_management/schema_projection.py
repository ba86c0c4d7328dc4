"""Schema document loading service."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .endpoint_extraction import extract_endpoints
from .schema_models import SchemaDocument
from .schema_translation import translate_named_schemas

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


class SchemaError(Exception):
    """Raised for schema document parsing failures."""


def load_schema_file(path: Path | str) -> SchemaDocument:
    """Read and translate a Swagger/OpenAPI document from disk."""
    schema_path = Path(path)
    if not schema_path.exists():
        raise SchemaError(f"Schema file not found: {schema_path}")
    text = schema_path.read_text(encoding="utf-8")
    return load_schema_document(text, source_path=schema_path)


def load_schema_document(text: str, source_path: Path | None = None) -> SchemaDocument:
    """Parse schema text (JSON, or YAML for ``.yaml``/``.yml`` sources) into a document."""
    root = _parse_text(text, source_path)
    if not isinstance(root, Mapping):
        raise SchemaError("Schema document root must be an object.")

    spec_version = root.get("openapi") or root.get("swagger")
    if not spec_version:
        raise SchemaError(
            "The document does not appear to be a valid Swagger/OpenAPI specification."
        )

    components = root.get("components")
    component_schemas = components.get("schemas") if isinstance(components, Mapping) else None
    document = SchemaDocument(
        spec_version=str(spec_version),
        definitions=translate_named_schemas(root.get("definitions")),
        component_schemas=translate_named_schemas(component_schemas),
        endpoints=extract_endpoints(root.get("paths")),
        source_path=source_path,
    )
    logger.debug(
        "Loaded %s document with %d definitions, %d component schemas, %d endpoints",
        document.spec_version,
        len(document.definitions),
        len(document.component_schemas),
        len(document.endpoints),
    )
    return document


def _parse_text(text: str, source_path: Path | None) -> Any:
    if source_path is not None and source_path.suffix.lower() in _YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SchemaError(f"Invalid YAML schema document: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid JSON schema document: {exc}") from exc
