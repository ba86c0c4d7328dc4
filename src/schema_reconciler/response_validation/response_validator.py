"""Runtime payload validation against endpoint schemas."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from schema_reconciler.schema_management.reference_resolver import resolve_schema
from schema_reconciler.schema_management.schema_models import SchemaDocument, SchemaNode

from .validation_outcomes import IssueKind, ValidationIssue, ValidationReport, ValidationSummary

logger = logging.getLogger(__name__)

ROOT_PATH = "response"


def validate_response(
    value: Any, schema: SchemaNode | None, document: SchemaDocument
) -> ValidationReport:
    """Validate a payload and summarise the findings."""
    issues = tuple(validate(value, schema, document, ROOT_PATH))
    logger.debug("Validation finished with %d issues", len(issues))
    return ValidationReport(errors=issues, summary=ValidationSummary.from_issues(issues))


def validate(
    value: Any, schema: SchemaNode | None, document: SchemaDocument, path: str = ROOT_PATH
) -> list[ValidationIssue]:
    """Return validation issues for ``value`` at ``path``.

    A type mismatch at a node is reported once and its children are not
    inspected.
    """
    issues: list[ValidationIssue] = []
    resolved = resolve_schema(schema, document)
    if resolved is None:
        return issues

    if not _type_matches(value, resolved.type_name):
        expected = _expected_label(resolved)
        actual = _actual_type(value)
        issues.append(
            ValidationIssue(
                path=path,
                kind=IssueKind.TYPE_MISMATCH,
                expected=expected,
                actual=actual,
                message=f"Expected type '{expected}' but got '{actual}'",
            )
        )
        return issues

    if resolved.type_name == "array":
        if resolved.items is not None:
            for index, item in enumerate(value):
                issues.extend(validate(item, resolved.items, document, f"{path}[{index}]"))
        return issues

    if resolved.has_object_shape:
        if not isinstance(value, Mapping):
            actual = _actual_type(value)
            issues.append(
                ValidationIssue(
                    path=path,
                    kind=IssueKind.TYPE_MISMATCH,
                    expected="object",
                    actual=actual,
                    message=f"Expected an object but got '{actual}'",
                )
            )
            return issues
        issues.extend(_validate_object(value, resolved, document, path))

    if resolved.enum and not any(_same_value(value, allowed) for allowed in resolved.enum):
        issues.append(
            ValidationIssue(
                path=path,
                kind=IssueKind.INVALID_VALUE,
                expected=f"one of: {', '.join(_display(allowed) for allowed in resolved.enum)}",
                actual=value,
                message=f"Value '{_display(value)}' is not in the allowed enum values",
            )
        )
    return issues


def _validate_object(
    value: Mapping[str, Any], schema: SchemaNode, document: SchemaDocument, path: str
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    declared_required = [name for name in schema.properties if name in schema.required]
    undeclared_required = sorted(schema.required.difference(schema.properties))
    for name in declared_required + undeclared_required:
        if name in value:
            continue
        prop = schema.properties.get(name)
        expected = "defined"
        if prop is not None:
            expected = _expected_label(resolve_schema(prop, document))
        issues.append(
            ValidationIssue(
                path=f"{path}.{name}",
                kind=IssueKind.MISSING,
                expected=expected,
                actual="undefined",
                message=f"Required property '{name}' is missing",
            )
        )

    for name, item in value.items():
        prop = schema.properties.get(name)
        if prop is not None:
            issues.extend(validate(item, prop, document, f"{path}.{name}"))
        elif schema.additional_properties is False:
            issues.append(
                ValidationIssue(
                    path=f"{path}.{name}",
                    kind=IssueKind.EXTRA,
                    expected="not defined",
                    actual=_actual_type(item),
                    message=f"Property '{name}' is not defined in schema",
                )
            )
    return issues


def _type_matches(value: Any, type_name: str | None) -> bool:
    if type_name == "array":
        return isinstance(value, list)
    if type_name == "object":
        return isinstance(value, Mapping)
    if type_name in ("integer", "number"):
        return isinstance(value, int | float) and not isinstance(value, bool)
    if type_name == "string":
        return isinstance(value, str)
    if type_name == "boolean":
        return isinstance(value, bool)
    return True


def _expected_label(schema: SchemaNode | None) -> str:
    if schema is None:
        return "unknown"
    if schema.type_name in ("array", "object"):
        return schema.type_name
    if schema.enum:
        return "enum: " + " | ".join(_display(allowed) for allowed in schema.enum)
    return schema.type_name or "unknown"


def _actual_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _same_value(value: Any, allowed: Any) -> bool:
    if isinstance(value, bool) or isinstance(allowed, bool):
        return isinstance(value, bool) and isinstance(allowed, bool) and value == allowed
    return bool(value == allowed)


def _display(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)
