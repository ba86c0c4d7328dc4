"""Recursive structural comparison of a schema against parsed record types."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from schema_reconciler.schema_management.reference_resolver import resolve_schema
from schema_reconciler.schema_management.schema_models import SchemaDocument, SchemaNode
from schema_reconciler.type_parsing.record_models import RecordTypeDefinition

from .diff_models import AddedField, DiffResult, ModifiedField, RemovedField, RootSelectionStrategy
from .type_equivalence import expected_type_text, types_match

logger = logging.getLogger(__name__)

_ARRAY_GENERIC = re.compile(r"^(?:Readonly)?Array<(?P<element>.+)>$")


@dataclass
class _ComparisonState:
    """Schema/type pairs currently being compared on the recursion stack."""

    active: set[tuple[int, str]] = field(default_factory=set)


def compare(
    expected_schema: SchemaNode | None,
    candidate_type: RecordTypeDefinition,
    document: SchemaDocument,
    all_candidate_types: Mapping[str, RecordTypeDefinition] | None = None,
    path_prefix: str = "",
) -> DiffResult:
    """Return the added/removed/modified diff between a schema and a record type.

    Nested record types named in ``all_candidate_types`` are compared
    recursively and reported with dotted paths.
    """
    return _compare(
        expected_schema,
        candidate_type,
        document,
        all_candidate_types or {},
        path_prefix,
        _ComparisonState(),
    )


def select_root_type(
    expected_schema: SchemaNode | None,
    candidates: Mapping[str, RecordTypeDefinition],
    document: SchemaDocument,
    strategy: RootSelectionStrategy = RootSelectionStrategy.FIRST,
) -> RecordTypeDefinition | None:
    """Pick the candidate whose field names overlap the schema properties the most.

    Ties keep the first candidate in input order, or with
    ``RootSelectionStrategy.TIGHTEST`` the one with fewer extra fields.
    """
    resolved = resolve_schema(expected_schema, document)
    expected_names = set(resolved.properties) if resolved is not None else set()

    selected: RecordTypeDefinition | None = None
    best_overlap = -1
    best_extra = 0
    for candidate in candidates.values():
        overlap = sum(1 for name in candidate.fields if name in expected_names)
        extra = len(candidate.fields) - overlap
        if overlap > best_overlap or (
            overlap == best_overlap
            and strategy is RootSelectionStrategy.TIGHTEST
            and extra < best_extra
        ):
            selected, best_overlap, best_extra = candidate, overlap, extra

    if selected is not None:
        logger.debug("Selected root type %s with overlap %d", selected.name, best_overlap)
    return selected


def _compare(  # pylint: disable=too-many-arguments
    expected_schema: SchemaNode | None,
    candidate_type: RecordTypeDefinition,
    document: SchemaDocument,
    all_candidate_types: Mapping[str, RecordTypeDefinition],
    path_prefix: str,
    state: _ComparisonState,
) -> DiffResult:
    diff = DiffResult()
    expected = resolve_schema(expected_schema, document)
    if expected is None or not expected.has_object_shape:
        return diff

    key = (id(expected), candidate_type.name)
    if key in state.active:
        logger.debug("Skipping recursive revisit of %s at %s", candidate_type.name, path_prefix)
        return diff
    state.active.add(key)
    try:
        _collect_differences(
            expected, candidate_type, document, all_candidate_types, path_prefix, state, diff
        )
    finally:
        state.active.discard(key)
    return diff


def _collect_differences(  # pylint: disable=too-many-arguments
    expected: SchemaNode,
    candidate_type: RecordTypeDefinition,
    document: SchemaDocument,
    all_candidate_types: Mapping[str, RecordTypeDefinition],
    path_prefix: str,
    state: _ComparisonState,
    diff: DiffResult,
) -> None:
    actual_fields = candidate_type.fields
    for name, prop in expected.properties.items():
        if name not in actual_fields:
            diff.added.append(
                AddedField(
                    name=_join_path(path_prefix, name),
                    type_text=expected_type_text(prop, optional=name not in expected.required),
                    description=prop.description,
                )
            )

    for name, field_definition in actual_fields.items():
        if name not in expected.properties:
            diff.removed.append(
                RemovedField(
                    name=_join_path(path_prefix, name), type_text=field_definition.type_text
                )
            )

    for name, prop in expected.properties.items():
        field_definition = actual_fields.get(name)
        if field_definition is None:
            continue
        full_name = _join_path(path_prefix, name)
        nested = _nested_target(prop, field_definition.type_text, document, all_candidate_types)
        if nested is not None:
            nested_schema, nested_type = nested
            diff.merge(
                _compare(
                    nested_schema, nested_type, document, all_candidate_types, full_name, state
                )
            )
            continue

        expected_text = expected_type_text(prop, optional=name not in expected.required)
        if not types_match(expected_text, field_definition.type_text):
            diff.modified.append(
                ModifiedField(
                    name=full_name,
                    expected_type_text=expected_text,
                    actual_type_text=field_definition.type_text,
                )
            )


def _nested_target(
    prop: SchemaNode,
    actual_type_text: str,
    document: SchemaDocument,
    all_candidate_types: Mapping[str, RecordTypeDefinition],
) -> tuple[SchemaNode, RecordTypeDefinition] | None:
    type_name, is_array = _element_type_name(actual_type_text)
    nested_type = all_candidate_types.get(type_name)
    if nested_type is None:
        return None

    effective = resolve_schema(prop, document)
    if is_array and effective is not None and effective.type_name == "array":
        effective = resolve_schema(effective.items, document)
    if effective is None or not effective.has_object_shape:
        return None
    return effective, nested_type


def _element_type_name(type_text: str) -> tuple[str, bool]:
    stripped = type_text.strip()
    if stripped.endswith("[]"):
        return stripped[:-2].strip(), True
    generic = _ARRAY_GENERIC.match(stripped)
    if generic is not None:
        return generic.group("element").strip(), True
    return stripped, False


def _join_path(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name
