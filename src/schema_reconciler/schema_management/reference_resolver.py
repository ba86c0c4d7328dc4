"""Local ``$ref`` resolution against a loaded schema document."""

from __future__ import annotations

import logging

from .schema_models import SchemaDocument, SchemaNode

logger = logging.getLogger(__name__)

_DEFINITIONS_PREFIX = "#/definitions/"
_COMPONENT_SCHEMAS_PREFIX = "#/components/schemas/"


def resolve(ref: str, document: SchemaDocument) -> SchemaNode | None:
    """Return the schema a local reference token points to.

    Only ``#/definitions/<Name>`` and ``#/components/schemas/<Name>`` are
    understood. Any other token, or a name missing from the document, yields
    ``None`` rather than an error.
    """
    if ref.startswith(_DEFINITIONS_PREFIX):
        table, name = document.definitions, ref[len(_DEFINITIONS_PREFIX) :]
    elif ref.startswith(_COMPONENT_SCHEMAS_PREFIX):
        table, name = document.component_schemas, ref[len(_COMPONENT_SCHEMAS_PREFIX) :]
    else:
        logger.debug("Unsupported reference token: %s", ref)
        return None

    if not name or "/" in name:
        logger.debug("Reference does not name a schema directly: %s", ref)
        return None

    resolved = table.get(_unescape_pointer(name))
    if resolved is None:
        logger.debug("Unresolvable reference: %s", ref)
    return resolved


def resolve_schema(node: SchemaNode | None, document: SchemaDocument) -> SchemaNode | None:
    """Follow reference nodes until a concrete schema is reached.

    Returns ``None`` for an unresolvable token or a chain of references that
    loops back on itself.
    """
    seen: set[str] = set()
    current = node
    while current is not None and current.is_reference:
        ref = current.ref or ""
        if ref in seen:
            logger.debug("Reference cycle without a concrete schema: %s", ref)
            return None
        seen.add(ref)
        current = resolve(ref, document)
    return current


def reference_name(ref: str) -> str:
    """Return the last path segment of a reference token."""
    return _unescape_pointer(ref.rsplit("/", 1)[-1])


def _unescape_pointer(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")
