"""Schema management exports."""

from .endpoint_extraction import extract_endpoints
from .reference_resolver import reference_name, resolve, resolve_schema
from .schema_models import Endpoint, SchemaDocument, SchemaKind, SchemaNode
from .schema_projection import SchemaError, load_schema_document, load_schema_file
from .schema_translation import schema_node_from_raw

__all__ = [
    "Endpoint",
    "SchemaDocument",
    "SchemaError",
    "SchemaKind",
    "SchemaNode",
    "extract_endpoints",
    "load_schema_document",
    "load_schema_file",
    "reference_name",
    "resolve",
    "resolve_schema",
    "schema_node_from_raw",
]
