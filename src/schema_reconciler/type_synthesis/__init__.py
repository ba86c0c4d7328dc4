"""Type synthesis exports."""

from .endpoint_types import endpoint_type_name, generate_endpoint_types
from .type_registry import RegistryEntry, TypeRegistry, clean_reference_name
from .type_synthesizer import SchemaSelection, TypeRenderer, synthesize

__all__ = [
    "RegistryEntry",
    "SchemaSelection",
    "TypeRegistry",
    "TypeRenderer",
    "clean_reference_name",
    "endpoint_type_name",
    "generate_endpoint_types",
    "synthesize",
]
