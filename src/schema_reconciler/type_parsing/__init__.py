"""Record-type parsing exports."""

from .record_models import FieldDefinition, RecordTypeDefinition
from .record_type_parser import ParseError, parse

__all__ = [
    "FieldDefinition",
    "ParseError",
    "RecordTypeDefinition",
    "parse",
]
