"""Record-type parsing entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FieldDefinition:
    """One named field of a record type with its declared type text."""

    name: str
    type_text: str
    optional: bool


@dataclass(frozen=True)
class RecordTypeDefinition:
    """A named record type (interface or object type alias)."""

    name: str
    fields: Mapping[str, FieldDefinition] = field(default_factory=dict)

    @property
    def field_names(self) -> tuple[str, ...]:
        """Return field names in declaration order."""
        return tuple(self.fields)
