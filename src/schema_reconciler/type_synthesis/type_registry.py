"""Per-synthesis registry of referenced schemas awaiting emission."""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass, field

from schema_reconciler.schema_management.reference_resolver import reference_name
from schema_reconciler.schema_management.schema_models import SchemaNode

_NON_IDENTIFIER_CHARACTERS = re.compile(r"[^A-Za-z0-9_$]")


@dataclass
class RegistryEntry:
    """Synthesized name and schema for one reference token."""

    name: str
    schema: SchemaNode
    emitted: bool = False


@dataclass
class TypeRegistry:
    """Worklist guaranteeing one named declaration per reference token."""

    type_prefix: str = "Type"
    entries: dict[str, RegistryEntry] = field(default_factory=dict)
    reserved_names: set[str] = field(default_factory=set)
    _pending: deque[str] = field(default_factory=deque)

    def register(self, ref: str, schema: SchemaNode) -> RegistryEntry:
        """Return the entry for ``ref``, creating and queueing it on first sight."""
        entry = self.entries.get(ref)
        if entry is not None:
            return entry
        entry = RegistryEntry(name=self._unique_name(ref), schema=schema)
        self.entries[ref] = entry
        self.reserved_names.add(entry.name)
        self._pending.append(ref)
        return entry

    def next_pending(self) -> RegistryEntry | None:
        """Pop the oldest registered entry that has not been emitted yet."""
        while self._pending:
            entry = self.entries[self._pending.popleft()]
            if not entry.emitted:
                return entry
        return None

    def _unique_name(self, ref: str) -> str:
        base = f"{self.type_prefix}{clean_reference_name(ref)}"
        candidate = base
        suffix = 2
        while candidate in self.reserved_names:
            candidate = f"{base}{suffix}"
            suffix += 1
        return candidate


def clean_reference_name(ref: str) -> str:
    """Strip dotted namespaces and non-identifier characters from a reference name."""
    last_segment = reference_name(ref).split(".")[-1]
    return _NON_IDENTIFIER_CHARACTERS.sub("", last_segment)
