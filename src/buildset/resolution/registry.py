"""Pipeline-local build registry.

The registry is created by the pipeline from the classifier's output and
passed explicitly through each stage; nothing about it is module-global.
Stages mutate it strictly in sequence: the partial stage retires partials,
the extension stage replaces extended entries with their resolved full
equivalent under the extending document's own name.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum

from buildset.resolution.conflicts import Conflict
from buildset.resolution.models import ClassifiedDocument, DocumentKind


class ResolutionState(str, Enum):
    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


class BuildRegistry:
    """Ordered mapping of document name to classified document plus state."""

    def __init__(self, documents: Iterable[ClassifiedDocument] = ()):
        self._entries: dict[str, ClassifiedDocument] = {}
        self._states: dict[str, ResolutionState] = {}
        # kind of every entry that has been removed, for error reporting
        self._retired: dict[str, DocumentKind] = {}
        self.conflicts: list[Conflict] = []
        for classified in documents:
            self.add(classified)

    # ── Mapping protocol ─────────────────────────────────────────

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __getitem__(self, name: str) -> ClassifiedDocument:
        return self._entries[name]

    def __iter__(self) -> Iterator[ClassifiedDocument]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        return list(self._entries)

    def of_kind(self, kind: DocumentKind) -> list[ClassifiedDocument]:
        return [entry for entry in self._entries.values() if entry.kind is kind]

    # ── Mutation ─────────────────────────────────────────────────

    def add(self, classified: ClassifiedDocument) -> None:
        if classified.name in self._entries:
            raise ValueError(f"Document {classified.name} is already registered")
        self._entries[classified.name] = classified
        self._states[classified.name] = (
            ResolutionState.RESOLVED
            if classified.kind is DocumentKind.FULL
            else ResolutionState.UNRESOLVED
        )

    def replace(self, classified: ClassifiedDocument) -> None:
        """Overwrite an existing entry, keeping its position."""
        if classified.name not in self._entries:
            raise KeyError(classified.name)
        self._entries[classified.name] = classified

    def remove(self, name: str) -> ClassifiedDocument:
        classified = self._entries.pop(name)
        self._states.pop(name, None)
        self._retired[name] = classified.kind
        return classified

    # ── State ────────────────────────────────────────────────────

    def state(self, name: str) -> ResolutionState:
        return self._states[name]

    def set_state(self, name: str, state: ResolutionState) -> None:
        self._states[name] = state

    def kind_of(self, name: str) -> DocumentKind | None:
        """Kind of *name*, including entries that were already removed."""
        if name in self._entries:
            return self._entries[name].kind
        return self._retired.get(name)

    def record_conflicts(self, conflicts: Iterable[Conflict]) -> None:
        self.conflicts.extend(conflicts)
