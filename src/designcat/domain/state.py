"""Read-side view over a resolved, merged catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from designcat.domain.model import Level, Status

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from designcat.domain.model import Entry, LoadResult


@dataclass(frozen=True, slots=True)
class CatalogCounts:
    total: int = 0
    atoms: int = 0
    molecules: int = 0
    organisms: int = 0
    draft: int = 0
    ready: int = 0
    with_notes: int = 0
    with_tags: int = 0
    with_dependencies: int = 0

    @classmethod
    def of(cls, entries: Iterable[Entry]) -> CatalogCounts:
        levels = dict.fromkeys(Level, 0)
        statuses = dict.fromkeys(Status, 0)
        total = with_notes = with_tags = with_dependencies = 0
        for entry in entries:
            total += 1
            levels[entry.level] += 1
            statuses[entry.status] += 1
            with_notes += bool(entry.notes)
            with_tags += bool(entry.tags)
            with_dependencies += bool(entry.dependencies)
        return cls(
            total=total,
            atoms=levels[Level.ATOM],
            molecules=levels[Level.MOLECULE],
            organisms=levels[Level.ORGANISM],
            draft=statuses[Status.DRAFT],
            ready=statuses[Status.READY],
            with_notes=with_notes,
            with_tags=with_tags,
            with_dependencies=with_dependencies,
        )

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def level_percentages(self) -> dict[Level, int]:
        if not self.total:
            return dict.fromkeys(Level, 0)
        return {
            Level.ATOM: round(self.atoms / self.total * 100),
            Level.MOLECULE: round(self.molecules / self.total * 100),
            Level.ORGANISM: round(self.organisms / self.total * 100),
        }


class CatalogState:
    """Snapshot of the catalog handed to presentation code.

    All queries are pure: they never mutate the snapshot and never raise for
    unknown ids or odd queries.
    """

    def __init__(self, entries: Iterable[Entry], *, load_result: LoadResult | None = None) -> None:
        self._entries: tuple[Entry, ...] = tuple(entries)
        self._index = {entry.id: entry for entry in self._entries}
        self._counts = CatalogCounts.of(self._entries)
        self._load_result = load_result

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    @property
    def counts(self) -> CatalogCounts:
        return self._counts

    @property
    def last_load(self) -> LoadResult | None:
        """The resolution outcome this snapshot was built from, if any."""
        return self._load_result

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def by_id(self, entry_id: str) -> Entry | None:
        return self._index.get(entry_id)

    def search(self, query: str | None) -> list[Entry]:
        """Case-insensitive substring match on name, description, notes and tags."""

        needle = (query or "").strip().lower()
        if not needle:
            return list(self._entries)
        return [entry for entry in self._entries if needle in _haystack(entry)]

    def filter(self, predicate: Callable[[Entry], bool]) -> list[Entry]:
        return [entry for entry in self._entries if predicate(entry)]

    def level_percentages(self) -> dict[Level, int]:
        return self._counts.level_percentages()

    def broken_dependencies(self) -> list[tuple[str, str]]:
        """``(entry id, dependency id)`` pairs whose dependency is not in the catalog."""

        return [
            (entry.id, dependency)
            for entry in self._entries
            for dependency in entry.dependencies
            if dependency not in self._index
        ]


def _haystack(entry: Entry) -> str:
    parts = [entry.name, entry.description or "", entry.notes or "", *entry.tags]
    return "\n".join(parts).lower()
