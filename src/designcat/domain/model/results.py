"""Result records describing validation, resolution and import outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field

from .entry import Entry  # noqa: TC001
from .enums import LoadSource  # noqa: TC001


@dataclass(frozen=True, slots=True)
class ValidationResult:
    issues: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.issues


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Provenance-tagged outcome of one resolution attempt."""

    entries: tuple[Entry, ...]
    source: LoadSource
    locator: str | None = None
    error: str | None = None

    @property
    def count(self) -> int:
        return len(self.entries)


@dataclass(slots=True)
class ImportSummary:
    total: int = 0
    valid: int = 0
    invalid: int = 0
    skipped: int = 0


@dataclass(slots=True)
class ImportResult:
    entries: list[Entry] = field(default_factory=list[Entry])
    errors: list[str] = field(default_factory=list[str])
    warnings: list[str] = field(default_factory=list[str])
    summary: ImportSummary = field(default_factory=ImportSummary)

    @property
    def is_valid(self) -> bool:
        return bool(self.entries)
