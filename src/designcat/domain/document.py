"""Locating the entry array inside a parsed catalog document.

Documents arrive in several shapes: a bare array, an object carrying the array
under a conventional key, or a single entry object. Each shape is an explicit
strategy; strategies are tried in order and the first match wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, cast

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

type Extractor = Callable[[object], list[object] | None]

CONVENTIONAL_KEYS: Final[tuple[str, ...]] = ("components", "items", "catalog", "data")
IMPORT_KEYS: Final[tuple[str, ...]] = (*CONVENTIONAL_KEYS, "list")

_IDENTITY_FIELDS = ("id", "name", "level")
_DESCRIPTIVE_FIELDS = ("version", "status", "tags", "dependencies", "notes", "demo", "code")


@dataclass(frozen=True, slots=True)
class ExtractionStrategy:
    name: str
    extract: Extractor
    warning: str | None = None


@dataclass(frozen=True, slots=True)
class Extraction:
    items: list[object]
    strategy: ExtractionStrategy


def _bare_list(document: object) -> list[object] | None:
    if isinstance(document, list):
        return cast(list[object], document)
    return None


def _keyed_list(key: str) -> Extractor:
    def extract(document: object) -> list[object] | None:
        if not isinstance(document, Mapping):
            return None
        value = cast(Mapping[str, object], document).get(key)
        if isinstance(value, list):
            return cast(list[object], value)
        return None

    return extract


def looks_like_entry(document: object) -> bool:
    if not isinstance(document, Mapping):
        return False
    data = cast(Mapping[str, object], document)
    return any(name in data for name in _IDENTITY_FIELDS) and any(
        name in data for name in _DESCRIPTIVE_FIELDS
    )


def _single_entry(document: object) -> list[object] | None:
    if looks_like_entry(document):
        return [document]
    return None


BARE_LIST = ExtractionStrategy(name="array", extract=_bare_list)
SINGLE_ENTRY = ExtractionStrategy(
    name="single-entry",
    extract=_single_entry,
    warning="Single entry detected, converted to array",
)

REMOTE_STRATEGIES: Final[tuple[ExtractionStrategy, ...]] = (
    BARE_LIST,
    *(ExtractionStrategy(name=key, extract=_keyed_list(key)) for key in CONVENTIONAL_KEYS),
)
IMPORT_STRATEGIES: Final[tuple[ExtractionStrategy, ...]] = (
    BARE_LIST,
    *(ExtractionStrategy(name=key, extract=_keyed_list(key)) for key in IMPORT_KEYS),
    SINGLE_ENTRY,
)


def extract_entries(
    document: object,
    strategies: Sequence[ExtractionStrategy] = REMOTE_STRATEGIES,
) -> Extraction | None:
    for strategy in strategies:
        items = strategy.extract(document)
        if items is not None:
            return Extraction(items=items, strategy=strategy)
    return None
