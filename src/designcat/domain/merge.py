"""Combine entry collections into one duplicate-free catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

from designcat.domain.normalize import normalize_catalog

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from designcat.domain.model import Entry


def merge_collections(collections: Iterable[Sequence[object]]) -> list[Entry]:
    """Merge ``collections`` by entry id.

    Later collections win: a repeated id replaces the earlier entry but keeps
    the position where that id was first seen.
    """

    merged: dict[str, Entry] = {}
    for collection in collections:
        for entry in normalize_catalog(list(collection)):
            merged[entry.id] = entry
    return list(merged.values())
