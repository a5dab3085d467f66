"""User-authored entries and explicit catalog saves."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, cast

from designcat.domain.errors import DuplicateEntryError, EntryRejectedError, StorageError
from designcat.domain.events import CatalogEvent, emit
from designcat.domain.merge import merge_collections
from designcat.domain.model import entry_to_payload
from designcat.domain.normalize import normalize_catalog, normalize_entry
from designcat.domain.persistence import (
    BUILTINS_KEY,
    CATALOG_KEYS,
    CURRENT_KEY,
    LEGACY_USER_KEY,
    USER_KEY,
)
from designcat.domain.validate import validate_entry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from designcat.domain.events import EventSink
    from designcat.domain.model import Entry, ImportResult
    from designcat.domain.persistence import CatalogStore

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MalformedRecord:
    index: int
    id: str
    issues: tuple[str, ...]


class CatalogLibrary:
    def __init__(self, store: CatalogStore, *, events: EventSink | None = None) -> None:
        self.store = store
        self.events = events

    def load_user_entries(self) -> list[Entry]:
        """Entries from the legacy key overlaid by the current key, merged by id."""

        legacy = normalize_catalog(self.store.read(LEGACY_USER_KEY, []))
        current = normalize_catalog(self.store.read(USER_KEY, []))
        return merge_collections([legacy, current])

    def save_user_entries(self, entries: Iterable[Entry | object]) -> list[Entry]:
        """Replace the stored user entries with ``entries``.

        The legacy key is dropped once the current key holds the full set, so
        callers pass collections built from ``load_user_entries``.
        """

        normalized = normalize_catalog(list(entries))
        self.store.save(USER_KEY, [entry_to_payload(entry) for entry in normalized])
        self.store.remove(LEGACY_USER_KEY)
        log.info("Saved %s user entries", len(normalized))
        return normalized

    def add_entry(self, raw: object) -> Entry:
        entry = _require_entry(raw)
        entries = self.load_user_entries()
        if any(existing.id == entry.id for existing in entries):
            raise DuplicateEntryError(entry.id)
        self.save_user_entries([*entries, entry])
        return entry

    def upsert_entry(self, raw: object) -> Entry:
        entry = _require_entry(raw)
        entries = self.load_user_entries()
        self.save_user_entries(merge_collections([entries, [entry]]))
        return entry

    def remove_entry(self, entry_id: str) -> bool:
        entries = self.load_user_entries()
        remaining = [entry for entry in entries if entry.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self.save_user_entries(remaining)
        return True

    def import_entries(self, result: ImportResult) -> list[Entry]:
        """Persist the valid entries of ``result`` on top of the user entries."""

        if not result.is_valid:
            return self.load_user_entries()
        merged = merge_collections([self.load_user_entries(), result.entries])
        saved = self.save_user_entries(merged)
        emit(
            self.events,
            CatalogEvent.IMPORTED,
            imported=len(result.entries),
            total=len(saved),
        )
        return saved

    def save_catalog(self, entries: Iterable[Entry | object]) -> list[Entry]:
        """Explicitly persist the resolved catalog; failures reach the caller."""

        normalized = normalize_catalog(list(entries))
        self.store.save(CURRENT_KEY, [entry_to_payload(entry) for entry in normalized])
        emit(self.events, CatalogEvent.SAVED, count=len(normalized))
        return normalized

    def find_malformed(self) -> list[MalformedRecord]:
        """Validator issues for the raw stored built-in and user records."""

        raw_records: list[object] = []
        for name in (BUILTINS_KEY, USER_KEY, LEGACY_USER_KEY):
            try:
                raw = self.store.backend.get(self.store.key(name))
            except StorageError:
                log.warning("Could not read %s", self.store.key(name), exc_info=True)
                return [
                    MalformedRecord(
                        index=-1,
                        id="storage-error",
                        issues=("Failed to read component storage",),
                    )
                ]
            value = self.store.read(name, []) if raw is not None else []
            if isinstance(value, list):
                raw_records.extend(cast(list[object], value))

        records: list[MalformedRecord] = []
        for index, record in enumerate(raw_records):
            validation = validate_entry(record)
            if validation.is_valid:
                continue
            records.append(
                MalformedRecord(index=index, id=_record_id(record, index), issues=validation.issues)
            )
        return records

    def migrate_storage(self) -> list[str]:
        """Re-normalize stored collections in place; return the keys that changed.

        Keys whose content cannot be parsed are removed.
        """

        migrated: list[str] = []
        for name in CATALOG_KEYS:
            raw = self.store.backend.get(self.store.key(name))
            if raw is None:
                continue
            value = self.store.read(name, None)
            items = _stored_items(value)
            if items is None:
                log.warning("Clearing unreadable catalog data in %s", self.store.key(name))
                self.store.remove(name)
                migrated.append(name)
                continue
            payloads = [entry_to_payload(entry) for entry in normalize_catalog(items)]
            if payloads == items:
                continue
            if isinstance(value, Mapping):
                document = dict(cast(Mapping[str, object], value))
                document["items"] = payloads
                self.store.save(name, document)
            else:
                self.store.save(name, payloads)
            log.info("Migrated %s entries in %s", len(payloads), self.store.key(name))
            migrated.append(name)
        return migrated


def _require_entry(raw: object) -> Entry:
    entry = normalize_entry(raw)
    if entry is None:
        raise EntryRejectedError("Entry payload must be an object")
    return entry


def _stored_items(value: object) -> list[object] | None:
    if isinstance(value, list):
        return cast(list[object], value)
    if isinstance(value, Mapping):
        items = cast(Mapping[str, object], value).get("items", [])
        if isinstance(items, list):
            return cast(list[object], items)
    return None


def _record_id(record: object, index: int) -> str:
    if isinstance(record, Mapping):
        value = cast(Mapping[str, object], record).get("id")
        if isinstance(value, str) and value:
            return value
    return f"unknown-{index}"
