from __future__ import annotations

import pytest

from designcat.adapters.storage import InMemoryKeyValueStore
from designcat.common.serialization import dump_json
from designcat.domain.errors import (
    CatalogSaveError,
    DuplicateEntryError,
    EntryRejectedError,
    StorageError,
)
from designcat.domain.events import CatalogEvent
from designcat.domain.library import CatalogLibrary
from designcat.domain.persistence import (
    BUILTINS_KEY,
    CURRENT_KEY,
    LEGACY_USER_KEY,
    USER_KEY,
    CatalogStore,
)
from designcat.domain.transfer import parse_import
from tests.helpers.entries import RecordingSink, make_payload


class UnreadableStore(InMemoryKeyValueStore):
    def get(self, key: str) -> str | None:
        raise StorageError(f"cannot read {key}")


@pytest.fixture
def library(catalog_store: CatalogStore, event_sink: RecordingSink) -> CatalogLibrary:
    return CatalogLibrary(catalog_store, events=event_sink)


def test_load_user_entries_merges_legacy_key(
    catalog_store: CatalogStore, library: CatalogLibrary
) -> None:
    catalog_store.write(USER_KEY, [make_payload("card")])
    catalog_store.write(LEGACY_USER_KEY, [make_payload("legacy-tile"), "junk"])

    entries = library.load_user_entries()

    assert [entry.id for entry in entries] == ["legacy-tile", "card"]


def test_current_key_wins_over_legacy_key(
    catalog_store: CatalogStore, library: CatalogLibrary
) -> None:
    catalog_store.write(LEGACY_USER_KEY, [make_payload("tile", name="Old")])
    catalog_store.write(USER_KEY, [make_payload("tile", name="New")])

    assert [entry.name for entry in library.load_user_entries()] == ["New"]


def test_upsert_of_legacy_entry_survives_reload(
    memory_backend: InMemoryKeyValueStore, catalog_store: CatalogStore, library: CatalogLibrary
) -> None:
    catalog_store.write(LEGACY_USER_KEY, [make_payload("tile", name="Old")])

    library.upsert_entry(make_payload("tile", name="New"))

    assert [entry.name for entry in library.load_user_entries()] == ["New"]
    assert memory_backend.get(catalog_store.key(LEGACY_USER_KEY)) is None


def test_remove_of_legacy_entry_stays_removed(
    catalog_store: CatalogStore, library: CatalogLibrary
) -> None:
    catalog_store.write(LEGACY_USER_KEY, [make_payload("tile"), make_payload("chip")])

    assert library.remove_entry("tile") is True

    assert [entry.id for entry in library.load_user_entries()] == ["chip"]


def test_add_entry_persists_and_rejects_duplicates(library: CatalogLibrary) -> None:
    library.add_entry(make_payload("card"))

    with pytest.raises(DuplicateEntryError) as exc:
        library.add_entry(make_payload("card", name="Other"))

    assert exc.value.entry_id == "card"
    assert [entry.name for entry in library.load_user_entries()] == ["Card"]


def test_add_entry_rejects_non_objects(library: CatalogLibrary) -> None:
    with pytest.raises(EntryRejectedError):
        library.add_entry("card")


def test_upsert_entry_replaces_in_place(library: CatalogLibrary) -> None:
    library.save_user_entries([make_payload("a"), make_payload("b"), make_payload("c")])

    library.upsert_entry(make_payload("b", name="Bravo"))
    library.upsert_entry(make_payload("d"))

    entries = library.load_user_entries()
    assert [entry.id for entry in entries] == ["a", "b", "c", "d"]
    assert entries[1].name == "Bravo"


def test_remove_entry_reports_whether_anything_changed(library: CatalogLibrary) -> None:
    library.save_user_entries([make_payload("a"), make_payload("b")])

    assert library.remove_entry("a") is True
    assert library.remove_entry("missing") is False
    assert [entry.id for entry in library.load_user_entries()] == ["b"]


def test_import_entries_merges_after_user_entries(
    library: CatalogLibrary, event_sink: RecordingSink
) -> None:
    library.save_user_entries([make_payload("a", name="Mine"), make_payload("b")])
    result = parse_import(dump_json([make_payload("a", name="Imported"), make_payload("c")]))

    saved = library.import_entries(result)

    assert [entry.id for entry in saved] == ["a", "b", "c"]
    assert saved[0].name == "Imported"
    assert event_sink.names == [CatalogEvent.IMPORTED]
    assert event_sink.events[0].detail == {"imported": 2, "total": 3}


def test_import_entries_ignores_failed_imports(
    library: CatalogLibrary, event_sink: RecordingSink
) -> None:
    result = parse_import("[1, 2]")

    assert library.import_entries(result) == []
    assert event_sink.names == []


def test_save_catalog_surfaces_failures(event_sink: RecordingSink) -> None:
    library = CatalogLibrary(
        CatalogStore(InMemoryKeyValueStore(capacity_bytes=16)), events=event_sink
    )

    with pytest.raises(CatalogSaveError):
        library.save_catalog([make_payload("a")])
    assert event_sink.names == []


def test_save_catalog_writes_current_collection(
    catalog_store: CatalogStore, library: CatalogLibrary, event_sink: RecordingSink
) -> None:
    library.save_catalog([make_payload("a"), {"id": "b"}])

    stored = catalog_store.read(CURRENT_KEY)
    assert isinstance(stored, list)
    assert len(stored) == 2
    assert event_sink.names == [CatalogEvent.SAVED]


def test_find_malformed_reports_index_id_and_issues(
    catalog_store: CatalogStore, library: CatalogLibrary
) -> None:
    catalog_store.write(BUILTINS_KEY, [make_payload("builtin-button")])
    catalog_store.write(USER_KEY, [make_payload("ok"), {"id": "bad", "name": "Bad"}, 7])

    records = library.find_malformed()

    assert [(record.index, record.id) for record in records] == [(2, "bad"), (3, "unknown-3")]
    assert "level must be one of: atom, molecule, organism" in records[0].issues
    assert records[1].issues == ("Entry must be an object",)


def test_find_malformed_reports_storage_failures() -> None:
    library = CatalogLibrary(CatalogStore(UnreadableStore()))

    records = library.find_malformed()

    assert len(records) == 1
    assert records[0].id == "storage-error"


def test_migrate_storage_rewrites_and_clears(
    memory_backend: InMemoryKeyValueStore, catalog_store: CatalogStore, library: CatalogLibrary
) -> None:
    catalog_store.write(USER_KEY, [{"id": "a", "name": "A", "level": "atom", "status": "ready"}])
    memory_backend.set(catalog_store.key(LEGACY_USER_KEY), "{{")
    catalog_store.write(CURRENT_KEY, [make_payload("clean")])

    migrated = library.migrate_storage()

    assert migrated == [USER_KEY, LEGACY_USER_KEY]
    assert catalog_store.read(USER_KEY) == [
        {
            "id": "a",
            "name": "A",
            "level": "atom",
            "version": "0.1.0",
            "status": "ready",
            "tags": [],
            "dependencies": [],
        }
    ]
    assert memory_backend.get(catalog_store.key(LEGACY_USER_KEY)) is None
