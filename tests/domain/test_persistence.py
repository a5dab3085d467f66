from __future__ import annotations

import pytest

from designcat.adapters.storage import InMemoryKeyValueStore
from designcat.domain.errors import CatalogSaveError, StorageError
from designcat.domain.persistence import CURRENT_KEY, USER_KEY, CatalogStore


class UnreadableStore(InMemoryKeyValueStore):
    def get(self, key: str) -> str | None:
        raise StorageError(f"cannot read {key}")


class UndeletableStore(InMemoryKeyValueStore):
    def remove(self, key: str) -> None:
        raise StorageError(f"cannot remove {key}")


def test_keys_are_namespaced(memory_backend: InMemoryKeyValueStore) -> None:
    store = CatalogStore(memory_backend, namespace="acme")

    store.write(USER_KEY, [])

    assert memory_backend.keys() == ["acme:userComponents:v1"]


def test_read_returns_default_for_missing_or_corrupt_values(
    memory_backend: InMemoryKeyValueStore, catalog_store: CatalogStore
) -> None:
    memory_backend.set(catalog_store.key(CURRENT_KEY), "[{")

    assert catalog_store.read(CURRENT_KEY, []) == []
    assert catalog_store.read(USER_KEY, "fallback") == "fallback"


def test_read_returns_default_when_backend_fails() -> None:
    store = CatalogStore(UnreadableStore())

    assert store.read(CURRENT_KEY, []) == []


def test_write_evicts_oldest_thumbnails_first() -> None:
    backend = InMemoryKeyValueStore(capacity_bytes=200)
    store = CatalogStore(backend)
    assert store.put_thumbnail("a", "x" * 50)
    assert store.put_thumbnail("b", "x" * 50)

    assert store.write(CURRENT_KEY, "y" * 60)

    assert store.get_thumbnail("a") is None
    assert store.get_thumbnail("b") == "x" * 50
    assert store.read(CURRENT_KEY) == "y" * 60


def test_write_gives_up_quietly_when_nothing_can_be_evicted() -> None:
    store = CatalogStore(InMemoryKeyValueStore(capacity_bytes=10))

    assert store.write(CURRENT_KEY, ["too", "big"]) is False
    assert store.read(CURRENT_KEY) is None


def test_save_raises_when_the_value_does_not_fit() -> None:
    store = CatalogStore(InMemoryKeyValueStore(capacity_bytes=10))

    with pytest.raises(CatalogSaveError):
        store.save(USER_KEY, ["too", "big"])


def test_clear_catalog_keeps_thumbnails(catalog_store: CatalogStore) -> None:
    catalog_store.write(CURRENT_KEY, [])
    catalog_store.write(USER_KEY, [])
    catalog_store.put_thumbnail("button", "data:image/png;base64,AAA")

    catalog_store.clear_catalog()

    assert catalog_store.usage().keys == ("designcat:thumb:button",)


def test_usage_reports_keys_and_size(catalog_store: CatalogStore) -> None:
    assert not catalog_store.usage().has_data

    catalog_store.write(CURRENT_KEY, [])

    usage = catalog_store.usage()
    assert usage.has_data
    assert usage.keys == ("designcat:catalog:current",)
    assert usage.size == 2


def test_remove_and_clear_catalog_wrap_backend_failures() -> None:
    store = CatalogStore(UndeletableStore())

    with pytest.raises(CatalogSaveError, match="Failed to remove designcat:userComponents:v1"):
        store.remove(USER_KEY)
    with pytest.raises(CatalogSaveError):
        store.clear_catalog()
