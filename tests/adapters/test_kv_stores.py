from __future__ import annotations

from collections.abc import Callable

import pytest
from sqlalchemy.engine import Engine  # noqa: TC002

from designcat.adapters.storage import InMemoryKeyValueStore, SqlAlchemyKeyValueStore
from designcat.domain.errors import StorageQuotaExceededError
from designcat.domain.ports.storage import KeyValueStore

StoreFactory = Callable[[int | None], KeyValueStore]


@pytest.fixture(params=["memory", "sqlite"])
def make_store(request: pytest.FixtureRequest, sqlite_engine: Engine) -> StoreFactory:
    def factory(capacity: int | None) -> KeyValueStore:
        if request.param == "memory":
            return InMemoryKeyValueStore(capacity_bytes=capacity)
        return SqlAlchemyKeyValueStore(sqlite_engine, capacity_bytes=capacity)

    return factory


def test_store_satisfies_port(make_store: StoreFactory) -> None:
    assert isinstance(make_store(None), KeyValueStore)


def test_set_get_remove(make_store: StoreFactory) -> None:
    store = make_store(None)

    store.set("designcat:a", "1")
    store.set("designcat:a", "2")

    assert store.get("designcat:a") == "2"
    store.remove("designcat:a")
    store.remove("designcat:a")
    assert store.get("designcat:a") is None


def test_keys_are_ordered_by_last_write(make_store: StoreFactory) -> None:
    store = make_store(None)
    store.set("ns:thumb:a", "x")
    store.set("ns:thumb:b", "x")
    store.set("other:c", "x")
    store.set("ns:thumb:a", "y")

    assert store.keys("ns:thumb:") == ["ns:thumb:b", "ns:thumb:a"]
    assert store.keys() == ["ns:thumb:b", "other:c", "ns:thumb:a"]


def test_capacity_counts_keys_and_values(make_store: StoreFactory) -> None:
    store = make_store(20)
    store.set("k", "x" * 10)

    with pytest.raises(StorageQuotaExceededError) as exc:
        store.set("j", "y" * 10)

    assert exc.value.key == "j"
    assert exc.value.required == 22
    assert exc.value.capacity == 20
    assert store.get("j") is None
    assert store.get("k") == "x" * 10


def test_overwrites_only_count_the_new_value(make_store: StoreFactory) -> None:
    store = make_store(20)
    store.set("k", "x" * 10)

    store.set("k", "z" * 19)

    assert store.get("k") == "z" * 19
