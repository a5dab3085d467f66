from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from designcat.adapters.storage import InMemoryKeyValueStore, create_all_tables
from designcat.domain.persistence import CatalogStore
from tests.helpers.entries import RecordingSink

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator

_CATALOG_ENV_VARS = (
    "DESIGNCAT_DATA_DIR",
    "DESIGNCAT_NAMESPACE",
    "DESIGNCAT_STORAGE_CAPACITY",
    "DESIGNCAT_REMOTE_TIMEOUT",
    "DESIGNCAT_CATALOG_URLS",
    "DESIGNCAT_BASE_URL",
)


@pytest.fixture(autouse=True)
def _clean_catalog_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _CATALOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def memory_backend() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def catalog_store(memory_backend: InMemoryKeyValueStore) -> CatalogStore:
    return CatalogStore(memory_backend)


@pytest.fixture
def event_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()
