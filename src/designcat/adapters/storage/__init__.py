"""Key-value store adapters."""

from __future__ import annotations

from .memory import InMemoryKeyValueStore
from .sqlalchemy import SqlAlchemyKeyValueStore, create_all_tables, kv_entries_table

__all__ = [
    "InMemoryKeyValueStore",
    "SqlAlchemyKeyValueStore",
    "create_all_tables",
    "kv_entries_table",
]
