"""SQLite-backed key-value store built on SQLAlchemy Core."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    delete,
    func,
    insert,
    select,
    update,
)
from sqlalchemy.exc import SQLAlchemyError

from designcat.domain.errors import StorageError, StorageQuotaExceededError

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

log = logging.getLogger(__name__)

metadata = MetaData()

kv_entries_table = Table(
    "kv_entries",
    metadata,
    Column("key", String, primary_key=True),
    Column("value", Text, nullable=False),
    Column("touched", Integer, nullable=False, index=True),
)


def create_all_tables(engine: Engine) -> None:
    """Create the key-value table if it does not exist yet."""

    log.info("Creating key-value tables")
    metadata.create_all(engine)


class SqlAlchemyKeyValueStore:
    """Persistent store; ``touched`` orders keys by their last write."""

    def __init__(self, engine: Engine, *, capacity_bytes: int | None = None) -> None:
        self.engine = engine
        self.capacity_bytes = capacity_bytes

    def get(self, key: str) -> str | None:
        statement = select(kv_entries_table.c.value).where(kv_entries_table.c.key == key)
        try:
            with self.engine.connect() as connection:
                return connection.execute(statement).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read {key}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            with self.engine.begin() as connection:
                self._check_capacity(connection, key, value)
                touched = self._next_touched(connection)
                exists = connection.execute(
                    select(kv_entries_table.c.key).where(kv_entries_table.c.key == key)
                ).first()
                if exists is None:
                    connection.execute(
                        insert(kv_entries_table).values(key=key, value=value, touched=touched)
                    )
                else:
                    connection.execute(
                        update(kv_entries_table)
                        .where(kv_entries_table.c.key == key)
                        .values(value=value, touched=touched)
                    )
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to write {key}") from exc

    def remove(self, key: str) -> None:
        try:
            with self.engine.begin() as connection:
                connection.execute(delete(kv_entries_table).where(kv_entries_table.c.key == key))
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to remove {key}") from exc

    def keys(self, prefix: str = "") -> list[str]:
        statement = select(kv_entries_table.c.key).order_by(kv_entries_table.c.touched)
        try:
            with self.engine.connect() as connection:
                keys = list(connection.execute(statement).scalars())
        except SQLAlchemyError as exc:
            raise StorageError("Failed to list keys") from exc
        return [key for key in keys if key.startswith(prefix)]

    def _check_capacity(self, connection: Connection, key: str, value: str) -> None:
        if self.capacity_bytes is None:
            return
        used = connection.execute(
            select(
                func.coalesce(
                    func.sum(
                        func.length(kv_entries_table.c.key)
                        + func.length(kv_entries_table.c.value)
                    ),
                    0,
                )
            ).where(kv_entries_table.c.key != key)
        ).scalar_one()
        required = int(used) + len(key) + len(value)
        if required > self.capacity_bytes:
            raise StorageQuotaExceededError(
                f"Writing {key} needs {required} of {self.capacity_bytes} bytes",
                key=key,
                required=required,
                capacity=self.capacity_bytes,
            )

    @staticmethod
    def _next_touched(connection: Connection) -> int:
        current = connection.execute(
            select(func.coalesce(func.max(kv_entries_table.c.touched), 0))
        ).scalar_one()
        return int(current) + 1
