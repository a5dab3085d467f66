"""Namespaced JSON persistence on top of a ``KeyValueStore``."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from designcat.common.serialization import dump_json, safe_parse
from designcat.domain.errors import CatalogSaveError, StorageError, StorageQuotaExceededError

if TYPE_CHECKING:
    from designcat.domain.ports.storage import KeyValueStore

log = getLogger(__name__)

DEFAULT_NAMESPACE: Final[str] = "designcat"

CURRENT_KEY: Final[str] = "catalog:current"
BUILTINS_KEY: Final[str] = "catalog:builtins"
USER_KEY: Final[str] = "userComponents:v1"
LEGACY_USER_KEY: Final[str] = "userComponents"
THUMBNAIL_PREFIX: Final[str] = "thumb:"

CATALOG_KEYS: Final[tuple[str, ...]] = (CURRENT_KEY, BUILTINS_KEY, USER_KEY, LEGACY_USER_KEY)


@dataclass(frozen=True, slots=True)
class StorageUsage:
    keys: tuple[str, ...]
    size: int

    @property
    def has_data(self) -> bool:
        return bool(self.keys)


class CatalogStore:
    """JSON documents stored under ``<namespace>:<name>`` keys.

    ``write`` is for best-effort caching and never raises; ``save`` is for
    user-requested persistence and raises ``CatalogSaveError``, as do ``remove``
    and ``clear_catalog``. Both writers evict the oldest thumbnails when the
    backend runs out of room.
    """

    def __init__(self, backend: KeyValueStore, *, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.backend = backend
        self.namespace = namespace

    def key(self, name: str) -> str:
        return f"{self.namespace}:{name}"

    def read(self, name: str, default: object = None) -> object:
        try:
            raw = self.backend.get(self.key(name))
        except StorageError:
            log.warning("Could not read %s", self.key(name), exc_info=True)
            return default
        return safe_parse(raw, default)

    def write(self, name: str, value: object) -> bool:
        try:
            self._set_with_eviction(self.key(name), dump_json(value))
        except StorageError as exc:
            log.warning("Skipping cache write for %s: %s", self.key(name), exc)
            return False
        return True

    def save(self, name: str, value: object) -> None:
        try:
            self._set_with_eviction(self.key(name), dump_json(value))
        except StorageError as exc:
            raise CatalogSaveError(f"Failed to save {self.key(name)}: {exc}") from exc

    def remove(self, name: str) -> None:
        try:
            self.backend.remove(self.key(name))
        except StorageError as exc:
            raise CatalogSaveError(f"Failed to remove {self.key(name)}: {exc}") from exc

    def clear_catalog(self) -> None:
        for name in CATALOG_KEYS:
            self.remove(name)

    def put_thumbnail(self, entry_id: str, data_url: str) -> bool:
        return self.write(f"{THUMBNAIL_PREFIX}{entry_id}", data_url)

    def get_thumbnail(self, entry_id: str) -> str | None:
        value = self.read(f"{THUMBNAIL_PREFIX}{entry_id}")
        return value if isinstance(value, str) else None

    def usage(self) -> StorageUsage:
        keys = tuple(self.backend.keys(self.key("")))
        size = 0
        for key in keys:
            try:
                value = self.backend.get(key)
            except StorageError:
                log.warning("Skipping unreadable key %s", key)
                continue
            size += len(value or "")
        return StorageUsage(keys=keys, size=size)

    def _set_with_eviction(self, key: str, text: str) -> None:
        while True:
            try:
                self.backend.set(key, text)
            except StorageQuotaExceededError:
                victims = [
                    candidate
                    for candidate in self.backend.keys(self.key(THUMBNAIL_PREFIX))
                    if candidate != key
                ]
                if not victims:
                    raise
                log.info("Storage full, evicting %s", victims[0])
                self.backend.remove(victims[0])
            else:
                return
