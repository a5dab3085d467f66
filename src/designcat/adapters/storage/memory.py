from __future__ import annotations

from typing import TYPE_CHECKING

from designcat.domain.errors import StorageQuotaExceededError

if TYPE_CHECKING:
    from designcat.domain.ports.storage import KeyValueStore


class InMemoryKeyValueStore:
    """Process-local store with a byte budget, mostly useful for tests."""

    def __init__(self, capacity_bytes: int | None = None) -> None:
        self.capacity_bytes = capacity_bytes
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.capacity_bytes is not None:
            used = sum(
                len(existing) + len(stored)
                for existing, stored in self._data.items()
                if existing != key
            )
            required = used + len(key) + len(value)
            if required > self.capacity_bytes:
                raise StorageQuotaExceededError(
                    f"Writing {key} needs {required} of {self.capacity_bytes} bytes",
                    key=key,
                    required=required,
                    capacity=self.capacity_bytes,
                )
        # re-insert so that iteration order follows write order
        self._data.pop(key, None)
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return [key for key in self._data if key.startswith(prefix)]

    def __len__(self) -> int:
        return len(self._data)


if TYPE_CHECKING:
    _store_check: KeyValueStore = InMemoryKeyValueStore()
