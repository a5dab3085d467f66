"""Port for the capacity-bounded key-value store."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Synchronous string store.

    ``set`` raises ``StorageQuotaExceededError`` when the value does not fit.
    ``keys`` lists matching keys ordered from the oldest write to the newest.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

    def keys(self, prefix: str = "") -> list[str]: ...
