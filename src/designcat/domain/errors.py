"""Domain error definitions."""

from __future__ import annotations


class StorageError(RuntimeError):
    """Raised when the key-value store cannot complete an operation."""


class StorageQuotaExceededError(StorageError):
    """Raised by stores when a write would exceed their capacity."""

    def __init__(self, message: str, *, key: str, required: int, capacity: int) -> None:
        super().__init__(message)
        self.key = key
        self.required = required
        self.capacity = capacity


class CatalogSaveError(StorageError):
    """Raised when an explicitly requested save or removal could not be persisted."""


class DocumentFetchError(RuntimeError):
    """Raised by document fetchers when a locator yields no usable document."""

    def __init__(self, message: str, *, locator: str) -> None:
        super().__init__(message)
        self.locator = locator


class DuplicateEntryError(ValueError):
    """Raised when adding an entry whose id already exists."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(f'Entry with id "{entry_id}" already exists')
        self.entry_id = entry_id


class EntryRejectedError(ValueError):
    """Raised when a payload cannot be normalized into an entry."""
