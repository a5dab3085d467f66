"""Port for reading remote catalog documents."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DocumentFetcher(Protocol):
    """Callable returning the document at ``locator``, decoded or as JSON text.

    Implementations raise ``DocumentFetchError`` when the locator yields nothing.
    """

    async def __call__(self, locator: str) -> object: ...
