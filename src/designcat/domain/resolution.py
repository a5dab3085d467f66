"""Resolution chain: cache, then remote documents, then the compiled-in catalog.

Each stage is attempted once per ``load()`` and the first one producing a
non-empty collection wins. Stages never raise past their boundary; a failing
stage simply produces nothing and the chain falls through.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from designcat.common.serialization import safe_parse
from designcat.domain.builtin import builtin_payloads
from designcat.domain.document import REMOTE_STRATEGIES, extract_entries
from designcat.domain.errors import DocumentFetchError
from designcat.domain.events import CatalogEvent, emit
from designcat.domain.model import LoadResult, LoadSource, entry_to_payload
from designcat.domain.normalize import normalize_catalog
from designcat.domain.persistence import BUILTINS_KEY, CURRENT_KEY

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from designcat.domain.events import EventSink
    from designcat.domain.model import Entry
    from designcat.domain.persistence import CatalogStore
    from designcat.domain.ports.fetching import DocumentFetcher

log = getLogger(__name__)

DEFAULT_LOCATOR_TIMEOUT_SECONDS: Final[float] = 5.0
ALL_STAGES_FAILED: Final[str] = "All catalog loading methods failed"


@dataclass(frozen=True, slots=True)
class LoaderCapabilities:
    """Functions the chain may use. A missing capability skips its stage."""

    fetch_document: DocumentFetcher | None = None
    builtin_entries: Callable[[], Sequence[object]] | None = builtin_payloads


@dataclass(slots=True)
class CatalogLoader:
    store: CatalogStore
    capabilities: LoaderCapabilities = field(default_factory=LoaderCapabilities)
    locators: Sequence[str] = ()
    timeout_seconds: float = DEFAULT_LOCATOR_TIMEOUT_SECONDS
    events: EventSink | None = None

    async def load(self) -> LoadResult:
        """Resolve the catalog. Never raises."""

        log.info("Starting catalog load sequence")
        stages: tuple[tuple[str, Callable[[], Awaitable[LoadResult | None]]], ...] = (
            ("cache", self._from_cache),
            ("remote", self._from_remote),
            ("builtin", self._from_builtin),
        )
        for name, stage in stages:
            try:
                result = await stage()
            except Exception:  # noqa: BLE001
                log.warning("Catalog %s stage failed", name, exc_info=True)
                continue
            if result is not None:
                log.info(
                    "Loaded %s entries from %s%s",
                    result.count,
                    result.source.value,
                    f" ({result.locator})" if result.locator else "",
                )
                return result

        log.error("All catalog loading methods failed, returning empty catalog")
        return LoadResult(entries=(), source=LoadSource.BUILTIN, error=ALL_STAGES_FAILED)

    async def reload_builtin(self) -> LoadResult:
        """Forget every cached collection and resolve the catalog again."""

        self.store.clear_catalog()
        result = await self.load()
        emit(self.events, CatalogEvent.RELOADED, source=result.source.value, count=result.count)
        return result

    async def _from_cache(self) -> LoadResult | None:
        entries = normalize_catalog(self.store.read(CURRENT_KEY))
        if not entries:
            log.debug("No cached catalog under %s", self.store.key(CURRENT_KEY))
            return None
        return LoadResult(entries=tuple(entries), source=LoadSource.CACHE)

    async def _from_remote(self) -> LoadResult | None:
        fetch = self.capabilities.fetch_document
        if fetch is None or not self.locators:
            log.debug("Remote catalog stage not configured, skipping")
            return None

        for locator in self.locators:
            entries = await self._fetch_locator(fetch, locator)
            if entries:
                self._cache(entries, source=LoadSource.REMOTE)
                return LoadResult(entries=tuple(entries), source=LoadSource.REMOTE, locator=locator)
        log.warning("All %s remote catalog locators failed", len(self.locators))
        return None

    async def _fetch_locator(self, fetch: DocumentFetcher, locator: str) -> list[Entry]:
        log.debug("Attempting catalog fetch from %s", locator)
        try:
            async with asyncio.timeout(self.timeout_seconds):
                document = await fetch(locator)
        except TimeoutError:
            log.warning("Catalog fetch from %s timed out after %ss", locator, self.timeout_seconds)
            return []
        except DocumentFetchError as exc:
            log.warning("Catalog fetch from %s failed: %s", locator, exc)
            return []
        except Exception:  # noqa: BLE001
            log.warning("Catalog fetch from %s raised unexpectedly", locator, exc_info=True)
            return []

        if isinstance(document, (str, bytes)):
            document = safe_parse(document)
        extraction = extract_entries(document, REMOTE_STRATEGIES)
        if extraction is None:
            log.warning("Catalog document at %s has no entry array", locator)
            return []
        return normalize_catalog(extraction.items)

    async def _from_builtin(self) -> LoadResult | None:
        provider = self.capabilities.builtin_entries
        if provider is None:
            log.warning("No compiled-in catalog available")
            return None
        entries = normalize_catalog(list(provider()))
        if not entries:
            return None
        payloads = [entry_to_payload(entry) for entry in entries]
        self.store.write(BUILTINS_KEY, payloads)
        self._cache(entries, source=LoadSource.BUILTIN)
        return LoadResult(entries=tuple(entries), source=LoadSource.BUILTIN)

    def _cache(self, entries: Sequence[Entry], *, source: LoadSource) -> None:
        if self.store.write(CURRENT_KEY, [entry_to_payload(entry) for entry in entries]):
            emit(self.events, CatalogEvent.CACHED, source=source.value, count=len(entries))
