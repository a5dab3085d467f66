"""HTTP fetcher for published catalog documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from designcat.adapters.http_resilience import ResilienceConfig, ResilientClient
from designcat.config.remote import catalog_resilience
from designcat.domain.errors import DocumentFetchError
from designcat.domain.ports.fetching import DocumentFetcher

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class HttpDocumentFetcher:
    """Fetch one locator and return the response body as text.

    Decoding is left to the caller so that every JSON document passes through
    the same tolerant parser.
    """

    resilience: ResilienceConfig = field(default_factory=catalog_resilience)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    async def __call__(self, locator: str) -> object:
        async with self.client_factory(self.resilience) as client:
            try:
                response = await client.get(locator)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise DocumentFetchError(
                    f"HTTP {exc.response.status_code}", locator=locator
                ) from exc
            except httpx.HTTPError as exc:
                raise DocumentFetchError(
                    f"{type(exc).__name__}: {exc}", locator=locator
                ) from exc

            try:
                body = response.text
            except (UnicodeDecodeError, LookupError) as exc:
                raise DocumentFetchError("Undecodable response body", locator=locator) from exc

        log.debug("Fetched %s bytes from %s", len(response.content), locator)
        return body


if TYPE_CHECKING:
    _fetcher_check: DocumentFetcher = HttpDocumentFetcher()
