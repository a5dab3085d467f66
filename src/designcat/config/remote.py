"""Remote catalog document configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final
from urllib.parse import urljoin, urlsplit

from .env import env_float, optional_env_var
from .http_resilience import ResilienceConfig

DEFAULT_DOCUMENT_NAME: Final[str] = "catalog.json"
DEFAULT_REMOTE_TIMEOUT_SECONDS: Final[float] = 5.0
DEFAULT_REMOTE_HEADERS = MappingProxyType(
    {
        "Accept": "application/json",
        "Cache-Control": "no-cache",
    }
)


def catalog_resilience(timeout_seconds: float = DEFAULT_REMOTE_TIMEOUT_SECONDS) -> ResilienceConfig:
    """Single-attempt GETs that bypass intermediary caches."""

    return ResilienceConfig(
        name="catalog",
        timeout_seconds=timeout_seconds,
        default_headers=DEFAULT_REMOTE_HEADERS,
    )


@dataclass(frozen=True, slots=True)
class RemoteCatalogConfig:
    locators: tuple[str, ...] = ()
    timeout_seconds: float = DEFAULT_REMOTE_TIMEOUT_SECONDS
    resilience: ResilienceConfig = field(default_factory=catalog_resilience)

    @property
    def enabled(self) -> bool:
        return bool(self.locators)


def build_candidate_locators(
    base_url: str,
    *,
    document_name: str = DEFAULT_DOCUMENT_NAME,
) -> tuple[str, ...]:
    """Return the candidate document URLs for a deployment base URL.

    Catalogs are published next to the app, which may be hosted below a
    sub-path, at the origin root, or under a ``public`` folder.
    """

    base = base_url if base_url.endswith("/") else f"{base_url}/"
    parts = urlsplit(base)
    candidates = [urljoin(base, document_name)]
    if parts.scheme and parts.netloc:
        origin = f"{parts.scheme}://{parts.netloc}"
        candidates += [f"{origin}/{document_name}", f"{origin}/public/{document_name}"]
    return tuple(dict.fromkeys(candidates))


def get_remote_catalog_config() -> RemoteCatalogConfig:
    """Explicit ``DESIGNCAT_CATALOG_URLS`` win over ``DESIGNCAT_BASE_URL`` candidates."""

    timeout = env_float("DESIGNCAT_REMOTE_TIMEOUT", DEFAULT_REMOTE_TIMEOUT_SECONDS)
    explicit = optional_env_var("DESIGNCAT_CATALOG_URLS")
    base_url = optional_env_var("DESIGNCAT_BASE_URL")

    locators: tuple[str, ...] = ()
    if explicit is not None:
        locators = tuple(url.strip() for url in explicit.split(",") if url.strip())
    elif base_url is not None:
        locators = build_candidate_locators(base_url)

    return RemoteCatalogConfig(
        locators=locators,
        timeout_seconds=timeout,
        resilience=catalog_resilience(timeout),
    )
