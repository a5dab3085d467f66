"""Application configuration helpers."""

from __future__ import annotations

from designcat.common.logging import configure_logging

from .errors import ConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .remote import (
    RemoteCatalogConfig,
    build_candidate_locators,
    catalog_resilience,
    get_remote_catalog_config,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "RemoteCatalogConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "build_candidate_locators",
    "catalog_resilience",
    "configure_logging",
    "get_database_config",
    "get_remote_catalog_config",
    "get_storage_config",
]
