"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import create_engine

from designcat.adapters.remote_catalog import HttpDocumentFetcher
from designcat.adapters.storage import SqlAlchemyKeyValueStore, create_all_tables
from designcat.config import (
    get_database_config,
    get_remote_catalog_config,
    get_storage_config,
)
from designcat.domain.events import CatalogEvent, LoggingEventSink, emit
from designcat.domain.library import CatalogLibrary
from designcat.domain.merge import merge_collections
from designcat.domain.model import ImportResult
from designcat.domain.persistence import CatalogStore
from designcat.domain.resolution import CatalogLoader, LoaderCapabilities
from designcat.domain.state import CatalogState
from designcat.domain.transfer import build_export, parse_import, render_export

if TYPE_CHECKING:
    from designcat.config import RemoteCatalogConfig, StorageConfig
    from designcat.domain.events import EventSink
    from designcat.domain.library import MalformedRecord
    from designcat.domain.model import LoadResult
    from designcat.domain.persistence import StorageUsage
    from designcat.domain.ports import DocumentFetcher, KeyValueStore

log = getLogger(__name__)


@dataclass(slots=True)
class CatalogServices:
    store: CatalogStore
    loader: CatalogLoader
    library: CatalogLibrary
    events: EventSink | None = None


@dataclass(frozen=True, slots=True)
class CatalogDiagnostics:
    usage: StorageUsage
    malformed: list[MalformedRecord]
    broken_dependencies: list[tuple[str, str]]
    migrated: list[str]


def build_services(
    *,
    backend: KeyValueStore | None = None,
    fetcher: DocumentFetcher | None = None,
    storage_config: StorageConfig | None = None,
    remote_config: RemoteCatalogConfig | None = None,
    events: EventSink | None = None,
) -> CatalogServices:
    """Wire configuration, adapters and domain services together.

    Without an explicit ``backend`` the SQLite store from the storage
    configuration is used. A remote fetcher is only created when catalog
    locators are configured.
    """

    storage = storage_config or get_storage_config()
    remote = remote_config or get_remote_catalog_config()
    sink = events if events is not None else LoggingEventSink()

    if backend is None:
        database = get_database_config(storage=storage)
        engine = create_engine(database.uri, future=True)
        create_all_tables(engine)
        backend = SqlAlchemyKeyValueStore(engine, capacity_bytes=storage.capacity_bytes)

    if fetcher is None and remote.enabled:
        fetcher = HttpDocumentFetcher(resilience=remote.resilience)

    store = CatalogStore(backend, namespace=storage.namespace)
    loader = CatalogLoader(
        store=store,
        capabilities=LoaderCapabilities(fetch_document=fetcher),
        locators=remote.locators,
        timeout_seconds=remote.timeout_seconds,
        events=sink,
    )
    library = CatalogLibrary(store, events=sink)
    log.debug(
        "Catalog services ready: namespace=%s, remote_locators=%s",
        storage.namespace,
        len(remote.locators),
    )
    return CatalogServices(store=store, loader=loader, library=library, events=sink)


def open_catalog(services: CatalogServices) -> CatalogState:
    """Resolve the catalog and lay the user library over it."""

    result = asyncio.run(services.loader.load())
    user_entries = services.library.load_user_entries()
    merged = merge_collections([result.entries, user_entries])
    emit(
        services.events,
        CatalogEvent.MERGED,
        source=result.source.value,
        resolved=result.count,
        user=len(user_entries),
        total=len(merged),
    )
    return CatalogState(merged, load_result=result)


def import_catalog_file(
    path: Path | str,
    *,
    services: CatalogServices,
    dry_run: bool = False,
) -> ImportResult:
    """Parse an import file and, unless ``dry_run``, add its valid entries."""

    raw = Path(path).read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        log.warning("Import file %s is not valid UTF-8", path)
        result = ImportResult()
        result.errors.append("File is not valid UTF-8 text")
        return result
    result = parse_import(text)
    if dry_run or not result.is_valid:
        return result
    services.library.import_entries(result)
    log.info("Imported %s entries from %s", len(result.entries), path)
    return result


def export_catalog(
    services: CatalogServices,
    *,
    include_builtins: bool = False,
    include_metadata: bool = True,
    output: Path | str | None = None,
) -> str:
    state = open_catalog(services)
    document = build_export(
        state.entries,
        include_builtins=include_builtins,
        include_metadata=include_metadata,
    )
    text = render_export(document)
    if output is not None:
        Path(output).write_text(text + "\n", encoding="utf-8")
        log.info("Wrote export to %s", output)
    components = document.get("components")
    emit(
        services.events,
        CatalogEvent.EXPORTED,
        count=len(components) if isinstance(components, list) else 0,
        include_builtins=include_builtins,
    )
    return text


def reset_catalog(services: CatalogServices) -> LoadResult:
    """Drop every stored collection and resolve from scratch."""

    return asyncio.run(services.loader.reload_builtin())


def diagnose_catalog(services: CatalogServices, *, migrate: bool = False) -> CatalogDiagnostics:
    migrated = services.library.migrate_storage() if migrate else []
    state = open_catalog(services)
    return CatalogDiagnostics(
        usage=services.store.usage(),
        malformed=services.library.find_malformed(),
        broken_dependencies=state.broken_dependencies(),
        migrated=migrated,
    )
