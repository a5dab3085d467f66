"""Turning a live collection into a serializable export document."""

from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from designcat.common.serialization import dump_json
from designcat.domain.model import Level, Status, entry_to_payload, is_builtin_id
from designcat.domain.normalize import normalize_catalog

from .schema import ExportDocument, ExportMetadata, LevelCounts, StatusCounts

if TYPE_CHECKING:
    from collections.abc import Iterable

    from designcat.domain.model import Entry

log = getLogger(__name__)


def build_export(
    entries: Iterable[Entry | object],
    *,
    include_builtins: bool = False,
    include_metadata: bool = True,
    now: datetime | None = None,
) -> dict[str, object]:
    """Build the export document for ``entries``.

    Built-in entries are left out unless ``include_builtins`` is set. Every
    exported entry is re-normalized so the document never carries a
    malformed record.
    """

    normalized = normalize_catalog(list(entries))
    if not include_builtins:
        normalized = [entry for entry in normalized if not is_builtin_id(entry.id)]

    metadata = _metadata(normalized, now or datetime.now(UTC)) if include_metadata else None
    document = ExportDocument(
        components=[entry_to_payload(entry) for entry in normalized],
        metadata=metadata,
    )
    log.debug("Built export with %s entries", len(normalized))
    return document.to_payload()


def render_export(document: dict[str, object], *, indent: int | None = 2) -> str:
    return dump_json(document, indent=indent)


def _metadata(entries: list[Entry], exported_at: datetime) -> ExportMetadata:
    levels = Counter(entry.level for entry in entries)
    statuses = Counter(entry.status for entry in entries)
    return ExportMetadata(
        exported_at=exported_at,
        total_components=len(entries),
        components_by_level=LevelCounts(
            atom=levels[Level.ATOM],
            molecule=levels[Level.MOLECULE],
            organism=levels[Level.ORGANISM],
        ),
        components_by_status=StatusCounts(
            draft=statuses[Status.DRAFT],
            ready=statuses[Status.READY],
        ),
    )
