"""Fire-and-forget diagnostic notifications for telemetry collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)


class CatalogEvent(StrEnum):
    CACHED = "catalog:cached"
    SAVED = "catalog:saved"
    RELOADED = "catalog:reloaded"
    MERGED = "catalog:merged"
    IMPORTED = "components:import"
    EXPORTED = "components:export"


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class DiagnosticEvent:
    name: CatalogEvent
    detail: Mapping[str, object] = field(default_factory=dict[str, object])
    emitted_at: datetime = field(default_factory=_utcnow)


class EventSink(Protocol):
    def __call__(self, event: DiagnosticEvent) -> None: ...


class LoggingEventSink:
    """Default sink: record events in the application log."""

    def __call__(self, event: DiagnosticEvent) -> None:
        details = ", ".join(f"{key}={value}" for key, value in event.detail.items())
        log.info("%s %s", event.name.value, details)


def emit(sink: EventSink | None, name: CatalogEvent, **detail: object) -> None:
    """Deliver an event without letting a failing sink reach the caller."""

    if sink is None:
        return
    try:
        sink(DiagnosticEvent(name=name, detail=detail))
    except Exception:  # noqa: BLE001
        log.warning("Diagnostic sink failed for %s", name.value, exc_info=True)
