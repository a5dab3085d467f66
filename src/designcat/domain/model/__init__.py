"""Catalog domain model."""

from __future__ import annotations

from .entry import (
    BUILTIN_ID_MARKER,
    DemoSpec,
    Entry,
    PropDefault,
    PropertySpec,
    entry_to_payload,
    is_builtin_id,
    property_spec_to_payload,
)
from .enums import Level, LoadSource, PropKind, Status
from .results import ImportResult, ImportSummary, LoadResult, ValidationResult

__all__ = [
    "BUILTIN_ID_MARKER",
    "DemoSpec",
    "Entry",
    "ImportResult",
    "ImportSummary",
    "Level",
    "LoadResult",
    "LoadSource",
    "PropDefault",
    "PropKind",
    "PropertySpec",
    "Status",
    "ValidationResult",
    "entry_to_payload",
    "is_builtin_id",
    "property_spec_to_payload",
]
