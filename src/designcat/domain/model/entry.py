"""Catalog entry records.

Entries are immutable. They are only produced by ``designcat.domain.normalize``
and changed by normalizing a new payload, never by mutating fields in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import Level, PropKind, Status

if TYPE_CHECKING:
    from collections.abc import Mapping

type PropDefault = str | int | float | bool

BUILTIN_ID_MARKER = "builtin-"


@dataclass(frozen=True, slots=True)
class PropertySpec:
    name: str
    kind: PropKind = PropKind.TEXT
    label: str | None = None
    default: PropDefault | None = None
    options: tuple[str, ...] = ()
    required: bool = False
    description: str | None = None


@dataclass(frozen=True, slots=True)
class DemoSpec:
    """Free-form property bag used when rendering a preview."""

    props: Mapping[str, object] = field(default_factory=dict[str, object])


@dataclass(frozen=True, slots=True, kw_only=True)
class Entry:
    id: str
    name: str
    level: Level = Level.ATOM
    version: str = "0.1.0"
    status: Status = Status.DRAFT
    tags: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    notes: str | None = None
    description: str | None = None
    preview_kind: str | None = None
    code: str | None = None
    props_spec: tuple[PropertySpec, ...] = ()
    demo: DemoSpec | None = None

    @property
    def is_builtin(self) -> bool:
        return is_builtin_id(self.id)


def is_builtin_id(entry_id: str) -> bool:
    return BUILTIN_ID_MARKER in entry_id


def property_spec_to_payload(spec: PropertySpec) -> dict[str, object]:
    payload: dict[str, object] = {"name": spec.name, "kind": spec.kind.value}
    if spec.label is not None:
        payload["label"] = spec.label
    if spec.default is not None:
        payload["default"] = spec.default
    if spec.options:
        payload["options"] = list(spec.options)
    if spec.required:
        payload["required"] = True
    if spec.description is not None:
        payload["description"] = spec.description
    return payload


def entry_to_payload(entry: Entry) -> dict[str, object]:
    """Render ``entry`` in the camelCase wire shape used for storage and export."""

    payload: dict[str, object] = {
        "id": entry.id,
        "name": entry.name,
        "level": entry.level.value,
        "version": entry.version,
        "status": entry.status.value,
        "tags": list(entry.tags),
        "dependencies": list(entry.dependencies),
    }
    optional_text = {
        "notes": entry.notes,
        "description": entry.description,
        "previewKind": entry.preview_kind,
        "code": entry.code,
    }
    payload.update({key: value for key, value in optional_text.items() if value is not None})
    if entry.props_spec:
        payload["propsSpec"] = [property_spec_to_payload(spec) for spec in entry.props_spec]
    if entry.demo is not None:
        payload["demo"] = {"props": dict(entry.demo.props)}
    return payload
