"""Coercion of untrusted payloads into canonical catalog entries.

Every field is coerced independently: a malformed field falls back to a safe
default instead of rejecting the whole entry. Only payloads that are not
mappings at all are rejected. The functions here never raise.
"""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, cast
from uuid import uuid4

from designcat.domain.model import (
    DemoSpec,
    Entry,
    Level,
    PropKind,
    PropertySpec,
    Status,
    entry_to_payload,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from enum import StrEnum

    from designcat.domain.model import PropDefault

log = getLogger(__name__)

DEFAULT_VERSION = "0.1.0"
PLACEHOLDER_NAME = "Untitled"

type Payload = Mapping[str, object]


def normalize_entry(raw: object, *, position: int | None = None) -> Entry | None:
    """Return a canonical entry for ``raw`` or ``None`` when it is not an object.

    ``position`` numbers the placeholder name given to entries without one.
    Passing an ``Entry`` re-normalizes its wire payload.
    """

    if isinstance(raw, Entry):
        raw = entry_to_payload(raw)
    if not isinstance(raw, Mapping):
        return None
    data = cast(Payload, raw)

    entry_id = _guarded("id", lambda: _identity_text(data.get("id")), None)
    name = _guarded("name", lambda: _identity_text(data.get("name")), None)
    level = _guarded(
        "level", lambda: _enum_member(Level, data.get("level"), Level.ATOM), Level.ATOM
    )
    status = _guarded(
        "status", lambda: _enum_member(Status, data.get("status"), Status.DRAFT), Status.DRAFT
    )

    return Entry(
        id=entry_id or _generate_id(),
        name=name or _placeholder_name(position),
        level=level,
        version=_guarded("version", lambda: _version(data.get("version")), DEFAULT_VERSION),
        status=status,
        tags=_guarded("tags", lambda: _string_list(data.get("tags")), ()),
        dependencies=_guarded("dependencies", lambda: _dependencies(data), ()),
        notes=_guarded("notes", lambda: _optional_text(data.get("notes")), None),
        description=_guarded("description", lambda: _optional_text(data.get("description")), None),
        preview_kind=_guarded("previewKind", lambda: _optional_text(data.get("previewKind")), None),
        code=_guarded("code", lambda: _optional_text(data.get("code")), None),
        props_spec=_guarded("propsSpec", lambda: _props_spec(data.get("propsSpec")), ()),
        demo=_guarded("demo", lambda: _demo(data.get("demo")), None),
    )


def normalize_catalog(items: object) -> list[Entry]:
    """Normalize every element of a sequence, dropping the ones that are rejected."""

    if not isinstance(items, (list, tuple)):
        return []
    entries: list[Entry] = []
    for position, item in enumerate(cast("list[object] | tuple[object, ...]", items)):
        entry = normalize_entry(item, position=position)
        if entry is not None:
            entries.append(entry)
    return entries


def normalize_property_spec(raw: object) -> PropertySpec | None:
    """Return a property spec, or ``None`` when ``raw`` has no usable name."""

    if not isinstance(raw, Mapping):
        return None
    data = cast(Payload, raw)
    name = _identity_text(data.get("name"))
    if name is None:
        return None
    kind = _enum_member(PropKind, data.get("kind"), PropKind.TEXT)
    return PropertySpec(
        name=name,
        kind=kind,
        label=_optional_text(data.get("label")),
        default=_prop_default(data.get("default")),
        options=_string_list(data.get("options")) if kind is PropKind.SELECT else (),
        required=_flag(data.get("required")),
        description=_optional_text(data.get("description")),
    )


def _guarded[T](field_name: str, coerce: Callable[[], T], fallback: T) -> T:
    try:
        return coerce()
    except Exception:  # noqa: BLE001
        log.debug("Falling back for malformed field %s", field_name, exc_info=True)
        return fallback


def _generate_id() -> str:
    return str(uuid4())


def _placeholder_name(position: int | None) -> str:
    if position is None:
        return PLACEHOLDER_NAME
    return f"{PLACEHOLDER_NAME} {position + 1}"


def _identity_text(value: object) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _optional_text(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _version(value: object) -> str:
    if isinstance(value, bool):
        return DEFAULT_VERSION
    if isinstance(value, str):
        return value.strip() or DEFAULT_VERSION
    if isinstance(value, (int, float)):
        return str(value)
    return DEFAULT_VERSION


def _enum_member[E: StrEnum](enum_type: type[E], value: object, default: E) -> E:
    if not isinstance(value, str):
        return default
    try:
        return enum_type(value.strip().lower())
    except ValueError:
        return default


def _string_list(value: object) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    items: list[str] = []
    for item in cast("list[object] | tuple[object, ...]", value):
        text = _identity_text(item)
        if text is not None:
            items.append(text)
    return tuple(items)


def _dependencies(data: Payload) -> tuple[str, ...]:
    value = data.get("dependencies")
    if not isinstance(value, (list, tuple)):
        value = data.get("deps")
    return _string_list(value)


def _props_spec(value: object) -> tuple[PropertySpec, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    specs: dict[str, PropertySpec] = {}
    for item in cast("list[object] | tuple[object, ...]", value):
        spec = _guarded("propsSpec[]", lambda item=item: normalize_property_spec(item), None)
        if spec is None or spec.name in specs:
            continue
        specs[spec.name] = spec
    return tuple(specs.values())


def _prop_default(value: object) -> PropDefault | None:
    if isinstance(value, (str, int, float, bool)):
        return value
    return None


def _flag(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def _demo(value: object) -> DemoSpec | None:
    if not isinstance(value, Mapping):
        return None
    props = cast(Payload, value).get("props")
    if not isinstance(props, Mapping):
        return DemoSpec(props={})
    return DemoSpec(props={str(key): item for key, item in cast(Payload, props).items()})
