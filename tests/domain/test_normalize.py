from __future__ import annotations

from uuid import UUID

import pytest

from designcat.domain.model import DemoSpec, Entry, Level, PropKind, Status, entry_to_payload
from designcat.domain.normalize import normalize_catalog, normalize_entry
from tests.helpers.entries import make_payload


class ExplodingPayload(dict[str, object]):
    """Mapping whose ``tags`` lookup blows up."""

    def get(self, key: str, default: object = None) -> object:  # type: ignore[override]
        if key == "tags":
            raise RuntimeError("boom")
        return super().get(key, default)


def _normalize(raw: object, *, position: int | None = None) -> Entry:
    entry = normalize_entry(raw, position=position)
    assert entry is not None
    return entry


def test_normalize_entry_keeps_well_formed_fields() -> None:
    entry = _normalize(
        make_payload(
            "button",
            tags=["action"],
            dependencies=["icon"],
            notes="Primary actions only",
            previewKind="button",
            demo={"props": {"label": "Go"}},
        )
    )

    assert entry.id == "button"
    assert entry.name == "Button"
    assert entry.level is Level.ATOM
    assert entry.status is Status.READY
    assert entry.version == "1.0.0"
    assert entry.tags == ("action",)
    assert entry.dependencies == ("icon",)
    assert entry.notes == "Primary actions only"
    assert entry.preview_kind == "button"
    assert entry.demo == DemoSpec(props={"label": "Go"})


@pytest.mark.parametrize("raw", [None, 3, "button", ["button"], True])
def test_normalize_entry_rejects_non_objects(raw: object) -> None:
    assert normalize_entry(raw) is None


def test_normalize_entry_fills_identity_defaults() -> None:
    entry = _normalize({"level": "molecule"}, position=2)

    assert UUID(entry.id)
    assert entry.name == "Untitled 3"
    assert entry.level is Level.MOLECULE
    assert entry.status is Status.DRAFT
    assert entry.version == "0.1.0"
    assert entry.tags == ()
    assert entry.dependencies == ()
    assert entry.notes is None


def test_normalize_entry_without_position_uses_plain_placeholder() -> None:
    assert _normalize({"id": "x"}).name == "Untitled"


def test_normalize_entry_coerces_loose_values() -> None:
    entry = _normalize(
        {
            "id": 42,
            "name": "  Card  ",
            "level": "ORGANISM ",
            "status": "Ready",
            "version": 2,
            "tags": ["a", 1, None, " b ", True],
            "notes": 17,
        }
    )

    assert entry.id == "42"
    assert entry.name == "Card"
    assert entry.level is Level.ORGANISM
    assert entry.status is Status.READY
    assert entry.version == "2"
    assert entry.tags == ("a", "1", "b")
    assert entry.notes is None


def test_normalize_entry_falls_back_for_unknown_enums() -> None:
    entry = _normalize(make_payload(level="template", status="shipped"))

    assert entry.level is Level.ATOM
    assert entry.status is Status.DRAFT


def test_normalize_entry_accepts_legacy_deps_alias() -> None:
    payload = make_payload(deps=["label"])
    del payload["dependencies"]

    assert _normalize(payload).dependencies == ("label",)


def test_normalize_entry_cleans_property_specs() -> None:
    entry = _normalize(
        make_payload(
            propsSpec=[
                {"name": "size", "kind": "select", "options": ["s", "m"], "required": "true"},
                {"name": "size", "kind": "text"},
                {"name": "label", "kind": "text", "options": ["ignored"], "default": {"x": 1}},
                {"kind": "boolean"},
                "junk",
            ]
        )
    )

    assert [spec.name for spec in entry.props_spec] == ["size", "label"]
    size, label = entry.props_spec
    assert size.kind is PropKind.SELECT
    assert size.options == ("s", "m")
    assert size.required is True
    assert label.options == ()
    assert label.default is None


def test_normalize_entry_replaces_bad_demo_props() -> None:
    assert _normalize(make_payload(demo={"props": "nope"})).demo == DemoSpec(props={})
    assert _normalize(make_payload(demo="nope")).demo is None


def test_normalize_entry_survives_field_failures() -> None:
    entry = _normalize(ExplodingPayload(make_payload("chip", tags=["filter"])))

    assert entry.id == "chip"
    assert entry.tags == ()


@pytest.mark.parametrize(
    "raw",
    [
        make_payload("button", tags=["x"], demo={"props": {"icon": None}}),
        {"id": "loose", "level": "MOLECULE", "tags": "nope", "deps": ["a", 2]},
        make_payload("select", propsSpec=[{"name": "v", "kind": "select", "options": ["a"]}]),
    ],
)
def test_normalize_entry_is_idempotent(raw: dict[str, object]) -> None:
    once = _normalize(raw)

    assert _normalize(entry_to_payload(once)) == once
    assert _normalize(once) == once


def test_normalize_catalog_drops_non_objects_and_numbers_placeholders() -> None:
    entries = normalize_catalog([None, {"id": "a"}, "x", {"id": "b", "name": "B"}])

    assert [entry.id for entry in entries] == ["a", "b"]
    assert entries[0].name == "Untitled 2"


@pytest.mark.parametrize("items", [None, {"components": []}, "[]", 5])
def test_normalize_catalog_requires_a_sequence(items: object) -> None:
    assert normalize_catalog(items) == []
