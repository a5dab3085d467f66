from __future__ import annotations

from designcat.domain.document import (
    IMPORT_STRATEGIES,
    REMOTE_STRATEGIES,
    extract_entries,
    looks_like_entry,
)
from tests.helpers.entries import make_payload


def test_remote_documents_accept_arrays_and_wrappers() -> None:
    bare = extract_entries([1, 2])
    wrapped = extract_entries({"catalog": [1]})

    assert bare is not None
    assert bare.strategy.name == "array"
    assert wrapped is not None
    assert wrapped.items == [1]


def test_first_matching_wrapper_wins() -> None:
    extraction = extract_entries({"items": ["second"], "components": ["first"]})

    assert extraction is not None
    assert extraction.items == ["first"]


def test_remote_documents_do_not_wrap_single_entries() -> None:
    assert extract_entries(make_payload("card"), REMOTE_STRATEGIES) is None
    assert extract_entries({"list": [1]}, REMOTE_STRATEGIES) is None


def test_import_documents_wrap_single_entries() -> None:
    extraction = extract_entries(make_payload("card"), IMPORT_STRATEGIES)

    assert extraction is not None
    assert extraction.items == [make_payload("card")]
    assert extraction.strategy.warning is not None


def test_looks_like_entry_needs_identity_and_description() -> None:
    assert looks_like_entry({"name": "Card", "status": "ready"})
    assert not looks_like_entry({"name": "Card"})
    assert not looks_like_entry({"status": "ready"})
    assert not looks_like_entry(["name", "status"])
