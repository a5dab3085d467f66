"""JSON helpers shared by storage reads, remote documents and imports."""

from __future__ import annotations

import json
from logging import getLogger

log = getLogger(__name__)


def safe_parse(text: str | bytes | None, default: object = None) -> object:
    """Decode ``text`` as JSON, returning ``default`` when it cannot be parsed.

    This is the only place where JSON decode failures are swallowed; callers
    decide what an unparseable document means for them.
    """

    if text is None:
        return default
    try:
        return json.loads(text)
    except (TypeError, ValueError, RecursionError) as exc:
        log.debug("Discarding unparseable JSON payload: %s", exc)
        return default


def dump_json(value: object, *, indent: int | None = None) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)
