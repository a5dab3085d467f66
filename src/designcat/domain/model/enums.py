"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Level(StrEnum):
    ATOM = "atom"
    MOLECULE = "molecule"
    ORGANISM = "organism"


class Status(StrEnum):
    DRAFT = "draft"
    READY = "ready"


class PropKind(StrEnum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"


class LoadSource(StrEnum):
    """Where a resolved collection came from."""

    CACHE = "cache"
    REMOTE = "remote"
    BUILTIN = "builtin"
