"""Ports the catalog core consumes."""

from __future__ import annotations

from .fetching import DocumentFetcher
from .storage import KeyValueStore

__all__ = ["DocumentFetcher", "KeyValueStore"]
