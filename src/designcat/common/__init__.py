from __future__ import annotations

from .logging import configure_logging
from .serialization import dump_json, safe_parse

__all__ = [
    "configure_logging",
    "dump_json",
    "safe_parse",
]
