"""Logging setup for the designcat CLI and services."""

from __future__ import annotations

import logging

_NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger with a terse CLI format.

    HTTP and database client loggers stay at WARNING unless ``level`` asks for
    debug output. ``force=True`` replaces handlers installed earlier.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
