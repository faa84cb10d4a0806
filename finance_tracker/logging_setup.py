"""Logging set-up for the tracker.

The Streamlit page and the scripts call ``configure_logging`` with the level
from :class:`~finance_tracker.config.Settings`. Modules ask ``get_logger`` for
a ``finance_tracker.*`` logger and leave handlers alone.

Streamlit re-executes the page script on every interaction inside one
process, so only the first ``configure_logging`` call installs a handler.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

LOGGER_NAME = "finance_tracker"
LEVEL_ENV_VAR = "FINANCE_TRACKER_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None


def _level_from_name(level: int | str | None) -> int | None:
    if isinstance(level, int):
        return level
    if not level:
        return None
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else None


def resolve_level(level: int | str | None = None) -> int:
    """Turn an int, level name or numeric string into a logging level.

    ``None`` or an unknown name falls back to ``FINANCE_TRACKER_LOG_LEVEL``,
    then INFO.
    """

    for candidate in (level, os.getenv(LEVEL_ENV_VAR)):
        parsed = _level_from_name(candidate)
        if parsed is not None:
            return parsed
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach one stream handler to the ``finance_tracker`` logger and return it."""

    global _handler
    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        return logger

    for existing in list(logger.handlers):
        if isinstance(existing, logging.NullHandler):
            logger.removeHandler(existing)

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT, DEFAULT_DATEFMT))
    logger.addHandler(_handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    # Silent until configure_logging runs.
    pkg_logger = logging.getLogger(LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
