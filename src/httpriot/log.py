# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Logging for the `httpriot` package.

Every module logs through `logging.getLogger(__name__)`, so all records land
under the `httpriot` logger. Libraries embedding HTTPRiot leave it alone and
configure logging themselves; the CLI calls `setup_logging()`.
"""

from __future__ import annotations

import logging
import os
import sys

LOGGER_NAME = "httpriot"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever `sys.stderr` is when a record is emitted."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def resolve_level(level: str | None = None) -> int:
    """Map a level name (or `HTTPRIOT_LOG_LEVEL`) to a logging level, WARNING if unknown."""
    name = (level or os.getenv("HTTPRIOT_LOG_LEVEL") or "WARNING").strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a stderr handler to the `httpriot` logger; calling it again only updates the level."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    if not any(isinstance(handler, _StderrHandler) for handler in logger.handlers):
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


__all__ = ["LOGGER_NAME", "resolve_level", "setup_logging"]
