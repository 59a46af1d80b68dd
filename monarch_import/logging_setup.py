"""Logging for the ``monarch_import`` package.

Modules log through ``get_logger("monarch_import.<module>")`` and stay silent
until the CLI calls ``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "monarch_import"
_LEVEL_ENV_VAR = "MONARCH_IMPORT_LOG_LEVEL"
_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _level_from_name(value: str) -> int | None:
    value = value.strip().upper()
    if value.isdigit():
        return int(value)
    numeric = getattr(logging, value, None)
    return numeric if isinstance(numeric, int) else None


def _parse_level(level: int | str | None) -> int:
    """Resolve ``level``, then ``MONARCH_IMPORT_LOG_LEVEL``, then ``INFO``.

    An unknown level name falls through to the next source.
    """

    if isinstance(level, int):
        return level
    for candidate in (level, os.getenv(_LEVEL_ENV_VAR)):
        if candidate:
            parsed = _level_from_name(candidate)
            if parsed is not None:
                return parsed
    return logging.INFO


def configure_logging(level: int | str | None = None, *, stream: IO[str] | None = None) -> None:
    """Attach one ``StreamHandler`` (stderr by default) to the package logger.

    Later calls are no-ops. Records do not propagate to the root logger.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.setLevel(_parse_level(level))
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
