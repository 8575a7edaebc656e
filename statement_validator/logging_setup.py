"""Centralized logging configuration for the ``statement_validator`` package.

Entrypoints call ``logging_configure`` once at startup. Library modules only
call ``logging_get_logger(__name__)`` and never attach their own handlers.
"""

from __future__ import annotations

import logging
from typing import IO

_PKG_LOGGER_NAME = "statement_validator"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _logging_parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    normalized_level = level.strip().upper()
    if normalized_level.isdigit():
        return int(normalized_level)
    numeric_level = logging.getLevelName(normalized_level)
    if isinstance(numeric_level, int):
        return numeric_level
    return logging.INFO


def logging_configure(level: int | str = logging.INFO, stream: IO[str] | None = None) -> None:
    """Attach a single stream handler to the package root logger.

    Args:
        level: Logging level as int or level name.
        stream: Output stream for the handler; standard error when omitted.

    Returns:
        None: Repeated calls after the first are no-ops.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    numeric_level = _logging_parse_level(level)
    stream_handler = logging.StreamHandler(stream)
    stream_handler.setLevel(numeric_level)
    stream_handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))

    logger.setLevel(numeric_level)
    logger.addHandler(stream_handler)
    logger.propagate = False

    _CONFIGURED = True


def logging_get_logger(name: str) -> logging.Logger:
    """Return a named logger, keeping the package root silent until configured."""

    package_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
