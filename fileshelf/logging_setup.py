"""Logging configuration for the fileshelf service.

Everything logs through ``logging.getLogger(__name__)``; this module only
installs the handler on the package logger. Calling ``configure_logging``
again (reloads, tests) adjusts the level without stacking handlers.
"""
from __future__ import annotations

import logging
import sys

LOGGER_NAME = 'fileshelf'
LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'

_handler: logging.Handler | None = None


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: str | int = 'info') -> logging.Logger:
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)
        logger.propagate = False

    logger.setLevel(_parse_level(level))
    return logger
