"""Centralized logging configuration for the ``fintrack`` package.

- ``configure_logging(...)`` attaches a single ``StreamHandler`` to the
  package root logger. The CLI calls it once at startup.
- ``get_logger(name)`` returns a logger and makes sure the package root has
  at least a ``NullHandler`` when nothing has been configured.

Library modules never attach their own handlers.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "fintrack"
_CONFIGURED = False

LOG_LEVEL_ENV = "FINTRACK_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def parse_level(level: int | str | None) -> int:
    """Resolve a level name or number, falling back to the environment."""
    if isinstance(level, int):
        return level
    if isinstance(level, str) and level.strip():
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        raise ValueError(f"Unknown log level '{level}'")
    env_val = os.getenv(LOG_LEVEL_ENV)
    if env_val:
        return parse_level(env_val)
    return logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure the package root logger exactly once.

    Args:
        level: Level as ``int`` or name. ``None`` reads ``FINTRACK_LOG_LEVEL``
            and otherwise defaults to ``WARNING`` so CLI output stays clean.
        fmt: Optional format string
        stream: Output stream for the handler (defaults to ``sys.stderr``)
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = parse_level(level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)

    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def reset_logging() -> None:
    """Drop handlers installed by ``configure_logging``."""
    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _CONFIGURED = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, ensuring safe defaults for library use."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
