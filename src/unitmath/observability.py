"""Logging helpers for unitmath."""

from __future__ import annotations

import logging

from . import config

logger = logging.getLogger(__name__)

_LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Install a basic handler on the root logger.

    ``level`` defaults to ``UNITMATH_LOG_LEVEL``.
    """

    resolved = level if level is not None else config.LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    logging.basicConfig(level=resolved, format=_LOG_FORMAT)
    logging.getLogger("unitmath").setLevel(resolved)


def log_event(message: str, **extra: object) -> None:
    """Log an event with a structured payload attached."""

    logger.info(message, extra={"payload": dict(extra)})


__all__ = ["configure_logging", "log_event"]
