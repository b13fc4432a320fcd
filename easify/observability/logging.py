"""Centralised logging helpers for easify."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

_LOGGER_CACHE: Dict[str, logging.Logger] = {}

_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str = "easify") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def resolve_level(level: Union[str, int, None]) -> int:
    if isinstance(level, int):
        return level
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).lower(), logging.WARNING)


def configure_logging(level: Union[str, int, None] = "warning") -> logging.Logger:
    """
    Set the level of the ``easify`` logger and attach a console handler.

    Only the CLI calls this; library code never installs handlers.
    """

    root_logger = get_logger("easify")
    root_logger.setLevel(resolve_level(level))
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
        root_logger.propagate = False
    return root_logger


def log_unpack_failure(
    *,
    pattern: str,
    length: int,
    reason: str,
    logger: Optional[logging.Logger] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Emit a structured debug entry for a rejected unpacking attempt."""

    payload: Dict[str, Any] = {
        "pattern": pattern,
        "length": length,
        "reason": reason,
    }
    if extras:
        payload.update(extras)
    target_logger = logger or get_logger("easify.executor")
    target_logger.debug(
        "Unpack rejected: %s",
        reason,
        extra={"easify_event": "unpack_failed", "easify_data": payload},
    )
