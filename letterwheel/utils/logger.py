"""Logging utilities for the letter wheel game."""

from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

# requests logs every connection at DEBUG through urllib3.
NOISY_LOGGERS = ("urllib3",)


def resolve_level(level: Union[int, str]) -> int:
    """Accept ``logging.INFO`` as well as ``"info"``; unknown names fall back to WARNING."""

    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure root logging for the CLI and tests.

    Selection and placement decisions are logged per module, so the format
    keeps the logger name visible. Calling this again replaces the handler
    instead of stacking a second one.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, logging.WARNING))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "letterwheel")
