"""Centralized logging configuration.

All modules should use ``get_logger(__name__)`` to obtain a logger.
"""

from __future__ import annotations

import logging
import sys

from .config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def _init_logging() -> None:
    """Configure the package logger once."""
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger("budget_dashboard")
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    root.addHandler(handler)
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger under the ``budget_dashboard`` namespace.
    """
    _init_logging()
    if not name.startswith("budget_dashboard"):
        name = f"budget_dashboard.{name}"
    return logging.getLogger(name)
