"""Centralized logging setup for the command line."""

from __future__ import annotations

import logging
import os
from typing import Optional

from .constants import Constants


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger.

    Args:
        level: Level name. Falls back to ``PINREF_LOG_LEVEL``, then WARNING.
        log_file: Optional path; records are also written there.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "WARNING").upper()
    level_value = getattr(logging, level_name, logging.WARNING)

    root = logging.getLogger()
    if not any(getattr(h, "_pinref", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        handler._pinref = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level_value)

    if log_file:
        log_path = os.path.abspath(log_file)
        if any(getattr(h, "_pinref_file", None) == log_path for h in root.handlers):
            return
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        file_handler._pinref_file = log_path  # type: ignore[attr-defined]
        root.addHandler(file_handler)
        logging.getLogger(__name__).info("Logging to file: %s", log_file)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True if ``logger`` would emit DEBUG records."""
    return logger.isEnabledFor(logging.DEBUG)
