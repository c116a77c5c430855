"""Stderr logging setup; stdout belongs to the stdio transport."""

from __future__ import annotations

import logging
import sys

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_logging_initialized = False


def configure_logging(level: str) -> None:
    """Attach a single stderr handler to the root logger.

    This is idempotent - later calls only adjust the level.
    """
    global _logging_initialized

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if _logging_initialized:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root_logger.addHandler(handler)

    _logging_initialized = True
