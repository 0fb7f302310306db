# amion_sch/logger.py
from __future__ import annotations

import logging
import sys

LOGGER_NAME = "amion_sch"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a stdout handler to the package logger (used by the CLI)."""
    logger.setLevel(level)

    # Prevent duplicate handlers if called more than once
    if not any(getattr(h, "_amion_stream", False) for h in logger.handlers):
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        stream_handler._amion_stream = True
        logger.addHandler(stream_handler)

    return logger
