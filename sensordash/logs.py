"""
sensordash.logs
===============

Console + rotating-file logging for the ``sensordash`` logger tree.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from sensordash.constants import LOG_DIR

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup(level: str | int = "INFO", log_dir: Path = LOG_DIR) -> logging.Logger:
    """Attach console and file handlers once; later calls only change the level."""
    logger = logging.getLogger("sensordash")
    try:
        logger.setLevel(level)
        bad_level = None
    except (ValueError, TypeError):
        logger.setLevel(logging.INFO)
        bad_level = level
    if not logger.handlers:
        _attach(logger, log_dir)
    if bad_level is not None:
        logger.warning("Unknown log level %r, using INFO", bad_level)
    return logger


def _attach(logger: logging.Logger, log_dir: Path) -> None:
    formatter = logging.Formatter(FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(log_dir / "sensordash.log",
                                       maxBytes=1_000_000, backupCount=3)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
