"""Logging setup.

Console output goes through Rich's ``RichHandler``; a plain-text copy of
everything at DEBUG and above is written to ``journalbot.log`` inside the
metadata directory.  Modules obtain their loggers with
``logging.getLogger(__name__)`` and never configure handlers themselves.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "journalbot"
LOG_FILE_NAME = "journalbot.log"


def setup_logging(level: str = "INFO", log_dir: Optional[Path] = None) -> logging.Logger:
    """Configure the ``journalbot`` logger hierarchy.

    Args:
        level: Console log level name (``DEBUG``, ``INFO``, ``WARNING``, ``ERROR``)
        log_dir: Directory for the log file. No file is written when None.

    Returns:
        The configured package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.propagate = False

    console_handler = RichHandler(rich_tracebacks=True, show_path=False)
    console_handler.setLevel(_parse_level(level))
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="%H:%M:%S"))
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger


def _parse_level(level: str) -> int:
    """Map a level name to its numeric value, defaulting to INFO."""
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO
