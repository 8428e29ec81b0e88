"""Loguru sink configuration for the application entry points."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from utils.constants import LOG_FILE

_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(level: str = "INFO", log_file: Path | None = LOG_FILE) -> None:
    """Replace the default loguru sink with stderr and a rotating file sink."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    if log_file is None:
        return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format=_FILE_FORMAT,
        rotation="5 MB",
        retention=5,
        encoding="utf-8",
    )
    logger.debug(f"Logging to {log_file} (console level {level.upper()})")
