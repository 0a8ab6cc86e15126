"""
Logging configuration using loguru.

Every module logs through ``loguru.logger`` directly; call ``setup_logging()``
once at startup to choose the level and an optional rotating log file.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from journal_chat.core.config import Config


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = "<level>[{level.name}]</level> {message}",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure loguru with console and optional file output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file. If None, only logs to stderr.
        fmt: Loguru format string for the console sink.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=fmt)

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}",
            rotation=rotation,
            retention=retention,
        )


def setup_logging_from_config(config: Config) -> None:
    """Apply the ``logging.*`` section of a Config (level, optional file)."""
    level = config.get("logging.level", "WARNING") or "WARNING"
    log_file = None
    if config.get("logging.to_file", False):
        log_file = os.path.join(config.get("paths.log_dir"), "journal-chat.log")
    setup_logging(level=str(level), log_file=log_file)
