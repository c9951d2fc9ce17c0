"""Logging configuration for chatprompts using loguru.

Import `logger` from this module everywhere. Call `setup_logging()` once at
startup to configure sinks.

Console: colorized, concise format
File: optional (CHATPROMPTS_LOG_FILE), 10MB rotation, 7-day retention
"""

from __future__ import annotations

import sys

from loguru import logger

# Re-export so all modules do: from .log import logger
__all__ = ["logger", "setup_logging"]

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure loguru sinks. Safe to call multiple times (idempotent)."""
    global _configured
    if _configured:
        return
    _configured = True

    from .config import settings

    level = (level or settings.log_level).upper()

    # Remove default stderr handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            settings.log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            encoding="utf-8",
        )

    logger.debug("Logging initialized | level={} | file={}", level, settings.log_file)
