"""Logging configuration using loguru.

Editor host integrations usually log through stdlib ``logging``; their records
are routed into loguru under their own logger name, next to tabkeeper's own
messages.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

from loguru import logger

QUIET_LOGGERS = ("asyncio", "concurrent.futures")
"""Stdlib loggers held at WARNING: event-loop and thread-pool chatter from anyio offloads."""


class _InterceptHandler(logging.Handler):
    """Forward stdlib records to loguru, keeping the stdlib logger name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so function/line point at the caller
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.patch(lambda r: r.update(name=record.name)).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str = "INFO", *, quiet: Iterable[str] = QUIET_LOGGERS) -> None:
    """Configure loguru as the sole logging sink.  Call once at startup."""
    level = level.upper()

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan> - "
            "<level>{message}</level>"
        ),
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging initialised (level={})", level)
