"""Loguru setup for the relay process.

Standard-library loggers (uvicorn, httpx) are routed into loguru so the
process writes a single, consistently formatted stream.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

_STDLIB_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx")


class InterceptHandler(logging.Handler):
    """Forward standard-library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Replace loguru's default sink and capture stdlib logging.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: Emit one JSON document per record instead of text.

    Raises:
        ValueError: If ``level`` is not a level loguru knows.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        serialize=json_output,
        backtrace=False,
        diagnose=False,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _STDLIB_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
