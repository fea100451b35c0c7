"""Loguru setup shared by every module of the backend.

Application code imports ``logger`` from here. ``configure_logging`` swaps
Loguru's default sink for a compact stdout sink and routes records emitted
through the standard library ``logging`` module (uvicorn, SQLAlchemy) into
the same sink. The level defaults to the ``LOG_LEVEL`` environment variable.
"""

import logging
import os
import sys

from loguru import logger

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} | {message}"

# stdlib loggers whose handlers are replaced so they end up in Loguru
ROUTED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "sqlalchemy.engine",
    "asyncio",
)


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records to Loguru, keeping the caller's location."""

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Install the stdout sink and the stdlib intercept at ``level``.

    Safe to call more than once; previous sinks are dropped each time.
    """
    level = level.upper()
    logger.remove()
    logger.add(
        sys.stdout,
        level=level,
        format=LOG_FORMAT,
        backtrace=True,
        diagnose=False,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=level, force=True)
    for name in ROUTED_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [InterceptHandler()]
        stdlib_logger.propagate = False
        stdlib_logger.setLevel(level)

    logger.debug("Logging configured at level {}", level)
