"""Diagnostic logging for obscli, built on loguru.

Command output goes to stdout through rich; diagnostics go to stderr so they
never mix into the per-project report. An optional log file always records
DEBUG detail, which keeps a full trace of a run (including the httpx request
log) without making the terminal noisy.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from loguru import logger

STDERR_FORMAT = "<level>{level: <8}</level> <cyan>{name}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

_LIBRARY_LOGGERS = ("httpx", "httpcore")


class _LoguruBridge(logging.Handler):
    """Forward stdlib records (httpx, httpcore) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        source = record.name
        logger.patch(lambda r: r.update(name=source)).opt(exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str = "WARNING", log_file: str | Path | None = None) -> None:
    """Configure loguru sinks for one command invocation.

    Args:
        level: Minimum level written to stderr.
        log_file: If given, every record down to DEBUG is also appended here.
    """
    level = level.upper()

    logger.remove()
    logger.add(sys.stderr, level=level, format=STDERR_FORMAT, colorize=None)
    if log_file:
        logger.add(str(log_file), level="DEBUG", format=FILE_FORMAT, encoding="utf-8")

    # Library records are only worth routing when someone will read them.
    library_level = logging.DEBUG if log_file or level == "DEBUG" else logging.WARNING
    bridge = _LoguruBridge()
    for name in _LIBRARY_LOGGERS:
        lib_logger = logging.getLogger(name)
        lib_logger.handlers = [bridge]
        lib_logger.propagate = False
        lib_logger.setLevel(library_level)

    logger.debug("Logging initialised (stderr={}, file={})", level, log_file or "-")
