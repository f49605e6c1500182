"""Logging configuration for the control client.

The library logs through Loguru but stays silent until an application opts in.
``configure_logging`` replaces the default handler with a console sink and,
optionally, a rotating file sink, then enables the ``airtraffic`` logger.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level: <8} | "
    "{name}:{function}:{line} - "
    "{message}"
)


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Install console (and optional file) sinks and enable library logging.

    Args:
        level: Minimum level for the console sink
        log_file: Path of a rotating log file, or None for console only
    """
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        backtrace=True,
        diagnose=False,
    )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            retention="1 week",
            compression="zip",
            format=FILE_FORMAT,
            level="DEBUG",
            backtrace=True,
            diagnose=False,
        )

    logger.enable("airtraffic")


__all__ = ["configure_logging"]
