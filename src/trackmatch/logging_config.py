"""Logging configuration using loguru."""

import sys

from loguru import logger

from trackmatch.config import Settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logging(config: Settings, console: bool = True) -> None:
    """Configure loguru sinks for the application.

    Args:
        config: Application settings (log level and optional log file).
        console: Whether to log to stderr.
    """
    logger.remove()

    level = "DEBUG" if config.debug else config.log_level.upper()

    if console:
        logger.add(sys.stderr, format=LOG_FORMAT, level=level, colorize=True)

    if config.log_file:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(config.log_file),
            format=FILE_FORMAT,
            level=level,
            rotation="10 MB",
            retention="30 days",
            enqueue=True,
        )

    logger.debug("Logging configured at {} level", level)
