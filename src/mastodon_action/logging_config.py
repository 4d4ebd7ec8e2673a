"""Logging configuration for the application."""

import sys
from pathlib import Path

from loguru import logger

LOG_FORMAT = "{time} {level} {message}"


def _stderr_sink(message: str) -> None:
    # Looked up per message
    sys.stderr.write(message)


def configure_logging(level: str = "INFO", log_file: str | Path | None = None) -> None:
    """
    Configure logging for the application.

    Args:
        level (str): Minimum level for the stderr handler.
        log_file (str | Path | None): Optional path for a rotating DEBUG log file.
    """
    logger.remove()
    logger.add(_stderr_sink, level=level.upper(), format=LOG_FORMAT, backtrace=True, diagnose=False)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level="DEBUG",
            format=LOG_FORMAT,
            rotation="1 day",
            retention="1 week",
            backtrace=True,
            diagnose=False,
        )

    logger.debug("Logging configured successfully")


# Remove any pre-configured handlers
configure_logging()
