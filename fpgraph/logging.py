"""Logging configuration for fpgraph."""

import logging
import sys
from typing import Optional

from .config import Settings

LOGGER_NAME = "fpgraph"


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``fpgraph`` logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to

    Returns:
        The configured package logger
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(log_level)

    # Remove handlers from a previous call
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.info("Logging configured: level=%s", level)
    return package_logger


def setup_logging_from_settings(settings: Settings) -> logging.Logger:
    return setup_logging(settings.log_level, settings.log_file)
