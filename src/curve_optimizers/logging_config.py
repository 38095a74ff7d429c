"""
Logging setup for curve_optimizers.

Usage:
    from curve_optimizers.logging_config import setup_logging, get_logger

    # Once, in a driver script
    setup_logging(level="DEBUG", console=True)

    # In any module
    logger = get_logger(__name__)
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "curve_optimizers"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    console: bool = False,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
        log_file: Optional path of a file to log into
        console: If True, also log to stderr

    Returns:
        The configured package logger
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.debug(
        "Logging configured: level=%s, log_file=%s, console=%s", level, log_file, console
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
