"""
Logging configuration
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from task_cli.config.settings import settings
from task_cli.config.constants import LOG_FORMAT, LOG_DATE_FORMAT, LOGGER_NAME


def setup_logger(
    name: str = LOGGER_NAME,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Setup and configure logger

    Console output goes to stderr so that stdout stays reserved for command
    results (JSON mode must be machine-readable).

    Args:
        name: Logger name
        level: Console log level name (defaults to settings.LOG_LEVEL)
        log_file: Optional debug log file (defaults to settings.LOG_FILE)

    Returns:
        Configured logger instance
    """
    level = level or settings.LOG_LEVEL
    log_file = log_file if log_file is not None else settings.LOG_FILE

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers
    logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level.upper(), logging.WARNING))
    console_formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


# Global logger instance
logger = setup_logger()
