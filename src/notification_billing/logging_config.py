"""Structured logging configuration for notification billing."""

import logging
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAMESPACE = "notification_billing"
DEFAULT_LOG_FILE = "notification_billing.log"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_file: Optional[Path] = None,
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    console: bool = True,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """Configure logging for the billing package.

    A file handler is only attached when ``log_file`` or ``log_dir`` is given,
    so running a report never leaves log files behind by default.

    Args:
        log_file: Path to log file; relative paths are placed under ``log_dir``
        log_dir: Directory for log files (default file name: notification_billing.log)
        level: Logging level (default: INFO)
        console: Whether to also log to the console (default: True)
        format_string: Custom log format string

    Returns:
        The configured package logger
    """
    fmt = format_string or DEFAULT_FORMAT
    formatter = logging.Formatter(fmt, datefmt=DEFAULT_DATE_FORMAT)

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    if log_file is not None or log_dir is not None:
        log_dir = Path(log_dir) if log_dir is not None else Path("logs")
        if log_file is None:
            log_file = log_dir / DEFAULT_LOG_FILE
        elif not Path(log_file).is_absolute():
            log_file = log_dir / log_file
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        # stderr keeps stdout free for rendered reports
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.propagate = False

    logger.debug(f"Logging initialized (level={logging.getLevelName(level)})")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module.

    Args:
        name: Logger name (typically module name)

    Returns:
        Logger instance under the notification_billing namespace
    """
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
