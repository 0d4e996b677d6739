"""Logging setup for the issue browser."""

import logging
import sys

# HTTP client internals that log every connection and retry at DEBUG
QUIET_LOGGERS = ("urllib3",)


def setup_logger(log_level: str = "INFO", name: str = "issue_browser") -> logging.Logger:
    """
    Set up and configure application logger.

    Creates a logger with a simple, readable format suitable for CLI output.
    ``LOG_LEVEL=DEBUG`` shows the browser's own request and pagination
    details; connection pool chatter from ``urllib3`` stays at INFO.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        name: Logger name (default: issue_browser)

    Returns:
        logging.Logger: Configured logger instance
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    for quiet_name in QUIET_LOGGERS:
        logging.getLogger(quiet_name).setLevel(max(numeric_level, logging.INFO))

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    return logger
