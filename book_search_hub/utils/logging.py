"""Logging configuration."""

import logging
import sys
from typing import Any

ROOT_LOGGER_NAME = "book_search_hub"


def configure_logging(log_level: str = "INFO") -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    # Convert string log level to logging constant
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Repeated calls only adjust the level
    if logger.handlers:
        for existing in logger.handlers:
            existing.setLevel(numeric_level)
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger nested under the application logger."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_query(logger: logging.Logger, query: dict[str, Any]):
    """
    Log query information.

    Args:
        logger: Logger instance
        query: Effective query parameters
    """
    logger.info(f"Query: {query}")


def log_results(logger: logging.Logger, results: dict[str, Any]):
    """
    Log result information.

    Args:
        logger: Logger instance
        results: Result summary
    """
    logger.info(
        f"Book search completed: {results.get('result_count', 0)} results "
        f"(google={results.get('google_count', 0)}, "
        f"openlib={results.get('openlib_count', 0)})"
    )
    logger.debug(f"Results: {results}")
