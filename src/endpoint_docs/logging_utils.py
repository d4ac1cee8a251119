"""Logging helpers shared by the CLI and the HTTP surface."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_level: str = "WARNING") -> None:
    """Configure the ``endpoint_docs`` logger hierarchy.

    Log output goes to stderr so rendered documentation on stdout stays clean.
    """
    level = getattr(logging, log_level.upper())
    logger = logging.getLogger("endpoint_docs")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module (typically ``__name__``)."""
    return logging.getLogger(name)
