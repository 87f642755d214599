"""Logging configuration and setup."""

import logging
import sys

from .config import LOG_LEVEL

# Configure root logger once
root_logger = logging.getLogger()

if not root_logger.handlers:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    root_logger.addHandler(console_handler)
    root_logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))


def setup_logger(name: str) -> logging.Logger:
    """Get logger for a module."""
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
