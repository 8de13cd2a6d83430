"""
Logging for the storefront package.

All modules log under the ``storefront`` namespace; the level comes from the
``LOG_LEVEL`` environment variable (default: INFO).
"""
import logging
import os
import sys

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logger = logging.getLogger("storefront")
logger.setLevel(LOG_LEVEL)

if not logger.handlers:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(LOG_LEVEL)
    console_handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(console_handler)

logger.propagate = False


def set_level(level: str) -> None:
    logger.setLevel(level.upper())
    for handler in logger.handlers:
        handler.setLevel(level.upper())


def get_logger(name: str = None) -> logging.Logger:
    """Return ``storefront.<name>``, or the package logger when no name is given."""
    if name:
        return logging.getLogger(f"storefront.{name}")
    return logger
