"""
Logging setup module.
All layout engine output goes through the standard logging tree.
"""
import logging
import sys


def setup_logger(level=logging.INFO):
    """Configure the root logger."""
    root_logger = logging.getLogger()

    # avoid adding a second handler on re-import
    if root_logger.handlers:
        return root_logger

    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '[%(levelname)s] %(name)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)

    return root_logger


def get_logger(name):
    """Return the logger for a module."""
    return logging.getLogger(name)
