"""Logging setup for the specker command line."""

import logging
import sys


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``specker`` logger with a stderr console handler.

    Args:
        verbose: Log DEBUG messages when set, otherwise WARNING and above.

    Returns:
        The configured package logger.
    """
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logger = logging.getLogger("specker")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Clear existing handlers so repeated CLI invocations don't stack them
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
