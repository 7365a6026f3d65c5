"""Logging configuration."""

import sys

from loguru import logger


def setup_logging(debug: bool = False) -> None:
    """Send loguru output to stderr at INFO, or DEBUG when debugging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "INFO",
        format=(
            "<dim>{time:HH:mm:ss}</dim> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )
