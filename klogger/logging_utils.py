# SPDX-License-Identifier: Apache-2.0
"""Loguru setup for klogger's own diagnostics (file and settings failures)."""

from loguru import logger
import sys


def init_logger(debug: bool = False) -> None:
    """Send klogger diagnostics to stderr, including DEBUG ones when ``debug`` is set."""
    log_fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
        "klogger | <cyan>{module}.{function}:{line}</cyan> | <level>{message}</level>"
    )

    log_level = "DEBUG" if debug else "INFO"

    logger.remove()
    logger.add(sys.stderr, format=log_fmt, level=log_level, colorize=True)
