# SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by klogger."""


class KLoggerError(Exception):
    """Base class for klogger errors."""


class InvalidFormatError(KLoggerError, ValueError):
    """Raised for a color string that is not in #RRGGBB form."""

    def __init__(self, value: str, message: str = "Invalid color format. Expected #RRGGBB."):
        self.value = value
        super().__init__(f"{message} Got {value!r}")


class LogFileError(KLoggerError, OSError):
    """Raised when the log file cannot be opened."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot open log file '{path}': {reason}")


class ConfigParseError(KLoggerError, ValueError):
    """Raised when a configuration document cannot be decoded."""
