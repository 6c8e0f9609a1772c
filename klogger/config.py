# SPDX-License-Identifier: Apache-2.0
"""Configuration defaults and application-wide settings."""

from typing import Dict

from dynaconf import Dynaconf, ValidationError, Validator
from loguru import logger
import typer

from klogger.render.color import MAGENTA, RESET, YELLOW, LogColor

# Shared settings for the command line, loaded from files or environment
settings = Dynaconf(
    envvar_prefix="KLOGGER",
    settings_files=["settings.toml", ".secrets.toml"],
    load_dotenv=True,
)

settings.validators.register(
    Validator("CONFIG", is_type_of=str)
    | Validator("CONFIG", is_type_of=None, default=None),
    Validator("FILE", is_type_of=str)
    | Validator("FILE", is_type_of=None, default=None),
    Validator("DEBUG", is_type_of=bool)
    | Validator(
        "DEBUG",
        is_type_of=str,
        cast=lambda v: v.lower() in ["true", "yes"],
        default=False,
    ),
    Validator("APPEND", is_type_of=bool)
    | Validator(
        "APPEND",
        is_type_of=str,
        cast=lambda v: v.lower() in ["true", "yes"],
        default=True,
    ),
)

# Levels in ascending severity
LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_DATE_FORMAT = "yyyy-MM-dd HH:mm:ss"
DEFAULT_CONSOLE_FORMAT = "[{type}][{context}]: {message}"
DEFAULT_FILE_FORMAT = "{date} [{type}][{context}]: {message}"

DEFAULT_EXIT_CODE = 1


def default_colors() -> Dict[str, LogColor]:
    """Return a fresh copy of the built-in color table."""
    return {
        "INFO": LogColor.from_rgb(0, 170, 255),
        "DEBUG": LogColor.from_rgb(170, 170, 170),
        "WARNING": YELLOW,
        "ERROR": LogColor.from_rgb(255, 34, 34),
        "CRITICAL": MAGENTA,
        "context": LogColor.from_rgb(170, 170, 170),
        "date": LogColor.from_rgb(0, 170, 0),
        "message": RESET,
    }


def validate_settings() -> None:
    """Validate settings and fill in defaults."""
    try:
        settings.validators.validate_all()
    except ValidationError as exc:
        logger.error(f"Error validating klogger settings: {exc.details}")
        raise typer.Exit(1)
