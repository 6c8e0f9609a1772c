# SPDX-License-Identifier: Apache-2.0
"""Typer CLI entrypoint for klogger."""

import signal
from importlib import metadata
from typing import Optional
from typing_extensions import Annotated

from loguru import logger
import typer

from klogger.config import LEVELS, settings, validate_settings
from klogger.exceptions import ConfigParseError
from klogger.logging_utils import init_logger
from klogger.render.color import NAMED_COLORS, RESET
from klogger.services.klog import KLog


def signal_handler_sigint(sig: int, frame: object) -> None:
    """Handle SIGINT signal gracefully."""
    print("SIGINT received. Exit.")
    raise typer.Exit()


def callback_version(value: bool) -> None:
    """Show version and exit if requested."""
    if value:
        print(f"Version {metadata.version('klogger')}")
        raise typer.Exit()


def build_klog(
    config: Optional[str] = None,
    file: Optional[str] = None,
    debug: bool = False,
    append: Optional[bool] = None,
) -> KLog:
    """Create a logger from settings, a config document, and explicit options."""
    init_logger(debug)
    validate_settings()

    klog = KLog()
    klog.config.set_debug_mode(settings.get("DEBUG", False))
    klog.config.set_append_mode(settings.get("APPEND", True) if append is None else append)

    config_path = config or settings.get("CONFIG")
    if config_path:
        try:
            klog.set_config(config_path)
        except (ConfigParseError, OSError) as exc:
            logger.error(f"Error loading configuration '{config_path}': {exc}")
            raise typer.Exit(1)

    if debug:
        klog.set_debug_mode(True)
    if append is not None and append != klog.is_append_mode():
        klog.set_append_mode(append)

    log_file = file or (None if klog.config.log_file_path else settings.get("FILE"))
    if log_file:
        klog.set_output(log_file)
    return klog


app = typer.Typer()


@app.command(name="emit", help="Log one message at the given level")
def emit_command(
    level: Annotated[str, typer.Argument(help=f"One of {', '.join(LEVELS)}")],
    message: Annotated[str, typer.Argument(help="Message to log")],
    config: Annotated[
        Optional[str], typer.Option("--config", "-c", help="Configuration document")
    ] = None,
    file: Annotated[Optional[str], typer.Option("--file", "-f", help="Log file")] = None,
    debug: Annotated[bool, typer.Option(help="Debug")] = False,
    append: Annotated[
        Optional[bool], typer.Option("--append/--no-append", help="Append to the log file")
    ] = None,
    code: Annotated[
        int, typer.Option(help="Exit code used for CRITICAL messages")
    ] = 1,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=callback_version,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Log one message at the given level."""
    level = level.upper()
    if level not in LEVELS:
        logger.error(f"Unknown level '{level}', expected one of {', '.join(LEVELS)}")
        raise typer.Exit(2)

    klog = build_klog(config=config, file=file, debug=debug, append=append)
    context = "klogger.cli"
    if level == "CRITICAL":
        klog.critical(message, code, context=context)
    elif level == "ERROR":
        klog.error(message, context=context)
    elif level == "WARNING":
        klog.warning(message, context=context)
    elif level == "DEBUG":
        klog.debug(message, context=context)
    else:
        klog.log(message, context=context)


@app.command(name="demo", help="Print one sample line per level")
def demo_command(
    config: Annotated[
        Optional[str], typer.Option("--config", "-c", help="Configuration document")
    ] = None,
    file: Annotated[Optional[str], typer.Option("--file", "-f", help="Log file")] = None,
) -> None:
    """Write the sample messages, without the terminating CRITICAL one."""
    klog = build_klog(config=config, file=file, debug=True)

    klog.log("Hello, World!")
    klog.debug("This is a debug message.")
    klog.warning("This is a warning message.")
    klog.error("This is an error message.")
    try:
        raise RuntimeError("Test exception")
    except RuntimeError as exc:
        klog.error("This is an exception message.", exc)
        klog.error(exc)


@app.command(name="colors", help="Show the effective color table")
def colors_command(
    config: Annotated[
        Optional[str], typer.Option("--config", "-c", help="Configuration document")
    ] = None,
    palette: Annotated[
        bool, typer.Option(help="Also show the predefined colors and styles")
    ] = False,
) -> None:
    klog = build_klog(config=config)
    for name, color in klog.config.colors.items():
        print(f"{color}{name: <10}{RESET} {color.hex()}")
    if palette:
        for name, color in NAMED_COLORS.items():
            print(f"{color}{name: <14}{RESET} {color.hex()}")


@app.command(name="version", help="Show version information")
def version_command() -> None:
    """Display version information for klogger."""
    print(f"klogger {metadata.version('klogger')}")


def main() -> None:
    signal.signal(signal.SIGINT, signal_handler_sigint)
    app()
