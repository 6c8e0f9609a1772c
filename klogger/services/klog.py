# SPDX-License-Identifier: Apache-2.0
"""Leveled logging front end bound to one LogConfig."""

import os
import sys
import traceback
import zlib
from types import FrameType
from typing import IO, Any, Callable, Optional, Union

from loguru import logger

from klogger.config import DEFAULT_EXIT_CODE
from klogger.exceptions import LogFileError
from klogger.services.log_config import LogConfig

UNKNOWN_CONTEXT = "unknown"
EXCEPTION_CAUGHT = "An exception was caught"


def _qualified_name(frame: FrameType) -> str:
    module = frame.f_globals.get("__name__", "")
    code = frame.f_code
    name = getattr(code, "co_qualname", code.co_name)
    return f"{module}.{name}" if module else name


def resolve_context(skip_module: str = __name__) -> str:
    """Return ``module.QualifiedName`` of the first frame outside ``skip_module``."""
    try:
        frame = sys._getframe(1)
    except ValueError:
        return UNKNOWN_CONTEXT

    while frame is not None and frame.f_globals.get("__name__") == skip_module:
        frame = frame.f_back

    if frame is None:
        return UNKNOWN_CONTEXT
    return _qualified_name(frame)


def exception_to_str(exc: BaseException) -> str:
    """Render an exception header and a tree of its traceback frames."""
    lines = [f"\n    --> {type(exc).__name__}: {exc}"]
    frames = traceback.extract_tb(exc.__traceback__)
    for index, frame in enumerate(frames, 1):
        branch = "└──" if index == len(frames) else "├──"
        lines.append(
            f"\n        {branch} {frame.name}({os.path.basename(frame.filename)}:{frame.lineno})"
        )
    return "".join(lines)


def critical_code(code: int) -> str:
    return f"\n    --> Critical error code: {code}"


def exit_code_for(exc: BaseException) -> int:
    """Derive a stable exit code in 1..255 from the exception class and message."""
    digest = zlib.crc32(f"{type(exc).__qualname__}: {exc}".encode("utf-8"))
    return digest % 255 + 1


class KLog:
    """Logger facade: builds a record per call and hands it to its LogConfig.

    Every logging method accepts ``context=`` to name the caller explicitly;
    without it the caller's ``module.QualifiedName`` is looked up on the stack.
    """

    def __init__(
        self,
        config: Optional[LogConfig] = None,
        exit_func: Callable[[int], Any] = sys.exit,
    ) -> None:
        self.config = config if config is not None else LogConfig()
        self._exit = exit_func

    # Configuration shortcuts

    def set_debug_mode(self, value: bool) -> None:
        self.config.set_debug_mode(value)

    def is_debug_mode(self) -> bool:
        return self.config.is_debug_mode()

    def set_append_mode(self, value: bool) -> None:
        self.config.set_append_mode(value)

    def is_append_mode(self) -> bool:
        return self.config.is_append_mode()

    def set_output(self, path: str) -> None:
        """Send file output to ``path``; failures are reported, not raised."""
        try:
            self.config.open_log_file(path)
        except LogFileError as exc:
            logger.error(str(exc))

    def set_config(self, source: Union[str, "os.PathLike[str]", IO[Any]]) -> None:
        """Load a configuration document from a file path or an open stream."""
        if isinstance(source, (str, os.PathLike)):
            with open(source, "rb") as stream:
                self.config.load_document(stream)
        else:
            self.config.load_document(source)

    # Logging

    def _write(self, level: str, message: str, context: Optional[str]) -> None:
        if context is None:
            context = resolve_context()
        self.config.emit(level, message, context)

    def log(self, message: str, *, context: Optional[str] = None) -> None:
        self._write("INFO", message, context)

    info = log

    def debug(self, message: str, *, context: Optional[str] = None) -> None:
        """Log at DEBUG; dropped unless debug mode is enabled."""
        if self.config.is_debug_mode():
            self._write("DEBUG", message, context)

    def warning(self, message: str, *, context: Optional[str] = None) -> None:
        self._write("WARNING", message, context)

    def error(
        self,
        message: Union[str, BaseException, None] = None,
        exc: Optional[BaseException] = None,
        *,
        context: Optional[str] = None,
    ) -> None:
        """Log at ERROR, with the traceback tree of ``exc`` when given.

        ``error(exc)`` is accepted as a shorthand for an exception without
        a message.
        """
        if isinstance(message, BaseException):
            message, exc = None, message
        if message is None:
            message = EXCEPTION_CAUGHT if exc is not None else ""
        if exc is not None:
            message += exception_to_str(exc)
        self._write("ERROR", message, context)

    def critical(
        self,
        message: Union[str, BaseException, None] = None,
        code_or_exc: Union[int, BaseException, None] = None,
        *,
        context: Optional[str] = None,
    ) -> None:
        """Log at CRITICAL, flush every sink, then exit the process.

        The exit code is 1 by default, ``code_or_exc`` when it is an int, or
        derived from the exception when one is given.
        """
        if isinstance(message, BaseException):
            message, code_or_exc = None, message

        exc = code_or_exc if isinstance(code_or_exc, BaseException) else None
        if exc is not None:
            code = exit_code_for(exc)
        elif code_or_exc is None:
            code = DEFAULT_EXIT_CODE
        else:
            code = int(code_or_exc)

        if message is None:
            message = EXCEPTION_CAUGHT if exc is not None else ""
        if exc is not None:
            message += exception_to_str(exc)

        self._write("CRITICAL", message + critical_code(code), context)
        self.config.flush()
        self._exit(code)
