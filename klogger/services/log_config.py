# SPDX-License-Identifier: Apache-2.0
"""Mutable logging state and the console/file write path."""

import os
import sys
import threading
from typing import IO, Any, Dict, Mapping, Optional

from loguru import logger

from klogger.config import (
    DEFAULT_CONSOLE_FORMAT,
    DEFAULT_DATE_FORMAT,
    DEFAULT_FILE_FORMAT,
    default_colors,
)
from klogger.exceptions import LogFileError
from klogger.render.color import RESET, LogColor
from klogger.render.template import format_template
from klogger.services.record import LogRecord, build_record
from klogger.utils.document import ConfigDocument, parse_document


class LogConfig:
    """Formats, colors, flags and the open log file of one logger.

    Write operations never raise: I/O errors are reported through the
    diagnostic logger and the remaining sinks still receive the line.
    Writes and file (re)opening are serialized by one lock; the order of
    lines coming from different threads is not guaranteed.
    """

    def __init__(self) -> None:
        self._debug_mode = False
        self._append_mode = True
        self._log_file_path: Optional[str] = None
        self._log_file: Optional[IO[str]] = None
        self._colors: Dict[str, LogColor] = default_colors()
        self.console_format = DEFAULT_CONSOLE_FORMAT
        self.file_format = DEFAULT_FILE_FORMAT
        self.date_format = DEFAULT_DATE_FORMAT
        self._lock = threading.RLock()

    # Flags

    @property
    def debug_mode(self) -> bool:
        return self._debug_mode

    @debug_mode.setter
    def debug_mode(self, value: bool) -> None:
        self._debug_mode = bool(value)

    def set_debug_mode(self, value: bool) -> None:
        self.debug_mode = value

    def is_debug_mode(self) -> bool:
        return self._debug_mode

    @property
    def append_mode(self) -> bool:
        return self._append_mode

    @append_mode.setter
    def append_mode(self, value: bool) -> None:
        self.set_append_mode(value)

    def set_append_mode(self, value: bool) -> None:
        """Change append mode and reopen the current log file under it."""
        self._append_mode = bool(value)
        self.close_log_file()
        if self._log_file_path is None:
            return
        try:
            self.open_log_file(self._log_file_path)
        except LogFileError as exc:
            logger.error(f"Failed to reopen log file: {exc}")

    def is_append_mode(self) -> bool:
        return self._append_mode

    # Colors

    @property
    def colors(self) -> Dict[str, LogColor]:
        """Return a copy of the color table."""
        return dict(self._colors)

    def get_color(self, name: str) -> Optional[LogColor]:
        return self._colors.get(name)

    def set_color(self, name: str, color: Any) -> None:
        """Add or replace one color table entry; accepts anything LogColor.parse does."""
        self._colors[name] = LogColor.parse(color)

    # Log file

    @property
    def log_file_path(self) -> Optional[str]:
        return self._log_file_path

    @property
    def is_file_open(self) -> bool:
        return self._log_file is not None

    def open_log_file(self, path: str) -> None:
        """Open ``path`` for logging, replacing any file opened before."""
        with self._lock:
            self.close_log_file()
            self._log_file_path = path
            mode = "a" if self._append_mode else "w"
            try:
                parent = os.path.dirname(os.path.abspath(path))
                if parent and not os.path.exists(parent):
                    os.makedirs(parent, exist_ok=True)
                self._log_file = open(path, mode, encoding="utf-8")
            except (OSError, TypeError, ValueError) as exc:
                raise LogFileError(str(path), str(exc)) from exc
            logger.debug(f"Opened log file {path} (mode: {mode})")

    def close_log_file(self) -> None:
        """Flush and close the log file; does nothing when none is open."""
        with self._lock:
            if self._log_file is None:
                return
            log_file, self._log_file = self._log_file, None
            try:
                log_file.flush()
                log_file.close()
            except OSError as exc:
                logger.error(f"Failed to close log file {self._log_file_path}: {exc}")

    # Write path

    def write_to_console(self, fields: Mapping[str, str]) -> None:
        """Print the colorized console line followed by a reset."""
        text = format_template(self.console_format, fields, True, self._colors)
        with self._lock:
            try:
                print(f"{text}{RESET}", file=sys.stdout)
            except (OSError, ValueError) as exc:
                logger.error(f"Failed to write to console: {exc}")

    def write_to_file(self, fields: Mapping[str, str]) -> None:
        """Append the plain line to the log file and flush it right away."""
        with self._lock:
            if self._log_file is None:
                return
            text = format_template(self.file_format, fields, False)
            try:
                self._log_file.write(text + "\n")
                self._log_file.flush()
            except (OSError, ValueError) as exc:
                logger.error(f"Failed to write to log file {self._log_file_path}: {exc}")

    def write(self, record: LogRecord) -> None:
        fields = record.fields()
        self.write_to_console(fields)
        self.write_to_file(fields)

    def flush(self) -> None:
        """Flush standard output and the log file."""
        with self._lock:
            try:
                sys.stdout.flush()
                if self._log_file is not None:
                    self._log_file.flush()
            except (OSError, ValueError) as exc:
                logger.error(f"Failed to flush log output: {exc}")

    def emit(self, level: str, message: str, context: str) -> None:
        """Build a record for ``message`` and write it to every sink."""
        if level == "DEBUG" and not self._debug_mode:
            return
        self.write(build_record(level, message, context, self.date_format))

    # Documents

    def load_document(self, source: Any) -> None:
        """Apply the overrides found in a configuration document.

        Raises ConfigParseError when the document is malformed; nothing is
        changed in that case. A ``file`` entry that cannot be opened raises
        LogFileError after the other settings were applied.
        """
        document = parse_document(source)
        self.apply(document)

        context = f"{type(self).__name__}.load_document"
        self.emit("INFO", f"Logger configuration loaded, log file: {self._log_file_path}", context)
        if self._debug_mode:
            for line in self.describe():
                self.emit("DEBUG", line, context)

    def apply(self, document: ConfigDocument) -> None:
        self.date_format = document.formats.get("date", self.date_format)
        self.console_format = document.formats.get("console", self.console_format)
        self.file_format = document.formats.get("file", self.file_format)

        if document.debug is not None:
            self._debug_mode = document.debug
        if document.append is not None:
            if document.file is None and self._log_file is not None:
                self.set_append_mode(document.append)
            else:
                self._append_mode = document.append
        self._colors.update(document.colors)

        if document.file is not None:
            self.open_log_file(document.file)

    def describe(self):
        """Return one human readable line per setting."""
        colors = ", ".join(f"{name}='{color.hex()}'" for name, color in self._colors.items())
        return [
            f"Debug mode: {self._debug_mode}",
            f"Append mode: {self._append_mode}",
            f'Console format: "{self.console_format}"',
            f'File format: "{self.file_format}"',
            f'Date format: "{self.date_format}"',
            f'Log file path: "{self._log_file_path}"',
            f"Colors: {{{colors}}}",
        ]
