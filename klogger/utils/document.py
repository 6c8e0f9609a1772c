# SPDX-License-Identifier: Apache-2.0
"""Decoding and validation of logger configuration documents."""

from dataclasses import dataclass, field
import json
import os
from typing import Any, Dict, Mapping, Optional

import yaml

from klogger.exceptions import ConfigParseError, InvalidFormatError
from klogger.render.color import LogColor

KNOWN_KEYS = ("formats", "colors", "debug", "append", "file")
FORMAT_KEYS = ("date", "console", "file")


@dataclass
class ConfigDocument:
    """Overrides read from a document; ``None`` means the key was absent."""

    formats: Dict[str, str] = field(default_factory=dict)
    colors: Dict[str, LogColor] = field(default_factory=dict)
    debug: Optional[bool] = None
    append: Optional[bool] = None
    file: Optional[str] = None


def _read_text(source: Any) -> str:
    """Read bytes, text, a stream or a path into a string."""
    if isinstance(source, os.PathLike):
        with open(source, "rb") as stream:
            source = stream.read()
    elif hasattr(source, "read"):
        source = source.read()
    if isinstance(source, (bytes, bytearray)):
        source = bytes(source).decode("utf-8-sig")
    if not isinstance(source, str):
        raise ConfigParseError(
            f"Unsupported configuration source: {type(source).__name__}"
        )
    return source


def _decode(source: Any) -> Any:
    """Decode a document as JSON, falling back to YAML for non-JSON text."""
    if isinstance(source, Mapping):
        return source

    try:
        text = _read_text(source)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigParseError(f"Cannot read configuration document: {exc}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        error_msg = "Invalid configuration document"
        if hasattr(exc, "problem_mark"):
            mark = exc.problem_mark
            error_msg += f" at line {mark.line + 1}, column {mark.column + 1}"
        if hasattr(exc, "problem"):
            error_msg += f": {exc.problem}"
        raise ConfigParseError(error_msg) from exc


def _expect_bool(data: Mapping[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ConfigParseError(f"'{key}' must be a boolean, got {type(value).__name__}")
    return value


def _expect_str_mapping(data: Mapping[str, Any], key: str) -> Dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigParseError(f"'{key}' must be a mapping, got {type(value).__name__}")
    for name, item in value.items():
        if not isinstance(name, str) or not isinstance(item, str):
            raise ConfigParseError(f"'{key}' entries must map strings to strings")
    return dict(value)


def parse_document(source: Any) -> ConfigDocument:
    """Decode ``source`` and check it has the expected shape.

    ``source`` may be bytes or text holding JSON or YAML, a readable stream,
    a path-like object, or an already decoded mapping.
    """
    data = _decode(source)
    if not isinstance(data, Mapping):
        raise ConfigParseError(
            f"Configuration document must be a mapping, got {type(data).__name__}"
        )

    unknown = sorted(str(key) for key in data if key not in KNOWN_KEYS)
    if unknown:
        raise ConfigParseError(f"Unknown configuration keys: {', '.join(unknown)}")

    formats = {
        key: value
        for key, value in _expect_str_mapping(data, "formats").items()
        if key in FORMAT_KEYS
    }

    colors: Dict[str, LogColor] = {}
    for name, value in _expect_str_mapping(data, "colors").items():
        try:
            colors[name] = LogColor.from_hex(value)
        except InvalidFormatError as exc:
            raise ConfigParseError(f"Invalid color for '{name}': {exc}") from exc

    file = data.get("file")
    if file is not None and not isinstance(file, str):
        raise ConfigParseError(f"'file' must be a string, got {type(file).__name__}")

    return ConfigDocument(
        formats=formats,
        colors=colors,
        debug=_expect_bool(data, "debug"),
        append=_expect_bool(data, "append"),
        file=file,
    )
