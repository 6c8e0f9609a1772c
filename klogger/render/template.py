# SPDX-License-Identifier: Apache-2.0
"""Placeholder substitution for console and file templates."""

import re
from typing import Mapping, Optional

from klogger.render.color import RESET, LogColor

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def resolve_color(name: str, value: str, colors: Mapping[str, LogColor]) -> LogColor:
    """Pick the color for a field: by name, then by level for ``type``, else reset."""
    if name in colors:
        return colors[name]
    if name == "type":
        return colors.get(value, RESET)
    return RESET


def format_template(
    template: str,
    fields: Mapping[str, str],
    colorize: bool = False,
    colors: Optional[Mapping[str, LogColor]] = None,
) -> str:
    """Replace ``{name}`` placeholders in ``template`` with values from ``fields``.

    Each value is wrapped in its color and a reset when ``colorize`` is set.
    Placeholders without a matching field are left untouched.
    """
    values = {}
    for name, value in fields.items():
        text = str(value)
        if colorize:
            color = resolve_color(name, text, colors or {})
            text = f"{color}{text}{RESET}"
        values[name] = text

    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)
