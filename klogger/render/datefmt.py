# SPDX-License-Identifier: Apache-2.0
"""Render timestamps from Java-style date patterns such as ``yyyy-MM-dd HH:mm:ss``."""

from datetime import datetime
import re
from typing import Callable, Dict, List, Optional

# Quoted literals first, then runs of one pattern letter
_TOKEN_PATTERN = re.compile(r"'(?:[^']|'')*'|([A-Za-z])\1*")


def _year(when: datetime, width: int) -> str:
    if width == 2:
        return f"{when.year % 100:02d}"
    return str(when.year).zfill(width)


def _month(when: datetime, width: int) -> str:
    if width >= 4:
        return when.strftime("%B")
    if width == 3:
        return when.strftime("%b")
    return str(when.month).zfill(width)


def _weekday(when: datetime, width: int) -> str:
    return when.strftime("%A" if width >= 4 else "%a")


def _hour12(when: datetime, width: int) -> str:
    return str(when.hour % 12 or 12).zfill(width)


def _fraction(when: datetime, width: int) -> str:
    digits = f"{when.microsecond:06d}"
    return digits[:width] if width <= 6 else digits.ljust(width, "0")


def _offset(when: datetime, width: int) -> str:
    return when.strftime("%z")


def _number(attr: str) -> Callable[[datetime, int], str]:
    def render(when: datetime, width: int) -> str:
        return str(getattr(when, attr)).zfill(width)

    return render


_FIELDS: Dict[str, Callable[[datetime, int], str]] = {
    "y": _year,
    "u": _year,
    "M": _month,
    "L": _month,
    "d": _number("day"),
    "H": _number("hour"),
    "h": _hour12,
    "m": _number("minute"),
    "s": _number("second"),
    "S": _fraction,
    "E": _weekday,
    "a": lambda when, width: when.strftime("%p"),
    "Z": _offset,
    "X": _offset,
}


def format_date(pattern: str, when: Optional[datetime] = None) -> str:
    """Format ``when`` (default: now) with a Java-style date pattern.

    Letters without a known meaning and any non-letter characters are copied
    verbatim; text between single quotes is literal and ``''`` is a quote.
    """
    when = when or datetime.now()
    parts: List[str] = []
    position = 0

    for match in _TOKEN_PATTERN.finditer(pattern):
        parts.append(pattern[position:match.start()])
        token = match.group(0)
        if token.startswith("'"):
            parts.append("'" if token == "''" else token[1:-1].replace("''", "'"))
        else:
            render = _FIELDS.get(token[0])
            parts.append(render(when, len(token)) if render else token)
        position = match.end()

    parts.append(pattern[position:])
    return "".join(parts)
