# SPDX-License-Identifier: Apache-2.0
"""Terminal colors and text styles as ANSI escape sequences."""

from dataclasses import dataclass
import re
from typing import Any, Optional, Tuple

from klogger.exceptions import InvalidFormatError

RESET_SEQUENCE = "\u001b[0m"

_HEX_PATTERN = re.compile(r"#[0-9A-Fa-f]{6}")


@dataclass(frozen=True)
class LogColor:
    """A 24-bit foreground color, or a raw style escape with no RGB value.

    Build instances with ``from_rgb``, ``from_hex``, ``from_int`` or
    ``from_ansi``; exactly one of ``rgb`` and ``ansi`` is set on them.
    """

    rgb: Optional[Tuple[int, int, int]] = None
    ansi: str = ""

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "LogColor":
        """Create a color from red, green and blue components (not clamped)."""
        return cls(rgb=(r, g, b))

    @classmethod
    def from_hex(cls, value: str) -> "LogColor":
        """Create a color from a ``#RRGGBB`` string."""
        if not isinstance(value, str) or not _HEX_PATTERN.fullmatch(value):
            raise InvalidFormatError(value)
        return cls(rgb=(int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16)))

    @classmethod
    def from_int(cls, value: int) -> "LogColor":
        """Create a color from a packed 0xRRGGBB integer."""
        return cls(rgb=((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF))

    @classmethod
    def from_ansi(cls, sequence: str) -> "LogColor":
        """Create a style-only color from a raw escape sequence."""
        return cls(ansi=sequence)

    @classmethod
    def parse(cls, value: Any) -> "LogColor":
        """Coerce a LogColor, hex string, packed int or RGB tuple into a LogColor."""
        if isinstance(value, LogColor):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, bool):
            raise InvalidFormatError(repr(value), "Unsupported color value.")
        if isinstance(value, int):
            return cls.from_int(value)
        if isinstance(value, (tuple, list)) and len(value) == 3:
            r, g, b = value
            return cls.from_rgb(int(r), int(g), int(b))
        raise InvalidFormatError(repr(value), "Unsupported color value.")

    def escape(self) -> str:
        """Return the escape sequence that switches the terminal to this color."""
        if self.rgb is not None:
            r, g, b = self.rgb
            return f"\u001b[38;2;{r};{g};{b}m"
        return self.ansi or RESET_SEQUENCE

    def hex(self) -> str:
        """Return ``#RRGGBB`` for RGB colors, an empty string for style-only ones."""
        if self.rgb is None:
            return ""
        r, g, b = self.rgb
        return f"#{r:02X}{g:02X}{b:02X}"

    def __str__(self) -> str:
        return self.escape()


RESET = LogColor.from_ansi(RESET_SEQUENCE)
BLACK = LogColor.from_rgb(0, 0, 0)
RED = LogColor.from_rgb(255, 0, 0)
GREEN = LogColor.from_rgb(0, 255, 0)
BLUE = LogColor.from_rgb(0, 0, 255)
YELLOW = LogColor.from_rgb(255, 255, 0)
MAGENTA = LogColor.from_rgb(255, 0, 255)
CYAN = LogColor.from_rgb(0, 255, 255)
WHITE = LogColor.from_rgb(255, 255, 255)
GRAY = LogColor.from_rgb(128, 128, 128)

# Text styles, no RGB value
BOLD = LogColor.from_ansi("\u001b[1m")
ITALIC = LogColor.from_ansi("\u001b[3m")
UNDERLINE = LogColor.from_ansi("\u001b[4m")
STRIKETHROUGH = LogColor.from_ansi("\u001b[9m")

NAMED_COLORS = {
    "RESET": RESET,
    "BLACK": BLACK,
    "RED": RED,
    "GREEN": GREEN,
    "BLUE": BLUE,
    "YELLOW": YELLOW,
    "MAGENTA": MAGENTA,
    "CYAN": CYAN,
    "WHITE": WHITE,
    "GRAY": GRAY,
    "BOLD": BOLD,
    "ITALIC": ITALIC,
    "UNDERLINE": UNDERLINE,
    "STRIKETHROUGH": STRIKETHROUGH,
}
