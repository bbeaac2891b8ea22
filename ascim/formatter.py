"""
ascim - ANSI Output
===================
Serializes a grid of (color, glyph) cells to terminal escape sequences.
"""

import re
from typing import Iterable, Sequence, Tuple

from ascim.color_space import color_code, rgb_to_hsv
from ascim.constants import ANSI_RESET, ColorCategory, RenderMode

# SGR sequences only; the formatter emits nothing else
_SGR_PATTERN = re.compile(r'\x1b\[[0-9;]*m')


class AnsiColorFormatter:
    """Format frames with ANSI color codes for terminal output."""

    RESET = ANSI_RESET

    @staticmethod
    def to_byte(channel: float) -> int:
        """Scale a normalized channel to 0-255."""
        return max(0, min(255, int(round(channel * 255.0))))

    @classmethod
    def rgb_to_ansi_24bit(cls, r: float, g: float, b: float) -> str:
        """24-bit foreground escape for a normalized RGB color."""
        return f"\033[38;2;{cls.to_byte(r)};{cls.to_byte(g)};{cls.to_byte(b)}m"

    @staticmethod
    def category_to_ansi(category: ColorCategory) -> str:
        """Basic foreground escape for a color category."""
        return f"\033[{category.value}m"

    @classmethod
    def rgb_to_ansi_category(cls, r: float, g: float, b: float) -> str:
        return cls.category_to_ansi(color_code(rgb_to_hsv(r, g, b)))

    @classmethod
    def format_cell(cls, color: Tuple[float, float, float], glyph: str,
                    mode: RenderMode = RenderMode.TRUE_COLOR) -> str:
        """
        Escape sequence and glyph for one cell.

        Args:
            color: Normalized (r, g, b)
            glyph: Character to print
            mode: TRUE_COLOR resets after every cell, CATEGORICAL does not

        Returns:
            Formatted cell
        """
        r, g, b = color
        if mode == RenderMode.CATEGORICAL:
            return cls.rgb_to_ansi_category(r, g, b) + glyph
        return cls.rgb_to_ansi_24bit(r, g, b) + glyph + cls.RESET

    @classmethod
    def format_cells(cls, rows: Iterable[Sequence[Tuple[Tuple[float, float, float], str]]],
                     mode: RenderMode = RenderMode.TRUE_COLOR) -> str:
        """
        Format a row-major grid of (color, glyph) cells.

        Args:
            rows: Rows of (color, glyph) pairs
            mode: Render mode

        Returns:
            Text with a newline after every row and a final reset
        """
        output = []

        for row in rows:
            output.extend(cls.format_cell(color, glyph, mode) for color, glyph in row)
            output.append('\n')

        output.append(cls.RESET)
        return ''.join(output)

    @staticmethod
    def strip_ansi(text: str) -> str:
        """Remove color escapes, leaving glyphs and newlines."""
        return _SGR_PATTERN.sub('', text)
