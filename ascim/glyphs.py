"""
ascim - Glyph Selection
=======================
Maps luminance to the brightness ramp and gradient angles to stroke glyphs.
"""

import math

from ascim.constants import STROKE_BANDS, STROKE_PIPE, VALUE_CHARS


def get_ascii_char(luminance: float) -> str:
    """Ramp glyph for a luminance in [0, 1]; out-of-range values are clamped."""
    last = len(VALUE_CHARS) - 1
    index = math.floor(luminance * last)
    index = max(0, min(last, index))
    return VALUE_CHARS[index]


def gradient_angle(sx: float, sy: float) -> float:
    """Gradient direction in degrees, within [-180, 180]."""
    return math.degrees(math.atan2(sy, sx))


def get_stroke_char(angle: float) -> str:
    """
    Directional stroke for a gradient angle.

    Bands are inclusive at both ends; the first matching band wins, so
    an exact boundary such as 67.5 resolves to the earlier stroke.

    Args:
        angle: Gradient angle in degrees

    Returns:
        One of '\\', '_', '/' or '|' (near 0 and near 180 degrees)
    """
    for char, bands in STROKE_BANDS:
        for low, high in bands:
            if low <= angle <= high:
                return char
    return STROKE_PIPE


def is_edge(sx: float, sy: float, threshold: float) -> bool:
    """Whether the squared gradient magnitude reaches the squared threshold."""
    return sx * sx + sy * sy >= threshold * threshold


def select_glyph(luminance: float, sx: float, sy: float, threshold: float) -> str:
    """
    Glyph for one cell: a stroke for edge cells, a ramp glyph otherwise.

    Args:
        luminance: Perceived luminance of the cell (0-1)
        sx: Horizontal gradient component
        sy: Vertical gradient component
        threshold: Edge threshold

    Returns:
        Single character
    """
    if is_edge(sx, sy, threshold):
        return get_stroke_char(gradient_angle(sx, sy))
    return get_ascii_char(luminance)
