"""
ascim - Color Space
===================
RGB to HSV conversion and the derived luminance and color category used to
pick glyphs and terminal colors.
"""

import math
from typing import NamedTuple

from ascim.constants import (
    CHANNEL_TIE_EPSILON,
    CHROMA_EPSILON,
    HUE_SECTORS,
    NEUTRAL_SATURATION,
    SATURATION_EPSILON,
    ColorCategory,
)


class Hsv(NamedTuple):
    """Hue in degrees [0, 360), saturation and value in [0, 1]."""
    hue: float
    saturation: float
    value: float


def rgb_to_hsv(red: float, green: float, blue: float) -> Hsv:
    """
    Convert normalized RGB to HSV.

    Args:
        red: Red channel (0-1)
        green: Green channel (0-1)
        blue: Blue channel (0-1)

    Returns:
        Hsv tuple. Achromatic input yields hue 0, black yields saturation 0.
    """
    max_c = max(red, green, blue)
    min_c = min(red, green, blue)

    value = max_c
    chroma = max_c - min_c

    if abs(value) < SATURATION_EPSILON:
        saturation = 0.0
    else:
        saturation = chroma / value

    # Red, then green, then blue wins a tie for the maximum
    if chroma < CHROMA_EPSILON:
        hue = 0.0
    elif abs(max_c - red) < CHANNEL_TIE_EPSILON:
        hue = 60.0 * math.fmod((green - blue) / chroma, 6.0)
        if hue < 0.0:
            hue += 360.0
        # A tiny negative hue folds to exactly 360
        if hue >= 360.0:
            hue -= 360.0
    elif abs(max_c - green) < CHANNEL_TIE_EPSILON:
        hue = 60.0 * (2.0 + (blue - red) / chroma)
    else:
        hue = 60.0 * (4.0 + (red - green) / chroma)

    return Hsv(hue, saturation, value)


def perceived_luminance(hsv: Hsv) -> float:
    """Squared HSV value; darkens mid-tones before ramp lookup."""
    return hsv.value * hsv.value


def color_code(hsv: Hsv) -> ColorCategory:
    """
    Bucket a color into one of the basic terminal colors.

    Args:
        hsv: Color to classify

    Returns:
        NEUTRAL for weakly saturated colors, otherwise the 60 degree hue
        sector starting at 30 degrees (330-30 wraps to RED).
    """
    if hsv.saturation < NEUTRAL_SATURATION:
        return ColorCategory.NEUTRAL

    for (lower, category), (upper, _) in zip(HUE_SECTORS, HUE_SECTORS[1:]):
        if lower <= hsv.hue < upper:
            return category

    return ColorCategory.RED
