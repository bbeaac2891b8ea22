"""
ascim
=====
Convert images to colored, edge-aware ASCII art sized for a terminal.

Features:
- Brightness ramp glyphs from the squared HSV value
- Sobel edge detection drawn with directional strokes
- True-color or basic 8-color ANSI output

For debug logging, enable with:

    import logging
    logging.basicConfig(level=logging.DEBUG)
"""

import logging

from ascim.color_space import Hsv, color_code, perceived_luminance, rgb_to_hsv
from ascim.config import AscimConfig
from ascim.constants import ColorCategory, RenderMode, VALUE_CHARS
from ascim.edge_detection import EdgeProcessor
from ascim.exceptions import AscimError, DecodeFailure, InvalidDimensions
from ascim.formatter import AnsiColorFormatter
from ascim.frame import Cell, Frame, RGBColor, build_frame, render_image
from ascim.glyphs import get_ascii_char, get_stroke_char, select_glyph
from ascim.image_loader import ImageData, compute_target_size, load_and_resize_image, make_grayscale

__version__ = "0.1.0"

logging.getLogger("ascim").addHandler(logging.NullHandler())

__all__ = [
    "AnsiColorFormatter",
    "AscimConfig",
    "AscimError",
    "Cell",
    "ColorCategory",
    "DecodeFailure",
    "EdgeProcessor",
    "Frame",
    "Hsv",
    "ImageData",
    "InvalidDimensions",
    "RGBColor",
    "RenderMode",
    "VALUE_CHARS",
    "build_frame",
    "color_code",
    "compute_target_size",
    "get_ascii_char",
    "get_stroke_char",
    "load_and_resize_image",
    "make_grayscale",
    "perceived_luminance",
    "render_image",
    "rgb_to_hsv",
    "select_glyph",
]
