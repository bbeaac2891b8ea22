"""
ascim - Constants
=================
Glyph ramps, ANSI escape codes, enums and default settings shared by the
conversion pipeline.
"""

from enum import Enum, auto


# =============================================================================
# ENUMS
# =============================================================================

class RenderMode(Enum):
    """How a frame is colored when written to a terminal."""
    TRUE_COLOR = auto()      # 24-bit escape per cell from the source RGB
    CATEGORICAL = auto()     # One of eight basic ANSI colors per cell


class ColorCategory(Enum):
    """Discrete hue buckets, valued by their ANSI foreground code."""
    NEUTRAL = 37
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36


# =============================================================================
# CHARACTER SETS
# =============================================================================

# Flat-region ramp, sparsest to densest
VALUE_CHARS = " .-=+*x#$&X@"

# Directional strokes for edge cells
STROKE_BACKSLASH = '\\'
STROKE_UNDERSCORE = '_'
STROKE_SLASH = '/'
STROKE_PIPE = '|'
STROKE_CHARS = STROKE_BACKSLASH + STROKE_UNDERSCORE + STROKE_SLASH + STROKE_PIPE

# Inclusive angle bands in degrees, checked in order
STROKE_BANDS = (
    (STROKE_BACKSLASH, ((22.5, 67.5), (-157.5, -112.5))),
    (STROKE_UNDERSCORE, ((67.5, 112.5), (-112.5, -67.5))),
    (STROKE_SLASH, ((112.5, 157.5), (-67.5, -22.5))),
)


# =============================================================================
# COLOR
# =============================================================================

# ITU-R BT.709 luma coefficients
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

SATURATION_EPSILON = 1e-4
CHROMA_EPSILON = 1e-4
CHANNEL_TIE_EPSILON = 1e-10

# Below this saturation a pixel is rendered NEUTRAL
NEUTRAL_SATURATION = 0.25

# Hue sector lower bounds (degrees); anything outside wraps to RED
HUE_SECTORS = (
    (30.0, ColorCategory.YELLOW),
    (90.0, ColorCategory.GREEN),
    (150.0, ColorCategory.CYAN),
    (210.0, ColorCategory.BLUE),
    (270.0, ColorCategory.MAGENTA),
    (330.0, ColorCategory.RED),
)

ANSI_RESET = "\033[0m"


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_MAX_WIDTH = 64
DEFAULT_MAX_HEIGHT = 48
DEFAULT_CHARACTER_RATIO = 2.0

# Thresholds at or above this value disable edge detection
EDGE_DETECTION_DISABLED = 4.0
DEFAULT_EDGE_THRESHOLD = EDGE_DETECTION_DISABLED
