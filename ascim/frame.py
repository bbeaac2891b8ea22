"""
ascim - Frames
==============
Builds the grid of colored glyphs for an image and renders it for a terminal.
"""

import logging
import sys
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, TextIO, Tuple

from ascim.color_space import perceived_luminance, rgb_to_hsv
from ascim.config import AscimConfig
from ascim.constants import DEFAULT_CHARACTER_RATIO, RenderMode
from ascim.edge_detection import EdgeProcessor
from ascim.formatter import AnsiColorFormatter
from ascim.glyphs import get_ascii_char, select_glyph
from ascim.image_loader import ImageData, load_and_resize_image, make_grayscale

logger = logging.getLogger(__name__)


class RGBColor(NamedTuple):
    """Source pixel color, channels in [0, 1]."""
    r: float
    g: float
    b: float


class Cell(NamedTuple):
    color: RGBColor
    glyph: str


@dataclass(frozen=True)
class Frame:
    """An image converted to a height x width grid of cells."""
    height: int
    width: int
    threshold: float
    character_ratio: float
    cells: Tuple[Tuple[Cell, ...], ...]

    @classmethod
    def from_config(cls, config: AscimConfig) -> 'Frame':
        """
        Load, resize and convert the image a config points at.

        Args:
            config: Conversion settings

        Returns:
            Frame

        Raises:
            DecodeFailure: The image could not be loaded
            InvalidDimensions: The settings cannot produce a grid
        """
        config.validate()
        image_data = load_and_resize_image(
            config.file_path, config.max_width, config.max_height, config.character_ratio
        )
        return build_frame(
            image_data,
            config.edge_threshold,
            character_ratio=config.character_ratio,
            detect_edges=config.edge_detection,
        )

    @classmethod
    def from_path(cls, file_path: str, **overrides) -> 'Frame':
        """Convert an image with default settings, replacing any given fields."""
        return cls.from_config(AscimConfig(file_path=file_path).with_overrides(**overrides))

    @property
    def lines(self) -> List[str]:
        """Glyphs of each row, without color."""
        return [''.join(cell.glyph for cell in row) for row in self.cells]

    def to_text(self) -> str:
        return '\n'.join(self.lines)

    def render(self, mode: RenderMode = RenderMode.TRUE_COLOR) -> str:
        """Frame as colored terminal text."""
        return AnsiColorFormatter.format_cells(self.cells, mode)

    def print(self, mode: RenderMode = RenderMode.TRUE_COLOR,
              file: Optional[TextIO] = None) -> None:
        """Write the rendered frame to a stream, stdout by default."""
        stream = file if file is not None else sys.stdout
        stream.write(self.render(mode))
        stream.flush()


def build_frame(image_data: ImageData, edge_threshold: float,
                character_ratio: float = DEFAULT_CHARACTER_RATIO,
                detect_edges: Optional[bool] = None) -> Frame:
    """
    Convert decoded pixels into a frame.

    Each cell keeps its source color. Its glyph is a directional stroke when
    the gradient there reaches the threshold, otherwise the ramp glyph for
    the squared HSV value.

    Args:
        image_data: Pixels, one per cell
        edge_threshold: Gradient magnitude marking an edge; >= 4.0 disables
        character_ratio: Recorded on the frame
        detect_edges: Explicit override of the threshold rule

    Returns:
        Frame
    """
    grayscale = make_grayscale(image_data)
    edges_enabled = EdgeProcessor.is_enabled(edge_threshold, detect_edges)
    gradient_x, gradient_y = EdgeProcessor.detect(grayscale, edge_threshold, edges_enabled)
    rgb = image_data.normalized_rgb()

    rows = []
    for y in range(image_data.height):
        row = []
        for x in range(image_data.width):
            r, g, b = (float(c) for c in rgb[y, x])
            luminance = perceived_luminance(rgb_to_hsv(r, g, b))
            if edges_enabled:
                glyph = select_glyph(
                    luminance, float(gradient_x[y, x]), float(gradient_y[y, x]), edge_threshold
                )
            else:
                glyph = get_ascii_char(luminance)
            row.append(Cell(RGBColor(r, g, b), glyph))
        rows.append(tuple(row))

    logger.debug("built %dx%d frame (threshold=%s)", image_data.width, image_data.height,
                 edge_threshold)

    return Frame(
        height=image_data.height,
        width=image_data.width,
        threshold=edge_threshold,
        character_ratio=character_ratio,
        cells=tuple(rows),
    )


def render_image(file_path: str, max_width: int, max_height: int,
                 character_ratio: float, edge_threshold: float,
                 mode: RenderMode = RenderMode.CATEGORICAL,
                 file: Optional[TextIO] = None) -> Frame:
    """
    Convert an image and print it straight away.

    Args:
        file_path: Image to convert
        max_width: Grid width limit in characters
        max_height: Grid height limit in characters
        character_ratio: Character height / width
        edge_threshold: Edge threshold; >= 4.0 disables
        mode: Render mode, basic terminal colors by default
        file: Output stream, stdout by default

    Returns:
        The printed frame
    """
    config = AscimConfig(
        file_path=file_path,
        max_width=max_width,
        max_height=max_height,
        character_ratio=character_ratio,
        edge_threshold=edge_threshold,
        render_mode=mode,
    )
    frame = Frame.from_config(config)
    frame.print(mode, file=file)
    return frame
