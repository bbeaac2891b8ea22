"""
ascim - Image Loading
=====================
Decoding, aspect-corrected resizing and grayscale conversion of source images.
"""

import logging
import math
import os
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np
from PIL import Image

from ascim.constants import LUMA_WEIGHTS
from ascim.exceptions import DecodeFailure, InvalidDimensions

logger = logging.getLogger(__name__)

CHANNELS = 4


@dataclass(frozen=True)
class ImageData:
    """Decoded RGBA pixels, row-major, four bytes per pixel."""
    width: int
    height: int
    data: bytes

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensions(f"image size must be positive, got {self.width}x{self.height}")
        expected = self.width * self.height * CHANNELS
        if len(self.data) != expected:
            raise InvalidDimensions(
                f"pixel buffer has {len(self.data)} bytes, expected {expected}"
            )

    def pixels(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the buffer."""
        arr = np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, CHANNELS)
        arr.flags.writeable = False
        return arr

    def normalized_rgb(self) -> np.ndarray:
        """(height, width, 3) float array of channels divided by 255 once."""
        return self.pixels()[:, :, :3].astype(np.float64) / 255.0

    @classmethod
    def from_image(cls, image: Image.Image) -> 'ImageData':
        """Wrap a PIL image, converting it to RGBA first."""
        rgba = image.convert('RGBA')
        return cls(width=rgba.width, height=rgba.height, data=rgba.tobytes())


def compute_target_size(original_width: int, original_height: int,
                        max_width: int, max_height: int,
                        character_ratio: float) -> Tuple[int, int]:
    """
    Fit an image into a character grid, correcting for tall characters.

    Args:
        original_width: Source width in pixels
        original_height: Source height in pixels
        max_width: Maximum grid width in characters
        max_height: Maximum grid height in characters
        character_ratio: Character height divided by width

    Returns:
        (width, height) of the grid
    """
    if max_width <= 0 or max_height <= 0:
        raise InvalidDimensions(f"grid size must be positive, got {max_width}x{max_height}")
    if character_ratio <= 0:
        raise InvalidDimensions(f"character ratio must be positive, got {character_ratio}")
    if original_width <= 0 or original_height <= 0:
        raise InvalidDimensions(
            f"image size must be positive, got {original_width}x{original_height}"
        )

    proposed_height = (original_height * max_width) / (character_ratio * original_width)

    if proposed_height <= max_height:
        width, height = max_width, math.floor(proposed_height)
    else:
        width = math.floor(character_ratio * original_width * max_height / original_height)
        height = max_height

    if width <= 0 or height <= 0:
        raise InvalidDimensions(
            f"{original_width}x{original_height} image collapses to a {width}x{height} grid"
        )

    return width, height


def resize_rgba(image: Image.Image, size: Tuple[int, int]) -> Image.Image:
    """
    Bilinear resize to RGBA with straight (not premultiplied) alpha.

    Pillow premultiplies RGBA before resampling, so each band is resized on
    its own instead. Palette and bilevel images are expanded first, since
    they would otherwise resample as NEAREST.

    Args:
        image: Source image in any mode
        size: Target (width, height)

    Returns:
        RGBA image of the given size
    """
    rgba = image.convert('RGBA')
    bands = [band.resize(size, Image.Resampling.BILINEAR) for band in rgba.split()]
    return Image.merge('RGBA', bands)


def load_and_resize_image(file_path: Union[str, os.PathLike],
                          max_width: int, max_height: int,
                          character_ratio: float) -> ImageData:
    """
    Open an image and resize it to fit the character grid.

    Args:
        file_path: Path to the image file
        max_width: Maximum grid width in characters
        max_height: Maximum grid height in characters
        character_ratio: Character height divided by width

    Returns:
        ImageData with one pixel per character cell

    Raises:
        DecodeFailure: The file is missing, unreadable or not an image
        InvalidDimensions: The grid settings cannot fit the image
    """
    try:
        with Image.open(file_path) as img:
            logger.debug("loaded %s: size=%s mode=%s", file_path, img.size, img.mode)
            width, height = compute_target_size(
                img.width, img.height, max_width, max_height, character_ratio
            )
            image_data = ImageData.from_image(resize_rgba(img, (width, height)))
    except (OSError, Image.DecompressionBombError) as e:
        raise DecodeFailure(file_path, e) from e

    logger.debug("resized %s to %dx%d cells", file_path, width, height)
    return image_data


def make_grayscale(image_data: ImageData) -> np.ndarray:
    """
    BT.709 luma of every pixel.

    Args:
        image_data: Decoded pixels

    Returns:
        (height, width) float array in [0, 1]
    """
    rgb = image_data.normalized_rgb()
    red_w, green_w, blue_w = LUMA_WEIGHTS
    gray = red_w * rgb[:, :, 0] + green_w * rgb[:, :, 1] + blue_w * rgb[:, :, 2]
    gray.flags.writeable = False
    return gray
