"""
ascim - Edge Detection
======================
This module contains the EdgeProcessor class, which derives the Sobel
gradient field used to classify cells as edges.
"""

import logging
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from scipy import ndimage

from ascim.constants import EDGE_DETECTION_DISABLED
from ascim.exceptions import InvalidDimensions

logger = logging.getLogger(__name__)


class EdgeProcessor:
    """Compute gradient fields over a grayscale field."""

    # Row-major, top-left to bottom-right; applied as a correlation
    SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float64)
    SOBEL_Y = np.array([[1, 2, 1], [0, 0, 0], [-1, -2, -1]], dtype=np.float64)

    @staticmethod
    def _as_field(grayscale: Union[np.ndarray, Sequence[float]],
                  width: Optional[int], height: Optional[int]) -> np.ndarray:
        """Shape a flat row-major sequence or 2D array into a (height, width) field."""
        arr = np.asarray(grayscale, dtype=np.float64)

        if arr.ndim == 2 and width is None and height is None:
            return arr

        if width is None or height is None:
            raise InvalidDimensions("width and height are required for a flat grayscale field")
        if arr.size != width * height:
            raise InvalidDimensions(
                f"grayscale field has {arr.size} values, expected {width}x{height}"
            )

        return arr.reshape(height, width)

    @classmethod
    def sobel(cls, grayscale: Union[np.ndarray, Sequence[float]],
              width: Optional[int] = None,
              height: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
        """
        Apply the Sobel operator.

        Args:
            grayscale: (height, width) array, or a flat row-major sequence
                together with width and height
            width: Field width for flat input
            height: Field height for flat input

        Returns:
            Tuple of (gx, gy) arrays shaped like the field. The first and last
            row and column are always zero.
        """
        arr = cls._as_field(grayscale, width, height)

        gradient_x = np.zeros_like(arr)
        gradient_y = np.zeros_like(arr)

        rows, cols = arr.shape
        if rows < 3 or cols < 3:
            return gradient_x, gradient_y

        # Interior cells never read past the field, so the pad mode is irrelevant
        full_x = ndimage.correlate(arr, cls.SOBEL_X, mode='constant', cval=0.0)
        full_y = ndimage.correlate(arr, cls.SOBEL_Y, mode='constant', cval=0.0)

        gradient_x[1:-1, 1:-1] = full_x[1:-1, 1:-1]
        gradient_y[1:-1, 1:-1] = full_y[1:-1, 1:-1]

        return gradient_x, gradient_y

    @staticmethod
    def is_enabled(threshold: float, enabled: Optional[bool] = None) -> bool:
        """Resolve the explicit switch against the disabling threshold."""
        if enabled is not None:
            return enabled
        return threshold < EDGE_DETECTION_DISABLED

    @classmethod
    def detect(cls, grayscale: np.ndarray, threshold: float,
               enabled: Optional[bool] = None) -> Tuple[np.ndarray, np.ndarray]:
        """
        Gradient field for a frame, or zeros when edge detection is off.

        Args:
            grayscale: (height, width) grayscale field
            threshold: Edge threshold; values >= 4.0 disable detection
            enabled: Explicit override of the threshold rule

        Returns:
            Tuple of (gx, gy) arrays
        """
        arr = np.asarray(grayscale, dtype=np.float64)

        if not cls.is_enabled(threshold, enabled):
            logger.debug("edge detection disabled (threshold=%s)", threshold)
            return np.zeros_like(arr), np.zeros_like(arr)

        logger.debug("computing sobel gradient over %dx%d field", arr.shape[1], arr.shape[0])
        return cls.sobel(arr)
