"""
ascim - Configuration
=====================
Settings for a single conversion and the terminal-size defaults used by the
command line.
"""

import math
import shutil
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ascim.constants import (
    DEFAULT_CHARACTER_RATIO,
    DEFAULT_EDGE_THRESHOLD,
    DEFAULT_MAX_HEIGHT,
    DEFAULT_MAX_WIDTH,
    RenderMode,
)
from ascim.edge_detection import EdgeProcessor
from ascim.exceptions import InvalidDimensions


def terminal_size(fallback: Tuple[int, int] = (DEFAULT_MAX_WIDTH, DEFAULT_MAX_HEIGHT)) -> Tuple[int, int]:
    """Columns and lines of the attached terminal, or the fallback."""
    size = shutil.get_terminal_size(fallback=fallback)
    if size.columns <= 0 or size.lines <= 0:
        return fallback
    return size.columns, size.lines


@dataclass
class AscimConfig:
    """Configuration for converting one image."""

    file_path: str = ''
    max_width: int = DEFAULT_MAX_WIDTH            # Grid width limit in characters
    max_height: int = DEFAULT_MAX_HEIGHT          # Grid height limit in characters
    character_ratio: float = DEFAULT_CHARACTER_RATIO  # Character height / width
    edge_threshold: float = DEFAULT_EDGE_THRESHOLD    # >= 4.0 disables edges

    # Explicit switch; None defers to the threshold
    edge_detection: Optional[bool] = None

    render_mode: RenderMode = RenderMode.TRUE_COLOR

    @property
    def edges_enabled(self) -> bool:
        return EdgeProcessor.is_enabled(self.edge_threshold, self.edge_detection)

    def validate(self) -> 'AscimConfig':
        """Reject settings that cannot produce a grid; returns self."""
        if self.max_width <= 0 or self.max_height <= 0:
            raise InvalidDimensions(
                f"max size must be positive, got {self.max_width}x{self.max_height}"
            )
        if not self.character_ratio > 0 or math.isinf(self.character_ratio):
            raise InvalidDimensions(f"character ratio must be positive, got {self.character_ratio}")
        if math.isnan(self.edge_threshold) or self.edge_threshold < 0:
            raise InvalidDimensions(f"edge threshold must be non-negative, got {self.edge_threshold}")
        return self

    def with_overrides(self, **overrides) -> 'AscimConfig':
        """Copy with the given fields replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def for_terminal(cls, file_path: str, **overrides) -> 'AscimConfig':
        """
        Config sized to the current terminal.

        Args:
            file_path: Image to convert
            **overrides: Field values taking precedence over detected ones

        Returns:
            AscimConfig
        """
        columns, lines = terminal_size()
        config = cls(file_path=file_path, max_width=columns, max_height=lines)
        return config.with_overrides(**overrides)
