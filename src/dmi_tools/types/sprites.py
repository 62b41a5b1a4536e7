"""Rendered frame and animation types."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass
class AnimationFrame:
    """Single output frame: all directions of one logical frame side by side."""

    image: np.ndarray  # (height, width, 4) RGBA
    frame: int  # logical frame index in the state
    duration_ms: int


@dataclass
class Animation:
    """Frames of one rendered state, in playback order."""

    name: str
    frames: list[AnimationFrame] = field(default_factory=list)
    loop: bool = True

    @property
    def frame_order(self) -> list[int]:
        return [f.frame for f in self.frames]

    @property
    def durations_ms(self) -> list[int]:
        return [f.duration_ms for f in self.frames]

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of every frame."""
        if not self.frames:
            return (0, 0)
        height, width = self.frames[0].image.shape[:2]
        return (width, height)
