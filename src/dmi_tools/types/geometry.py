"""Pixel-space geometry."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in absolute pixel coordinates."""

    x: int  # top left
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.y + self.height

    def fits_within(self, width: int, height: int) -> bool:
        """Check whether the rectangle lies inside a width x height image."""
        return self.x >= 0 and self.y >= 0 and self.right <= width and self.bottom <= height
