"""Value types for DMI sprite sheets."""

from .directions import (
    Direction,
    DirectionCount,
    CARDINALS,
    DIAGONALS,
    ALL_DIRECTIONS,
    SLOT_ORDER,
)
from .geometry import Rect
from .sprites import Animation, AnimationFrame
from .states import (
    FrameSpec,
    State,
    Header,
    StateReference,
    Value,
    SUPPORTED_VERSION,
)

__all__ = [
    # Directions
    "Direction",
    "DirectionCount",
    "CARDINALS",
    "DIAGONALS",
    "ALL_DIRECTIONS",
    "SLOT_ORDER",
    # Geometry
    "Rect",
    # Sprites
    "Animation",
    "AnimationFrame",
    # States
    "FrameSpec",
    "State",
    "Header",
    "StateReference",
    "Value",
    "SUPPORTED_VERSION",
]
