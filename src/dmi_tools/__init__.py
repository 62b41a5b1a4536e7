"""Parse and render DMI sprite sheets."""

from __future__ import annotations

from .errors import (
    DMIError,
    FormatError,
    MissingDescriptionError,
    CellLookupError,
    StateNotFoundError,
    BoundsError,
    RenderUsageError,
)
from .parser import Metadata, parse
from .renderer import IconFile, IconRenderer, RenderConfig, RenderType
from .types import Direction, DirectionCount, Rect, State, StateReference

__version__ = "0.1.0"

__all__ = [
    "DMIError",
    "FormatError",
    "MissingDescriptionError",
    "CellLookupError",
    "StateNotFoundError",
    "BoundsError",
    "RenderUsageError",
    "Metadata",
    "parse",
    "IconFile",
    "IconRenderer",
    "RenderConfig",
    "RenderType",
    "Direction",
    "DirectionCount",
    "Rect",
    "State",
    "StateReference",
]
