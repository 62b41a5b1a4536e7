"""Renderer package for DMI sprite sheets."""

from __future__ import annotations

from .compositor import NO_TINT, composite, clear, new_canvas
from .icon_file import IconFile
from .icon_renderer import (
    IconRenderer,
    RenderConfig,
    RenderJob,
    RenderType,
    frame_sequence,
)

__all__ = [
    "NO_TINT",
    "composite",
    "clear",
    "new_canvas",
    "IconFile",
    "IconRenderer",
    "RenderConfig",
    "RenderJob",
    "RenderType",
    "frame_sequence",
]
