"""Renders icon states to still images and animations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Optional, Union

import numpy as np
from PIL import Image

from dmi_tools.errors import RenderUsageError
from dmi_tools.types import Animation, AnimationFrame, State, StateReference

from .compositor import NO_TINT, clear, composite, new_canvas
from .icon_file import IconFile

logger = logging.getLogger(__name__)

Target = Union[Path, str, BinaryIO]


@dataclass
class RenderConfig:
    """Output settings for rendering."""

    delay_unit_seconds: float = 0.1  # one delay unit is a decisecond
    default_delay: float = 1.0
    loop: bool = True
    allow_missing_description: bool = False

    def duration_ms(self, delay: float) -> int:
        """Convert a delay in container units to milliseconds."""
        return int(round(delay * self.delay_unit_seconds * 1000))


class RenderType(Enum):
    """Output shape chosen from a state's frame count."""

    PNG = "png"
    GIF = "gif"

    @property
    def suffix(self) -> str:
        return f".{self.value}"


@dataclass
class RenderJob:
    """A resolved state, ready to write with the matching encoder."""

    render_type: RenderType
    renderer: "IconRenderer"
    ref: StateReference
    state: State

    def render(self, target: Target) -> None:
        if self.render_type is RenderType.GIF:
            self.renderer.render_gif(self.ref, target)
        else:
            self.renderer.render_png(self.ref, target)


def frame_sequence(state: State) -> list[int]:
    """Logical frames in playback order.

    Rewinding states play forward and then the same frames backward.
    """
    forward = list(range(state.frame_count))
    if state.rewind:
        return forward + forward[::-1]
    return forward


class IconRenderer:
    """Composes the directions of a state into output frames.

    Every output frame is one canvas of ``cell_width * directions`` by
    ``cell_height`` pixels, with directions laid out in sheet slot order.
    """

    def __init__(self, source: IconFile, config: Optional[RenderConfig] = None):
        """Initialize the renderer.

        Args:
            source: Icon file to render from. It is never modified.
            config: Output settings.
        """
        self.source = source
        self.config = config or RenderConfig()

    def prepare_render(self, ref: StateReference) -> RenderJob:
        """Resolve a state and pick PNG or GIF output for it.

        Raises:
            StateNotFoundError: If the reference is unknown.
        """
        state = self.source.get_state(ref)
        render_type = RenderType.GIF if state.is_animated else RenderType.PNG
        return RenderJob(render_type=render_type, renderer=self, ref=ref, state=state)

    def render_to_images(self, ref: StateReference) -> list[np.ndarray]:
        """Every output frame as an RGBA array, in playback order."""
        return [frame.image for frame in self.render_animation(ref).frames]

    def render_animation(self, ref: StateReference) -> Animation:
        """Render every output frame of a state with its display duration.

        Raises:
            StateNotFoundError: If the reference is unknown.
        """
        state = self.source.get_state(ref)
        canvas = self._canvas(state)
        animation = Animation(name=state.name, loop=self.config.loop)

        for frame in frame_sequence(state):
            self._render_dirs(ref, state, canvas, frame)
            delay = state.frames.delay_of(frame, self.config.default_delay)
            animation.frames.append(
                AnimationFrame(
                    image=canvas.copy(),
                    frame=frame,
                    duration_ms=self.config.duration_ms(delay),
                )
            )
            clear(canvas)

        logger.debug(
            "Rendered %s: %d output frames of %dx%d",
            ref, len(animation.frames), *animation.size,
        )
        return animation

    def render_png(self, ref: StateReference, target: Target) -> None:
        """Write the first frame of a state as a PNG."""
        state = self.source.get_state(ref)
        canvas = self._canvas(state)
        self._render_dirs(ref, state, canvas, 0)
        Image.fromarray(canvas, "RGBA").save(target, format="PNG")

    def render_gif(self, ref: StateReference, target: Target) -> None:
        """Write an animated state as a GIF.

        Pillow merges identical consecutive frames and adds up their
        durations, so a rewinding state can encode fewer frames than it
        plays. Total play time is unchanged. Use `render_animation` for
        the played sequence.

        Raises:
            RenderUsageError: If the state has a single frame.
        """
        state = self.source.get_state(ref)
        if not state.is_animated:
            raise RenderUsageError(f"Tried to render icon state {ref} with one frame as a gif")

        animation = self.render_animation(ref)
        images = [Image.fromarray(frame.image, "RGBA") for frame in animation.frames]
        options = {
            "save_all": True,
            "append_images": images[1:],
            "duration": animation.durations_ms,
            "disposal": 2,
        }
        if animation.loop:
            options["loop"] = 0
        images[0].save(target, format="GIF", **options)

    def _canvas(self, state: State) -> np.ndarray:
        header = self.source.metadata.header
        return new_canvas(header.cell_width * state.directions.cardinality, header.cell_height)

    def _render_dirs(self, ref: StateReference, state: State, canvas: np.ndarray, frame: int) -> None:
        """Draw every direction of one frame, left to right."""
        metadata = self.source.metadata
        cell_width = metadata.header.cell_width
        for slot, direction in enumerate(state.directions.ordered):
            index = metadata.get_index_of_frame(ref, direction, frame)
            composite(
                self.source.pixels,
                canvas,
                (cell_width * slot, 0),
                self.source.rect_of_index(index),
                NO_TINT,
            )
