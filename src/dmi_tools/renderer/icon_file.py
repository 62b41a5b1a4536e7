"""Sprite sheet pixels coupled with their parsed description."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from dmi_tools.errors import FormatError, MissingDescriptionError
from dmi_tools.parser import Metadata, parse
from dmi_tools.types import (
    Direction,
    Header,
    Rect,
    State,
    StateReference,
    SUPPORTED_VERSION,
)

logger = logging.getLogger(__name__)

DESCRIPTION_KEY = "Description"


@dataclass
class IconFile:
    """A decoded RGBA sprite sheet and its metadata.

    The sheet is a grid of ``cell_width x cell_height`` cells read left to
    right, top to bottom. `pixels` has shape ``(height, width, 4)``.
    """

    metadata: Metadata
    pixels: np.ndarray

    def __post_init__(self):
        header = self.metadata.header
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"Expected an RGBA pixel array, got shape {self.pixels.shape}")
        if self.width % header.cell_width != 0:
            raise FormatError(
                f"Image width {self.width} is not a multiple of the cell width {header.cell_width}"
            )
        capacity = self.columns * (self.height // header.cell_height)
        if self.metadata.total_cells > capacity:
            raise FormatError(
                f"Description needs {self.metadata.total_cells} cells "
                f"but the {self.width}x{self.height} image holds {capacity}"
            )

    @classmethod
    def from_image(
        cls,
        image: Image.Image,
        description: Optional[str] = None,
        allow_missing_description: bool = False,
    ) -> "IconFile":
        """Build from a Pillow image.

        Args:
            image: Source image, any mode.
            description: Description text; read from the image's text
                chunks when not given.
            allow_missing_description: Treat an image without a description
                as a single plain cell instead of failing.

        Raises:
            MissingDescriptionError: If no description is found and plain
                images are not allowed.
            FormatError: If the description is malformed.
        """
        if description is None:
            chunks = getattr(image, "text", None) or image.info
            description = chunks.get(DESCRIPTION_KEY)

        pixels = np.array(image.convert("RGBA"), dtype=np.uint8)

        if description is None:
            if not allow_missing_description:
                raise MissingDescriptionError(
                    "Cannot find the Description text chunk; make sure a zTXt chunk "
                    "named 'Description' exists"
                )
            height, width = pixels.shape[:2]
            logger.warning("No description found, treating the %dx%d image as one cell", width, height)
            metadata = Metadata.build(Header(SUPPORTED_VERSION, width, height), [])
        else:
            metadata = parse(description)

        return cls(metadata=metadata, pixels=pixels)

    @classmethod
    def from_bytes(cls, data: bytes, allow_missing_description: bool = False) -> "IconFile":
        """Decode an icon file held in memory.

        Raises:
            FormatError: If the data is not a readable image, including
                truncated or corrupt files Pillow recognises.
        """
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise FormatError(f"Not a readable image: {e}") from e
        with image:
            return cls.from_image(image, allow_missing_description=allow_missing_description)

    @classmethod
    def from_file(cls, path: Union[Path, str], allow_missing_description: bool = False) -> "IconFile":
        """Load an icon file from disk."""
        return cls.from_bytes(Path(path).read_bytes(), allow_missing_description)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def columns(self) -> int:
        """Cells per row."""
        return self.width // self.metadata.header.cell_width

    def rect_of_index(self, index: int) -> Rect:
        """Rectangle of the cell at an absolute index."""
        header = self.metadata.header
        column, row = index % self.columns, index // self.columns
        return Rect(
            x=column * header.cell_width,
            y=row * header.cell_height,
            width=header.cell_width,
            height=header.cell_height,
        )

    def rect_of(self, ref: StateReference, direction: Direction = Direction.SOUTH, frame: int = 0) -> Rect:
        """Rectangle of one direction and frame of a state.

        An icon without states is one implicit state covering the first cell.
        """
        if self.metadata.is_empty:
            header = self.metadata.header
            return Rect(0, 0, header.cell_width, header.cell_height)
        return self.rect_of_index(self.metadata.get_index_of_frame(ref, direction, frame))

    def get_icon(self, index: int) -> np.ndarray:
        """Read-only view of one cell's pixels."""
        rect = self.rect_of_index(index)
        view = self.pixels[rect.y:rect.bottom, rect.x:rect.right]
        view.flags.writeable = False
        return view

    def get_state(self, ref: StateReference) -> State:
        """Look up a state.

        Raises:
            StateNotFoundError: If the reference is unknown.
        """
        return self.metadata.get_state(ref)[1]
