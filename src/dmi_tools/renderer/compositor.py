"""Alpha "over" compositing of RGBA pixel arrays.

Images are ``numpy`` arrays of shape ``(height, width, 4)`` and dtype
``uint8``. All arithmetic is 8-bit fixed point with truncating division.
"""

from __future__ import annotations

import logging

import numpy as np

from dmi_tools.errors import BoundsError
from dmi_tools.types import Rect

logger = logging.getLogger(__name__)

NO_TINT: tuple[int, int, int, int] = (255, 255, 255, 255)


def new_canvas(width: int, height: int) -> np.ndarray:
    """Create a fully transparent canvas."""
    return np.zeros((height, width, 4), dtype=np.uint8)


def composite(
    source: np.ndarray,
    destination: np.ndarray,
    destination_offset: tuple[int, int],
    crop: Rect,
    tint: tuple[int, int, int, int] = NO_TINT,
) -> int:
    """Blend a region of `source` onto `destination` in place.

    Each source channel is first multiplied by the matching tint channel
    (``c * t // 255``). Where the resulting alpha is zero the destination
    pixel is left untouched.

    Args:
        source: Image to copy from.
        destination: Image to blend onto; modified in place.
        destination_offset: (x, y) where the crop's top left lands.
        crop: Region of `source` to copy.
        tint: RGBA multiplier, 255 meaning unchanged.

    Returns:
        Number of source pixels skipped because they fell outside
        `destination`.

    Raises:
        BoundsError: If `crop` is not inside `source`. Nothing is written.
    """
    src_height, src_width = source.shape[:2]
    if not crop.fits_within(src_width, src_height):
        raise BoundsError(
            f"Cannot get subview, out of bounds! {crop}, "
            f"(img_width, img_height) {src_width}:{src_height}"
        )

    dst_height, dst_width = destination.shape[:2]
    dx, dy = destination_offset
    x0, y0 = max(dx, 0), max(dy, 0)
    x1 = min(dx + crop.width, dst_width)
    y1 = min(dy + crop.height, dst_height)
    visible = max(0, x1 - x0) * max(0, y1 - y0)
    skipped = crop.width * crop.height - visible
    if skipped:
        logger.warning(
            "Skipped %d pixels outside the %dx%d destination (offset %s, crop %s)",
            skipped, dst_width, dst_height, destination_offset, crop,
        )
    if visible == 0:
        return skipped

    sx, sy = crop.x + (x0 - dx), crop.y + (y0 - dy)
    src = source[sy:sy + (y1 - y0), sx:sx + (x1 - x0)].astype(np.uint32)
    src = src * np.asarray(tint, dtype=np.uint32) // 255

    target = destination[y0:y1, x0:x1]
    dst = target.astype(np.uint32)

    src_alpha = src[..., 3:4]
    dst_alpha = dst[..., 3:4]
    out_alpha = src_alpha + dst_alpha * (255 - src_alpha) // 255

    color = (
        src[..., :3] * src_alpha + dst[..., :3] * dst_alpha * (255 - src_alpha) // 255
    ) // np.maximum(out_alpha, 1)
    blended = np.concatenate([np.minimum(color, 255), out_alpha], axis=-1).astype(np.uint8)

    covered = out_alpha[..., 0] > 0
    target[covered] = blended[covered]
    return skipped


def clear(canvas: np.ndarray) -> None:
    """Reset every pixel to transparent black."""
    canvas[...] = 0
