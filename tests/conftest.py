"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest
import numpy as np

from dmi_tools.parser import Metadata, parse
from dmi_tools.renderer import IconFile


def cell_color(index: int) -> tuple[int, int, int, int]:
    """Distinct opaque colour for a sheet cell."""
    return (index % 256, 255 - index % 256, (index * 37) % 256, 255)


def truncate_png(data: bytes) -> bytes:
    """Cut PNG data a few bytes into its first IDAT chunk, keeping the text chunks."""
    return data[:data.index(b"IDAT") + 20]


DOOR_DESCRIPTION = "\n".join(
    [
        "# BEGIN DMI",
        "version = 4.0",
        "\twidth = 32",
        "\theight = 32",
        'state = "open"',
        "\tdirs = 1",
        "\tframes = 1",
        'state = "open"',
        "\tdirs = 4",
        "\tframes = 1",
        'state = "opening"',
        "\tdirs = 4",
        "\tframes = 2",
        "\tdelay = 1.2,1",
        "\tloop = 1",
        "\trewind = 0",
        'state = "bounce"',
        "\tdirs = 4",
        "\tframes = 2",
        "\tdelay = 1.2,1",
        "\trewind = 1",
        "# END DMI",
        "",
    ]
)


@pytest.fixture
def sheet_factory():
    """Build an IconFile whose cell i is filled with cell_color(i)."""

    def build(description: str, columns: int = 4) -> IconFile:
        metadata = parse(description)
        header = metadata.header
        rows = max(1, -(-metadata.total_cells // columns))
        pixels = np.zeros(
            (rows * header.cell_height, columns * header.cell_width, 4), dtype=np.uint8
        )
        for index in range(metadata.total_cells):
            x = (index % columns) * header.cell_width
            y = (index // columns) * header.cell_height
            pixels[y:y + header.cell_height, x:x + header.cell_width] = cell_color(index)
        return IconFile(metadata=metadata, pixels=pixels)

    return build


@pytest.fixture
def door_description() -> str:
    """Description text of the door icon."""
    return DOOR_DESCRIPTION


@pytest.fixture
def door_metadata() -> Metadata:
    """Parsed door description."""
    return parse(DOOR_DESCRIPTION)


@pytest.fixture
def door_icon(sheet_factory) -> IconFile:
    """Door icon on a 4 column sheet of 32x32 cells."""
    return sheet_factory(DOOR_DESCRIPTION)
