"""Tests for loading sprite sheets."""

from __future__ import annotations

import io
import logging

import numpy as np
import pytest
from PIL import Image
from PIL.PngImagePlugin import PngInfo

from dmi_tools.assets import SheetWriter
from dmi_tools.errors import CellLookupError, FormatError, MissingDescriptionError, StateNotFoundError
from dmi_tools.parser import parse
from dmi_tools.renderer import IconFile
from dmi_tools.types import Direction, Rect, StateReference

from conftest import cell_color, truncate_png

HEADER_ONLY = "# BEGIN DMI\nversion = 4.0\n\twidth = 32\n\theight = 32\n# END DMI\n"


def png_bytes(image: Image.Image, description: str = None) -> bytes:
    """Encode an image as PNG, optionally with a description chunk."""
    info = PngInfo()
    if description is not None:
        info.add_text("Description", description, zip=True)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG", pnginfo=info)
    return buffer.getvalue()


class TestLoading:
    """Tests for decoding icon files."""

    def test_from_bytes(self, door_description):
        """Test the description is read from the zTXt chunk."""
        metadata = parse(door_description)
        icon = IconFile.from_bytes(SheetWriter().to_bytes(metadata, columns=4))

        assert icon.metadata == metadata
        assert (icon.width, icon.height) == (128, 192)
        assert icon.pixels.dtype == np.uint8
        assert icon.pixels.shape == (192, 128, 4)

    def test_from_file(self, tmp_path, door_metadata):
        """Test loading from disk."""
        path = SheetWriter(tmp_path).generate(door_metadata, "door", columns=4)
        icon = IconFile.from_file(path)
        assert icon.metadata.names == ["open", "opening", "bounce"]

    def test_rgb_image_is_converted(self):
        """Test images without alpha become opaque RGBA."""
        image = Image.new("RGB", (32, 32), (10, 20, 30))
        icon = IconFile.from_bytes(png_bytes(image, HEADER_ONLY))
        assert icon.pixels.shape == (32, 32, 4)
        assert tuple(icon.pixels[0, 0]) == (10, 20, 30, 255)

    def test_explicit_description(self):
        """Test a description passed in overrides the image's chunks."""
        image = Image.new("RGBA", (32, 32))
        icon = IconFile.from_image(image, description=HEADER_ONLY)
        assert icon.metadata.is_empty

    def test_missing_description(self):
        """Test an image without a description is rejected."""
        data = png_bytes(Image.new("RGBA", (32, 32)))
        with pytest.raises(MissingDescriptionError):
            IconFile.from_bytes(data)

    def test_missing_description_is_a_format_error(self):
        """Test callers catching format errors also catch a missing description."""
        data = png_bytes(Image.new("RGBA", (8, 8)))
        with pytest.raises(FormatError):
            IconFile.from_bytes(data)

    def test_missing_description_allowed(self, caplog):
        """Test compatibility mode treats the image as one cell."""
        data = png_bytes(Image.new("RGBA", (48, 24), (1, 2, 3, 255)))
        with caplog.at_level(logging.WARNING):
            icon = IconFile.from_bytes(data, allow_missing_description=True)

        assert icon.metadata.is_empty
        assert icon.metadata.header.cell_width == 48
        assert icon.metadata.header.cell_height == 24
        assert icon.rect_of(StateReference.first("")) == Rect(0, 0, 48, 24)
        assert "No description found" in caplog.text

    def test_malformed_description(self):
        """Test parse errors surface from loading."""
        data = png_bytes(Image.new("RGBA", (32, 32)), "# BEGIN DMI\nversion = 3.0\n\twidth = 32\n# END DMI\n")
        with pytest.raises(FormatError):
            IconFile.from_bytes(data)

    def test_not_an_image(self):
        """Test undecodable data is a format error."""
        with pytest.raises(FormatError):
            IconFile.from_bytes(b"not an image")

    def test_truncated_image(self, door_metadata):
        """Test a recognised but truncated image is a format error."""
        data = truncate_png(SheetWriter().to_bytes(door_metadata, columns=4))
        with pytest.raises(FormatError, match="Not a readable image"):
            IconFile.from_bytes(data)

    def test_truncated_file(self, tmp_path, door_metadata):
        """Test loading a truncated file from disk is a format error."""
        path = tmp_path / "door.dmi"
        path.write_bytes(truncate_png(SheetWriter().to_bytes(door_metadata)))
        with pytest.raises(FormatError):
            IconFile.from_file(path)


class TestValidation:
    """Tests for sheet and description consistency."""

    def test_width_not_a_multiple(self):
        """Test the sheet width must hold whole cells."""
        pixels = np.zeros((32, 40, 4), dtype=np.uint8)
        with pytest.raises(FormatError):
            IconFile(metadata=parse(HEADER_ONLY), pixels=pixels)

    def test_sheet_too_small(self, door_metadata):
        """Test every addressed cell must fit on the sheet."""
        pixels = np.zeros((64, 128, 4), dtype=np.uint8)
        with pytest.raises(FormatError):
            IconFile(metadata=door_metadata, pixels=pixels)

    def test_rgba_required(self):
        """Test pixel arrays must carry four channels."""
        with pytest.raises(ValueError):
            IconFile(metadata=parse(HEADER_ONLY), pixels=np.zeros((32, 32, 3), dtype=np.uint8))


class TestCells:
    """Tests for cell addressing on the sheet."""

    def test_columns(self, door_icon):
        """Test columns follow from the sheet width."""
        assert door_icon.columns == 4

    def test_rect_of_index(self, door_icon):
        """Test cells are read left to right, top to bottom."""
        assert door_icon.rect_of_index(0) == Rect(0, 0, 32, 32)
        assert door_icon.rect_of_index(5) == Rect(32, 32, 32, 32)

    def test_rect_of_state(self, door_icon):
        """Test rectangles of directions and frames."""
        assert door_icon.rect_of(StateReference.first("open")) == Rect(0, 0, 32, 32)
        assert door_icon.rect_of(StateReference(1, "open"), Direction.NORTH) == Rect(64, 0, 32, 32)
        assert door_icon.rect_of(StateReference.first("opening"), Direction.WEST, 1) == Rect(0, 96, 32, 32)

    def test_rect_of_header_only(self):
        """Test an icon without states is one cell at the origin."""
        icon = IconFile(metadata=parse(HEADER_ONLY), pixels=np.zeros((32, 32, 4), dtype=np.uint8))
        assert icon.rect_of(StateReference.first("anything")) == Rect(0, 0, 32, 32)

    def test_rect_of_unknown_state(self, door_icon):
        """Test unknown states are lookup errors."""
        with pytest.raises(StateNotFoundError):
            door_icon.rect_of(StateReference(2, "open"))

    def test_rect_of_missing_frame(self, door_icon):
        """Test frames past the end are lookup errors."""
        with pytest.raises(CellLookupError):
            door_icon.rect_of(StateReference.first("opening"), Direction.SOUTH, 2)

    def test_get_icon(self, door_icon):
        """Test a cell view holds that cell's pixels."""
        cell = door_icon.get_icon(5)
        assert cell.shape == (32, 32, 4)
        assert (cell == cell_color(5)).all()

    def test_get_icon_is_read_only(self, door_icon):
        """Test cell views cannot modify the sheet."""
        cell = door_icon.get_icon(0)
        with pytest.raises(ValueError):
            cell[0, 0] = (0, 0, 0, 0)
        assert tuple(door_icon.pixels[0, 0]) == cell_color(0)

    def test_get_state(self, door_icon):
        """Test state lookup by reference."""
        state = door_icon.get_state(StateReference(1, "open"))
        assert state.directions.cardinality == 4
