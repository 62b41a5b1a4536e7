"""Write descriptions and placeholder DMI sprite sheets."""

from __future__ import annotations

import io
import math
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageDraw
from PIL.PngImagePlugin import PngInfo

from dmi_tools.parser import BEGIN_MARKER, END_MARKER, Metadata, format_value
from dmi_tools.types import Header, State, Value

DESCRIPTION_KEY = "Description"
INDENT = "\t"

# Fill colour per direction slot, in sheet slot order
SLOT_COLORS: tuple[Tuple[int, int, int], ...] = (
    (220, 80, 80),  # south
    (80, 160, 220),  # north
    (90, 200, 110),  # east
    (230, 190, 70),  # west
    (170, 100, 210),  # southeast
    (240, 140, 60),  # southwest
    (80, 200, 200),  # northeast
    (200, 200, 200),  # northwest
)


def _line(name: str, value: Value, indent: bool) -> str:
    prefix = INDENT if indent else ""
    return f"{prefix}{name} = {format_value(value)}"


def _extra_lines(extra: dict[str, Value]) -> list[str]:
    return [_line(name, value, True) for name, value in extra.items()]


def _state_lines(state: State) -> list[str]:
    lines = [_line("state", state.name, False), _line("dirs", state.directions.cardinality, True)]
    lines.append(_line("frames", state.frame_count, True))
    if state.delays is not None:
        lines.append(_line("delay", state.delays, True))
    if state.loop:
        lines.append(_line("loop", 1, True))
    if state.rewind:
        lines.append(_line("rewind", 1, True))
    if state.movement:
        lines.append(_line("movement", 1, True))
    if state.hotspot is not None:
        lines.append(_line("hotspot", state.hotspot, True))
    return lines + _extra_lines(state.extra)


def write_description(metadata: Metadata) -> str:
    """Serialize metadata back into description text.

    Unknown keys are written with their original values, so parsing the
    result gives back an equal catalog.
    """
    header = metadata.header
    lines = [
        BEGIN_MARKER,
        _line("version", header.version, False),
        _line("width", header.cell_width, True),
        _line("height", header.cell_height, True),
    ]
    lines += _extra_lines(header.extra)
    for state in metadata.states:
        lines += _state_lines(state)
    lines.append(END_MARKER)
    return "\n".join(lines) + "\n"


class SheetWriter:
    """Builds placeholder sprite sheets for a description.

    Each cell is filled with its direction's colour and labelled with its
    frame number, so rendered output can be checked by eye.
    """

    def __init__(self, output_dir: Optional[Path] = None):
        """Initialize the writer.

        Args:
            output_dir: Directory for generated files.
        """
        self.output_dir = output_dir or Path("assets/icons")

    def build_image(self, metadata: Metadata, columns: Optional[int] = None) -> Image.Image:
        """Draw every cell the description addresses.

        Args:
            metadata: Description to draw cells for.
            columns: Cells per row; defaults to a near-square grid.

        Returns:
            The RGBA sheet.
        """
        header = metadata.header
        cells = max(metadata.total_cells, 1)
        columns = columns or math.ceil(math.sqrt(cells))
        rows = math.ceil(cells / columns)

        image = Image.new(
            "RGBA", (columns * header.cell_width, rows * header.cell_height), (0, 0, 0, 0)
        )
        draw = ImageDraw.Draw(image)

        for _, offset, state in metadata.entries():
            for frame in range(state.frame_count):
                for slot in range(state.directions.cardinality):
                    index = offset + slot + frame * state.directions.cardinality
                    x = (index % columns) * header.cell_width
                    y = (index // columns) * header.cell_height
                    self._draw_cell(draw, x, y, header, SLOT_COLORS[slot], frame)
        return image

    def _draw_cell(
        self,
        draw: "ImageDraw.ImageDraw",
        x: int,
        y: int,
        header: Header,
        color: Tuple[int, int, int],
        frame: int,
    ) -> None:
        w, h = header.cell_width, header.cell_height
        draw.rectangle([x + 1, y + 1, x + w - 2, y + h - 2], fill=color + (255,))
        draw.text((x + 2, y + 2), str(frame), fill=(0, 0, 0, 255))

    def to_bytes(self, metadata: Metadata, columns: Optional[int] = None) -> bytes:
        """Encode a sheet as PNG with the description in a zTXt chunk."""
        info = PngInfo()
        info.add_text(DESCRIPTION_KEY, write_description(metadata), zip=True)
        buffer = io.BytesIO()
        self.build_image(metadata, columns).save(buffer, format="PNG", pnginfo=info)
        return buffer.getvalue()

    def generate(self, metadata: Metadata, name: str, columns: Optional[int] = None) -> Path:
        """Write `<name>.dmi` into the output directory.

        Returns:
            Path to the written file.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / f"{name}.dmi"
        output_path.write_bytes(self.to_bytes(metadata, columns))
        return output_path
