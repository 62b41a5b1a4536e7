"""Tests for the command line interface."""

from __future__ import annotations

import pytest
from PIL import Image

from dmi_tools.cli import build_parser, main

from conftest import truncate_png


@pytest.fixture
def door_file(tmp_path):
    """Sample door icon written to disk."""
    assert main(["sample", "door", str(tmp_path)]) == 0
    return tmp_path / "door.dmi"


class TestParser:
    """Tests for argument parsing."""

    def test_render_defaults(self):
        """Test render options default to the first occurrence."""
        args = build_parser().parse_args(["render", "x.dmi", "open"])
        assert args.occurrence == 0
        assert args.output is None

    def test_command_required(self):
        """Test a subcommand must be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_unknown_sample(self):
        """Test sample names are restricted to the bundled ones."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["sample", "nonexistent", "out"])


class TestCommands:
    """Tests for running subcommands."""

    def test_sample(self, tmp_path, capsys):
        """Test writing a sample icon."""
        assert main(["sample", "mob", str(tmp_path)]) == 0
        assert (tmp_path / "mob.dmi").exists()
        assert "Generated sample 'mob'" in capsys.readouterr().out

    def test_info(self, door_file, capsys):
        """Test listing states with their occurrences and offsets."""
        capsys.readouterr()
        assert main(["info", str(door_file)]) == 0

        out = capsys.readouterr().out
        assert "cells 32x32" in out
        assert "[0] 'open': dirs=1 frames=1 offset=0" in out
        assert "[1] 'open': dirs=4 frames=1 offset=1" in out
        assert "[0] 'spin': dirs=8 frames=3 offset=13" in out

    def test_render_gif_into_directory(self, door_file, tmp_path, capsys):
        """Test animated states are written as GIF with a default name."""
        assert main(["render", str(door_file), "opening", "-o", str(tmp_path)]) == 0

        output = tmp_path / "door-opening-0.gif"
        with Image.open(output) as image:
            assert image.format == "GIF"
            assert image.size == (128, 32)
        assert str(output) in capsys.readouterr().out

    def test_render_png_occurrence(self, door_file, tmp_path):
        """Test a later occurrence renders to the named file."""
        output = tmp_path / "open.png"
        assert main(["render", str(door_file), "open", "--occurrence", "1", "-o", str(output)]) == 0

        with Image.open(output) as image:
            assert image.format == "PNG"
            assert image.size == (128, 32)

    def test_render_unknown_state(self, door_file, capsys):
        """Test unknown states exit with an error message."""
        assert main(["render", str(door_file), "missing"]) == 1
        assert "error:" in capsys.readouterr().err

    def test_missing_description(self, tmp_path, capsys):
        """Test plain images fail unless compatibility mode is on."""
        path = tmp_path / "plain.dmi"
        Image.new("RGBA", (32, 32), (255, 0, 0, 255)).save(path, format="PNG")

        assert main(["info", str(path)]) == 1
        assert "error:" in capsys.readouterr().err
        assert main(["--allow-missing-description", "info", str(path)]) == 0

    def test_duplicates(self, door_file, tmp_path, capsys):
        """Test duplicate names are reported per file."""
        (tmp_path / "broken.dmi").write_bytes(b"not an image")
        main(["sample", "mob", str(tmp_path)])
        capsys.readouterr()

        assert main(["duplicates", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert str(door_file) in out
        assert "2x open" in out
        assert "mob.dmi" not in out

    def test_duplicates_skips_truncated_files(self, door_file, tmp_path, capsys):
        """Test a truncated icon is skipped and the walk carries on."""
        (tmp_path / "a.dmi").write_bytes(truncate_png(door_file.read_bytes()))
        capsys.readouterr()

        assert main(["duplicates", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert str(door_file) in out
        assert "a.dmi" not in out

    def test_truncated_file_reports_error(self, door_file, tmp_path, capsys):
        """Test a truncated icon gives an error message, not a traceback."""
        path = tmp_path / "broken.dmi"
        path.write_bytes(truncate_png(door_file.read_bytes()))

        assert main(["info", str(path)]) == 1
        assert "error: Not a readable image" in capsys.readouterr().err
