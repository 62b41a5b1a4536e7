"""Sample descriptions and sprite sheet writing."""

from __future__ import annotations

from .sample_definitions import (
    SAMPLE_DESCRIPTIONS,
    create_all_samples,
    create_sample_metadata,
    get_sample_description,
)
from .sheet_writer import SheetWriter, write_description

__all__ = [
    "SAMPLE_DESCRIPTIONS",
    "create_all_samples",
    "create_sample_metadata",
    "get_sample_description",
    "SheetWriter",
    "write_description",
]
