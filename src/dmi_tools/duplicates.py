"""Reports icon states that share a name."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

import numpy as np

from dmi_tools.renderer import IconFile
from dmi_tools.types import State


def display_name(state: State) -> str:
    """Name used to group states; movement states group separately."""
    if state.movement:
        return f"{state.name} (movement)"
    return state.name


def find_duplicate_states(icon_file: IconFile) -> dict[str, list[tuple[int, State]]]:
    """Group states by display name, keeping groups with more than one entry.

    Returns:
        Display name to the (offset, state) of every occurrence.
    """
    groups: dict[str, list[tuple[int, State]]] = {}
    for _, offset, state in icon_file.metadata.entries():
        groups.setdefault(display_name(state), []).append((offset, state))
    return {name: group for name, group in groups.items() if len(group) > 1}


def all_same(icon_file: IconFile, occurrences: list[tuple[int, State]]) -> bool:
    """Check whether every occurrence has the same layout and pixels."""
    (first_offset, first_state), *rest = occurrences
    for offset, state in rest:
        if state.directions != first_state.directions or state.frame_count != first_state.frame_count:
            return False
        for i in range(state.cell_count):
            if not np.array_equal(
                icon_file.get_icon(first_offset + i), icon_file.get_icon(offset + i)
            ):
                return False
    return True


def iter_icon_paths(paths: Iterable[Path], suffix: str = ".dmi") -> Iterator[Path]:
    """Yield icon files, walking directories and skipping hidden entries."""
    for path in paths:
        if path.is_dir():
            for child in sorted(path.rglob(f"*{suffix}")):
                relative = child.relative_to(path)
                if not any(part.startswith(".") for part in relative.parts):
                    yield child
        elif path.suffix == suffix:
            yield path
