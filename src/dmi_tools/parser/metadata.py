"""The full description envelope and the state catalog built from it."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from dmi_tools.errors import CellLookupError, FormatError, StateNotFoundError
from dmi_tools.types import (
    Direction,
    DirectionCount,
    Header,
    State,
    StateReference,
    SUPPORTED_VERSION,
    Value,
)

from .key_value import Key, KeyValue, parse_key_value
from .state import parse_state

logger = logging.getLogger(__name__)

BEGIN_MARKER = "# BEGIN DMI"
END_MARKER = "# END DMI"

_INDENT = re.compile(r"[ \t]+")


def direction_slot(directions: DirectionCount, direction: Direction) -> int:
    """Slot of a direction within a state's block of cells.

    Directions a state is not drawn for fall back to slot 0.
    """
    if directions is DirectionCount.ONE:
        return 0
    slot = directions.slot_of(direction)
    if slot is None:
        logger.warning(
            "%s is not drawn for a %d-direction state, using slot 0",
            direction.name, directions.cardinality,
        )
        return 0
    return slot


@dataclass
class Metadata:
    """Parsed header plus an ordered catalog of states.

    States are kept in declaration order. Each state's starting cell is the
    running total of the cells used by every state before it; `index` maps a
    name to the catalog positions of all states with that name.
    """

    header: Header
    states: list[State] = field(default_factory=list)
    offsets: list[int] = field(default_factory=list)
    index: dict[str, list[int]] = field(default_factory=dict)

    @classmethod
    def build(cls, header: Header, states: list[State]) -> "Metadata":
        """Assign cell offsets and index names for a list of states."""
        offsets: list[int] = []
        index: dict[str, list[int]] = {}
        cursor = 0
        for position, state in enumerate(states):
            offsets.append(cursor)
            index.setdefault(state.name, []).append(position)
            cursor += state.cell_count
        return cls(header=header, states=list(states), offsets=offsets, index=index)

    def __len__(self) -> int:
        return len(self.states)

    @property
    def is_empty(self) -> bool:
        return not self.states

    @property
    def total_cells(self) -> int:
        """Number of cells addressed by all states."""
        if not self.states:
            return 0
        return self.offsets[-1] + self.states[-1].cell_count

    @property
    def names(self) -> list[str]:
        """Distinct state names in order of first appearance."""
        return list(self.index)

    def entries(self) -> Iterator[tuple[StateReference, int, State]]:
        """Iterate (reference, offset, state) in declaration order."""
        seen: dict[str, int] = {}
        for offset, state in zip(self.offsets, self.states):
            occurrence = seen.get(state.name, 0)
            seen[state.name] = occurrence + 1
            yield StateReference(occurrence, state.name), offset, state

    def find_state(self, ref: StateReference) -> Optional[tuple[int, State]]:
        """Resolve a reference to (offset, state), or None if unknown."""
        positions = self.index.get(ref.name)
        if positions is None or not 0 <= ref.occurrence < len(positions):
            return None
        position = positions[ref.occurrence]
        return self.offsets[position], self.states[position]

    def get_state(self, ref: StateReference) -> tuple[int, State]:
        """Resolve a reference to (offset, state).

        Raises:
            StateNotFoundError: If no such occurrence exists.
        """
        found = self.find_state(ref)
        if found is None:
            raise StateNotFoundError(f"Icon state {ref} not found")
        return found

    def get_duplicate_states(self, name: str) -> Optional[list[tuple[int, State]]]:
        """Every occurrence of a name as (offset, state), or None if unknown."""
        positions = self.index.get(name)
        if positions is None:
            return None
        return [(self.offsets[p], self.states[p]) for p in positions]

    def get_index_of_dir(self, ref: StateReference, direction: Direction) -> int:
        """Absolute cell index of a direction's first frame."""
        return self.get_index_of_frame(ref, direction, 0)

    def get_index_of_frame(self, ref: StateReference, direction: Direction, frame: int) -> int:
        """Absolute cell index of one direction of one frame.

        Raises:
            StateNotFoundError: If the reference is unknown.
            CellLookupError: If the frame does not exist.
        """
        offset, state = self.get_state(ref)
        if not 0 <= frame < state.frame_count:
            raise CellLookupError(
                f"Frame {frame} out of range for icon state {ref} "
                f"with {state.frame_count} frames"
            )
        slot = direction_slot(state.directions, direction)
        return offset + slot + frame * state.directions.cardinality


@dataclass
class _Line:
    number: int
    indented: bool
    kv: KeyValue


def _tokenize(lines: list[str], first_number: int) -> list[_Line]:
    tokens = []
    for number, text in enumerate(lines, start=first_number):
        indent = _INDENT.match(text)
        body = text[indent.end():] if indent else text
        tokens.append(_Line(number, indent is not None, parse_key_value(body, line=number)))
    return tokens


def _blocks(tokens: list[_Line]) -> Iterator[tuple[KeyValue, list[KeyValue]]]:
    """Group lines into a head line plus its indented body."""
    head: Optional[_Line] = None
    body: list[KeyValue] = []
    for token in tokens:
        if token.indented:
            if head is None:
                raise FormatError("Indented line outside a block", line=token.number)
            body.append(token.kv)
            continue
        if head is not None:
            yield _checked(head, body)
        head, body = token, []
    if head is not None:
        yield _checked(head, body)


def _checked(head: _Line, body: list[KeyValue]) -> tuple[KeyValue, list[KeyValue]]:
    if not body:
        raise FormatError(f"`{head.kv.name}` block has no properties", line=head.number)
    return head.kv, body


def parse_header(head: KeyValue, body: list[KeyValue]) -> Header:
    """Validate the `version` block.

    Raises:
        FormatError: On a wrong version, a missing size or a misplaced key.
    """
    if head.key is not Key.VERSION:
        raise FormatError("Expected `version` first", line=head.line, fragment=head.name)
    if head.value != SUPPORTED_VERSION:
        raise FormatError(
            f"Version {head.value} not supported, only {SUPPORTED_VERSION}", line=head.line
        )

    width: Optional[int] = None
    height: Optional[int] = None
    extra: dict[str, Value] = {}
    for kv in body:
        if kv.key is Key.WIDTH:
            width = kv.value
        elif kv.key is Key.HEIGHT:
            height = kv.value
        elif kv.key is Key.UNKNOWN:
            extra[kv.name] = kv.value
        else:
            raise FormatError(f"`{kv.name}` not allowed in the header", line=kv.line)

    if width is None:
        raise FormatError("Required field `width` was not found", line=head.line)
    if height is None:
        raise FormatError("Required field `height` was not found", line=head.line)
    if width == 0 or height == 0:
        raise FormatError("Cell size must be non-zero", line=head.line)
    return Header(version=head.value, cell_width=width, cell_height=height, extra=extra)


def parse(text: str) -> Metadata:
    """Parse a complete description.

    Args:
        text: Description text, from `# BEGIN DMI` to `# END DMI`.

    Returns:
        The Metadata catalog.

    Raises:
        FormatError: If the text does not follow the grammar.
    """
    lines = text.splitlines()
    if not lines or lines[0] != BEGIN_MARKER:
        raise FormatError(f"Expected {BEGIN_MARKER!r}", line=1, fragment=lines[0] if lines else "")

    try:
        end = lines.index(END_MARKER, 1)
    except ValueError:
        raise FormatError(f"Missing {END_MARKER!r}") from None
    trailing = [n for n, line in enumerate(lines[end + 1:], start=end + 2) if line.strip()]
    if trailing:
        raise FormatError(
            f"Unexpected content after {END_MARKER!r}", line=trailing[0], fragment=lines[trailing[0] - 1]
        )

    blocks = list(_blocks(_tokenize(lines[1:end], first_number=2)))
    if not blocks:
        raise FormatError("Missing header block", line=2)

    header = parse_header(*blocks[0])
    states = [parse_state(head, body) for head, body in blocks[1:]]
    metadata = Metadata.build(header, states)
    logger.debug(
        "Parsed %d states (%d names) spanning %d cells",
        len(metadata), len(metadata.index), metadata.total_cells,
    )
    return metadata
