"""Compass directions and per-state direction counts."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Direction(Enum):
    """The eight facings, encoded as bit flags.

    Cardinals own one bit each; diagonals are the OR of two cardinals.
    """

    NORTH = 1
    SOUTH = 2
    EAST = 4
    WEST = 8
    NORTHEAST = 5
    NORTHWEST = 9
    SOUTHEAST = 6
    SOUTHWEST = 10

    @classmethod
    def from_int(cls, value: int) -> Optional["Direction"]:
        """Build a direction from its integer encoding.

        Args:
            value: Bit-flag encoding.

        Returns:
            The matching Direction, or None for unrecognized values.
        """
        try:
            return cls(value)
        except ValueError:
            return None

    def to_int(self) -> int:
        return self.value

    def contains(self, other: "Direction") -> bool:
        """Check whether the two directions share a bit."""
        return self.value & other.value != 0

    @property
    def is_diagonal(self) -> bool:
        return self not in CARDINALS

    @property
    def offset(self) -> tuple[int, int]:
        """Unit step in map coordinates (north is +y)."""
        return _OFFSETS[self]

    def flip(self) -> "Direction":
        return _FLIP[self]

    def flip_ns(self) -> "Direction":
        return _FLIP_NS[self]

    def flip_ew(self) -> "Direction":
        return _FLIP_EW[self]

    def clockwise_45(self) -> "Direction":
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 1) % 8]

    def counterclockwise_45(self) -> "Direction":
        return _CLOCKWISE[(_CLOCKWISE.index(self) - 1) % 8]

    def clockwise_90(self) -> "Direction":
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 2) % 8]

    def counterclockwise_90(self) -> "Direction":
        return _CLOCKWISE[(_CLOCKWISE.index(self) - 2) % 8]


CARDINALS: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.EAST,
    Direction.WEST,
)

DIAGONALS: tuple[Direction, ...] = (
    Direction.NORTHEAST,
    Direction.NORTHWEST,
    Direction.SOUTHEAST,
    Direction.SOUTHWEST,
)

ALL_DIRECTIONS: tuple[Direction, ...] = CARDINALS + DIAGONALS

# Compass order, used for the 45/90 degree rotations
_CLOCKWISE: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.NORTHEAST,
    Direction.EAST,
    Direction.SOUTHEAST,
    Direction.SOUTH,
    Direction.SOUTHWEST,
    Direction.WEST,
    Direction.NORTHWEST,
)

_FLIP: dict[Direction, Direction] = {
    d: Direction(((d.value & 0b0101) << 1) | ((d.value & 0b1010) >> 1))
    for d in Direction
}

_FLIP_NS: dict[Direction, Direction] = {
    d: Direction((d.value & 0b1100) | ((d.value & 1) << 1) | ((d.value & 2) >> 1))
    for d in Direction
}

_FLIP_EW: dict[Direction, Direction] = {
    d: Direction((d.value & 0b0011) | ((d.value & 4) << 1) | ((d.value & 8) >> 1))
    for d in Direction
}

_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.SOUTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
    Direction.NORTHEAST: (1, 1),
    Direction.NORTHWEST: (-1, 1),
    Direction.SOUTHEAST: (1, -1),
    Direction.SOUTHWEST: (-1, -1),
}


class DirectionCount(Enum):
    """How many directions a state is drawn for."""

    ONE = 1
    FOUR = 4
    EIGHT = 8

    @classmethod
    def from_int(cls, value: int) -> "DirectionCount":
        """Convert a `dirs` value.

        Raises:
            ValueError: If the value is not 1, 4 or 8.
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid value {value} for dirs") from None

    @property
    def cardinality(self) -> int:
        return self.value

    @property
    def ordered(self) -> tuple[Direction, ...]:
        """Directions in sprite-sheet slot order."""
        return SLOT_ORDER[: self.value]

    def slot_of(self, direction: Direction) -> Optional[int]:
        """Slot of a direction within this count, or None if not drawn."""
        ordered = self.ordered
        if direction in ordered:
            return ordered.index(direction)
        return None


# Order in which a state's directions are stored in the sheet
SLOT_ORDER: tuple[Direction, ...] = (
    Direction.SOUTH,
    Direction.NORTH,
    Direction.EAST,
    Direction.WEST,
    Direction.SOUTHEAST,
    Direction.SOUTHWEST,
    Direction.NORTHEAST,
    Direction.NORTHWEST,
)
