"""Icon state and header records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from .directions import DirectionCount

# A parsed right-hand side: int, float, string, or a float list
Value = Union[int, float, str, tuple[float, ...]]

SUPPORTED_VERSION = 4.0


@dataclass(frozen=True)
class FrameSpec:
    """Frame layout of a state.

    Either a bare frame count, or an explicit list of per-frame delays whose
    length is the frame count.
    """

    count: int = 1
    delays: Optional[tuple[float, ...]] = None

    def __post_init__(self):
        if self.delays is not None:
            object.__setattr__(self, "delays", tuple(self.delays))
            object.__setattr__(self, "count", len(self.delays))
        if self.count < 1:
            raise ValueError(f"A state needs at least one frame, got {self.count}")

    @classmethod
    def from_delays(cls, delays: list[float]) -> "FrameSpec":
        return cls(len(delays), tuple(delays))

    def delay_of(self, frame: int, default: float = 1.0) -> float:
        """Delay of a frame in container units, or `default` if not listed."""
        if self.delays is None or frame >= len(self.delays):
            return default
        return self.delays[frame]


@dataclass(frozen=True)
class State:
    """One named animation unit of a sprite sheet."""

    name: str
    directions: DirectionCount
    frames: FrameSpec = field(default_factory=FrameSpec)
    loop: bool = False
    rewind: bool = False
    movement: bool = False
    hotspot: Optional[tuple[float, float, float]] = None
    extra: dict[str, Value] = field(default_factory=dict)

    @property
    def frame_count(self) -> int:
        return self.frames.count

    @property
    def delays(self) -> Optional[tuple[float, ...]]:
        return self.frames.delays

    @property
    def is_animated(self) -> bool:
        return self.frames.count > 1

    @property
    def cell_count(self) -> int:
        """Number of sheet cells the state occupies."""
        return self.directions.cardinality * self.frames.count


@dataclass(frozen=True)
class Header:
    """The `version` block of a description."""

    version: float
    cell_width: int
    cell_height: int
    extra: dict[str, Value] = field(default_factory=dict)


@dataclass(frozen=True)
class StateReference:
    """Addresses one occurrence of a possibly duplicated state name."""

    occurrence: int
    name: str

    @classmethod
    def first(cls, name: str) -> "StateReference":
        """Reference the first state with this name."""
        return cls(0, name)

    def __str__(self) -> str:
        return f"{self.occurrence}:{self.name}"
