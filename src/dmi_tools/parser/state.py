"""Builds a State from one `state = "..."` block."""

from __future__ import annotations

import logging
from typing import Optional

from dmi_tools.errors import FormatError
from dmi_tools.types import DirectionCount, FrameSpec, State, Value

from .key_value import Key, KeyValue

logger = logging.getLogger(__name__)


def parse_state(head: KeyValue, body: list[KeyValue]) -> State:
    """Validate a state block.

    Args:
        head: The `state` line; its value is the state name.
        body: The indented lines that follow, in source order.

    Returns:
        The State record.

    Raises:
        FormatError: If a field is missing, repeated, malformed or does not
            belong in a state.
    """
    if head.key is not Key.STATE:
        raise FormatError("Expected a `state` line", line=head.line, fragment=head.name)
    name: str = head.value

    directions: Optional[DirectionCount] = None
    frames: Optional[int] = None
    frames_line: Optional[int] = None
    delays: Optional[tuple[float, ...]] = None
    loop = rewind = movement = False
    hotspot: Optional[tuple[float, float, float]] = None
    extra: dict[str, Value] = {}

    for kv in body:
        if kv.key is Key.DIRS:
            directions = kv.value
        elif kv.key is Key.FRAMES:
            if frames is not None:
                raise FormatError(f"Duplicate `frames` in state {name!r}", line=kv.line)
            if kv.value < 1:
                raise FormatError(f"`frames` must be at least 1 in state {name!r}", line=kv.line)
            frames = kv.value
            frames_line = kv.line
        elif kv.key is Key.DELAY:
            if delays is not None:
                raise FormatError(f"Duplicate `delay` in state {name!r}", line=kv.line)
            delays = kv.value
        elif kv.key is Key.LOOP:
            loop = kv.value
        elif kv.key is Key.REWIND:
            rewind = kv.value
        elif kv.key is Key.MOVEMENT:
            movement = kv.value
        elif kv.key is Key.HOTSPOT:
            if len(kv.value) != 3:
                raise FormatError(
                    f"Hotspot needs 3 values, got {len(kv.value)}", line=kv.line
                )
            hotspot = (kv.value[0], kv.value[1], kv.value[2])
        elif kv.key is Key.UNKNOWN:
            extra[kv.name] = kv.value
        else:
            raise FormatError(f"`{kv.name}` not allowed in a state", line=kv.line)

    if directions is None:
        raise FormatError(f"Required field `dirs` not found in state {name!r}", line=head.line)

    if delays is not None:
        if frames is None:
            raise FormatError(f"Found `delay` without `frames` in state {name!r}", line=head.line)
        if len(delays) != frames:
            logger.warning(
                "State %r declares %d frames on line %s but lists %d delays; using the delays",
                name, frames, frames_line, len(delays),
            )
        frame_spec = FrameSpec.from_delays(list(delays))
    else:
        frame_spec = FrameSpec(frames or 1)

    return State(
        name=name,
        directions=directions,
        frames=frame_spec,
        loop=loop,
        rewind=rewind,
        movement=movement,
        hotspot=hotspot,
        extra=extra,
    )
