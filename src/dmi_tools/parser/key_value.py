"""`key = value` lines."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from dmi_tools.errors import FormatError
from dmi_tools.types import DirectionCount, Value

from .values import atom

_KEY = re.compile(r"[A-Za-z]+")
SEPARATOR = " = "


class Key(Enum):
    """Keys with a meaning in the grammar. Anything else is UNKNOWN."""

    VERSION = "version"
    WIDTH = "width"
    HEIGHT = "height"
    STATE = "state"
    DIRS = "dirs"
    FRAMES = "frames"
    DELAY = "delay"
    LOOP = "loop"
    REWIND = "rewind"
    MOVEMENT = "movement"
    HOTSPOT = "hotspot"
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, name: str) -> "Key":
        try:
            return cls(name)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class KeyValue:
    """A typed key/value pair.

    `value` holds the converted field value: float for VERSION, int for
    WIDTH/HEIGHT/FRAMES, str for STATE, DirectionCount for DIRS, a float
    tuple for DELAY/HOTSPOT, bool for LOOP/REWIND/MOVEMENT and the raw
    literal for UNKNOWN keys.
    """

    key: Key
    value: Any
    name: str  # key as written
    line: Optional[int] = None


def _as_list(value: Value) -> Optional[tuple[float, ...]]:
    if isinstance(value, tuple):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (float(value),)
    return None


def _combine(key: Key, value: Value) -> Any:
    """Check a literal against its key and convert it.

    Raises:
        ValueError: If the literal has the wrong type for the key.
    """
    if key is Key.VERSION and isinstance(value, float):
        return value
    if key in (Key.WIDTH, Key.HEIGHT, Key.FRAMES) and isinstance(value, int):
        return value
    if key is Key.STATE and isinstance(value, str):
        return value
    if key is Key.DIRS and isinstance(value, int):
        return DirectionCount.from_int(value)
    if key in (Key.LOOP, Key.REWIND, Key.MOVEMENT) and isinstance(value, int):
        return value > 0
    if key in (Key.DELAY, Key.HOTSPOT):
        items = _as_list(value)
        if items is not None:
            return items
    if key is Key.UNKNOWN:
        return value
    raise ValueError(f"Unexpected value {value!r} for key `{key.value}`")


def parse_key_value(text: str, line: Optional[int] = None) -> KeyValue:
    """Parse one `key = value` line (without indentation or newline).

    Args:
        text: The line content.
        line: 1-based line number, for error reporting.

    Returns:
        The typed KeyValue.

    Raises:
        FormatError: If the line is malformed or the value does not fit the key.
    """
    match = _KEY.match(text)
    if match is None:
        raise FormatError("Expected a key", line=line, fragment=text)
    name = match.group()
    rest = text[match.end():]

    if not rest.startswith(SEPARATOR):
        raise FormatError(f"Expected '{SEPARATOR.strip()}' after `{name}`", line=line, fragment=text)
    rest = rest[len(SEPARATOR):]

    try:
        result = atom(rest)
    except FormatError as e:
        raise FormatError(e.message, line=line, fragment=e.fragment) from None
    if result is None:
        raise FormatError(f"Expected a value for `{name}`", line=line, fragment=rest)
    raw, tail = result
    if tail:
        raise FormatError("Unexpected trailing text", line=line, fragment=tail)

    key = Key.from_name(name)
    try:
        value = _combine(key, raw)
    except ValueError as e:
        raise FormatError(str(e), line=line, fragment=text) from None
    return KeyValue(key=key, value=value, name=name, line=line)
