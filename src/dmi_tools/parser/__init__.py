"""Parser for the DMI description grammar."""

from .key_value import Key, KeyValue, parse_key_value
from .metadata import (
    Metadata,
    parse,
    parse_header,
    direction_slot,
    BEGIN_MARKER,
    END_MARKER,
)
from .state import parse_state
from .values import atom, format_value

__all__ = [
    "Key",
    "KeyValue",
    "parse_key_value",
    "Metadata",
    "parse",
    "parse_header",
    "parse_state",
    "direction_slot",
    "atom",
    "format_value",
    "BEGIN_MARKER",
    "END_MARKER",
]
