"""Value literals of the description grammar.

Each primitive takes the remaining input and returns ``(value, rest)`` on a
match, or ``None`` when the input does not start with that literal. A
``FormatError`` is raised only for input that commits to a literal and then
breaks it.
"""

from __future__ import annotations

import re
from typing import Optional

import numpy as np

from dmi_tools.errors import FormatError
from dmi_tools.types import Value

_DIGITS = re.compile(r"\d+")
_DECIMAL = re.compile(r"\d+\.\d+")
_LIST_ELEMENT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

U32_MAX = 2**32 - 1


def string(text: str) -> Optional[tuple[str, str]]:
    """Match a double-quoted string. No escapes: any non-quote is literal."""
    if not text.startswith('"'):
        return None
    end = text.find('"', 1)
    if end == -1:
        raise FormatError("Unterminated string", fragment=text)
    return text[1:end], text[end + 1:]


def atom_float(text: str) -> Optional[tuple[float, str]]:
    """Match ``<digits>.<digits>``."""
    match = _DECIMAL.match(text)
    if match is None:
        return None
    return float(match.group()), text[match.end():]


def atom_int(text: str) -> Optional[tuple[int, str]]:
    match = _DIGITS.match(text)
    if match is None:
        return None
    value = int(match.group())
    if value > U32_MAX:
        raise FormatError("Integer out of range", fragment=match.group())
    return value, text[match.end():]


def atom_list(text: str) -> Optional[tuple[tuple[float, ...], str]]:
    """Match a comma separated float list of at least two elements.

    A lone number is not a list. Once a separator has been seen, every
    separator must be followed by an element.
    """
    match = _LIST_ELEMENT.match(text)
    if match is None or not text[match.end():].startswith(","):
        return None

    items = [float(match.group())]
    rest = text[match.end():]
    while rest.startswith(","):
        match = _LIST_ELEMENT.match(rest, 1)
        if match is None:
            raise FormatError("Expected a number after ','", fragment=rest)
        items.append(float(match.group()))
        rest = rest[match.end():]
    return tuple(items), rest


def atom(text: str) -> Optional[tuple[Value, str]]:
    """Match any value literal, most specific first."""
    for parser in (atom_list, atom_float, atom_int, string):
        result = parser(text)
        if result is not None:
            return result
    return None


def format_value(value: Value) -> str:
    """Render a value back into description syntax."""
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, tuple):
        return ",".join(_format_number(item) for item in value)
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def _format_float(number: float) -> str:
    """Shortest exact ``d.d`` form; the grammar has no exponent notation."""
    return np.format_float_positional(number, trim="0")


def _format_number(number: float) -> str:
    if number == int(number):
        return str(int(number))
    return _format_float(number)
