"""Exception types raised by dmi_tools."""

from __future__ import annotations

from typing import Optional


class DMIError(Exception):
    """Base class for every error raised by this package."""


class FormatError(DMIError, ValueError):
    """The description text does not follow the DMI grammar.

    Args:
        message: What went wrong.
        line: 1-based line number of the offending line, if known.
        fragment: The offending text, if known.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        fragment: Optional[str] = None,
    ):
        self.message = message
        self.line = line
        self.fragment = fragment
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.line is not None:
            text = f"line {self.line}: {text}"
        if self.fragment is not None:
            text = f"{text} (at {self.fragment!r})"
        return text


class MissingDescriptionError(FormatError):
    """The image container carries no Description text chunk."""


class CellLookupError(DMIError, LookupError):
    """A requested state, direction or frame does not exist."""


class StateNotFoundError(CellLookupError):
    """A state reference does not resolve to any state in the catalog."""


class BoundsError(DMIError, ValueError):
    """A crop rectangle lies outside the source image."""


class RenderUsageError(DMIError, ValueError):
    """A render path was requested that does not fit the state."""
