"""Data models for license-render."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from .exceptions import ParseEncodingError


@dataclass(frozen=True)
class StartElement:
    """An element start tag.

    Attributes:
        name: Local name of the element.
    """

    name: str


@dataclass(frozen=True)
class EndElement:
    """An element end tag.

    Attributes:
        name: Local name of the element.
    """

    name: str


@dataclass(frozen=True)
class Text:
    """A run of character data with entities already unescaped.

    Attributes:
        content: Decoded text.
    """

    content: str


@dataclass(frozen=True)
class EndOfStream:
    """Marks the end of the markup stream."""


MarkupEvent = Union[StartElement, EndElement, Text, EndOfStream]


class LineEnding(Enum):
    """Line-ending convention used for every break the renderer writes.

    Attributes:
        UNIX: Line feed.
        WINDOWS: Carriage return followed by line feed.
    """

    UNIX = "\n"
    WINDOWS = "\r\n"

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: str) -> LineEnding:
        """Look up a line ending by its lowercase name.

        Args:
            value: ``"unix"`` or ``"windows"``.

        Returns:
            LineEnding: The matching member.

        Raises:
            ParseEncodingError: If the name is not recognized.

        Examples:
            LineEnding.parse("windows")  # LineEnding.WINDOWS
        """
        try:
            return cls[value.upper()]
        except KeyError as error:
            raise ParseEncodingError(f"Unrecognized line ending: {value!r}") from error


class WriterState(Enum):
    """States a section writer moves through while consuming events.

    Attributes:
        AWAITING_START: Start event not consumed yet.
        INSIDE: Consuming the element's content.
        DONE: Closing event observed.
        FAILED: Stream ended before the closing event.
    """

    AWAITING_START = auto()
    INSIDE = auto()
    DONE = auto()
    FAILED = auto()


@dataclass
class WrapCursor:
    """Per-paragraph wrapping state.

    Attributes:
        current_line_width: Characters written on the current line.
        pending_space: Whether the next word needs a separating space.
    """

    current_line_width: int = 0
    pending_space: bool = False
