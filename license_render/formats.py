"""Output encodings and their string form (``plain,80,unix``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .constants import DEFAULT_LINE_WIDTH, ENCODING_ALIASES
from .exceptions import ParseEncodingError
from .models import LineEnding


@dataclass(frozen=True)
class Plain:
    """Plain text with word wrapping.

    Attributes:
        line_width: Maximum characters per wrapped line.
        line_ending: Line-ending convention.
    """

    line_width: int = DEFAULT_LINE_WIDTH
    line_ending: LineEnding = LineEnding.UNIX

    name = "plain"


@dataclass(frozen=True)
class Markdown:
    """Markdown output. Selectable but not rendered yet.

    Attributes:
        line_width: Maximum characters per wrapped line.
    """

    line_width: int = DEFAULT_LINE_WIDTH

    name = "markdown"


@dataclass(frozen=True)
class Html:
    """HTML output. Selectable but not rendered yet."""

    name = "html"


OutputEncoding = Union[Plain, Markdown, Html]


def _parse_width(value: str) -> int:
    try:
        width = int(value)
    except ValueError as error:
        raise ParseEncodingError(f"Invalid line width: {value!r}") from error
    if width <= 0:
        raise ParseEncodingError(f"Line width must be a positive integer, got {width}")
    return width


def parse_encoding(value: str) -> OutputEncoding:
    """Parse an output encoding from its comma-separated form.

    The first field names the encoding; the remaining fields are optional and
    fall back to defaults: ``plain[,WIDTH[,unix|windows]]``,
    ``markdown[,WIDTH]`` (alias ``md``) and ``html``.

    Args:
        value: Encoding string supplied by the user.

    Returns:
        OutputEncoding: The parsed encoding variant.

    Raises:
        ParseEncodingError: If the name is unknown, a field is invalid, or
            too many fields are given.

    Examples:
        parse_encoding("plain,72,windows")  # Plain(72, LineEnding.WINDOWS)
        parse_encoding("md")  # Markdown(80)
    """
    name, *fields = value.strip().split(",")
    name = ENCODING_ALIASES.get(name, name)

    if name == "plain":
        if len(fields) > 2:
            raise ParseEncodingError(f"Too many fields for plain encoding: {value!r}")
        line_width = _parse_width(fields[0]) if fields else DEFAULT_LINE_WIDTH
        line_ending = LineEnding.parse(fields[1]) if len(fields) > 1 else LineEnding.UNIX
        return Plain(line_width=line_width, line_ending=line_ending)

    if name == "markdown":
        if len(fields) > 1:
            raise ParseEncodingError(f"Too many fields for markdown encoding: {value!r}")
        return Markdown(line_width=_parse_width(fields[0]) if fields else DEFAULT_LINE_WIDTH)

    if name == "html":
        if fields:
            raise ParseEncodingError(f"The html encoding takes no fields: {value!r}")
        return Html()

    raise ParseEncodingError(f"Unrecognized output encoding: {value!r}")


def format_encoding(encoding: OutputEncoding) -> str:
    """Return the string form accepted by `parse_encoding`.

    Examples:
        format_encoding(Plain())  # "plain,80,unix"
    """
    if isinstance(encoding, Plain):
        return f"plain,{encoding.line_width},{encoding.line_ending}"
    if isinstance(encoding, Markdown):
        return f"markdown,{encoding.line_width}"
    return "html"
