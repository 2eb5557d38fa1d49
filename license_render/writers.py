"""Section writers for the title, copyright notice, and body paragraphs."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import BinaryIO

from .config import RenderConfig
from .constants import COPYRIGHT_ELEMENT, PARAGRAPH_ELEMENT, TITLE_ELEMENT
from .exceptions import SinkWriteError, UnterminatedElementError
from .models import (
    EndElement,
    EndOfStream,
    LineEnding,
    MarkupEvent,
    StartElement,
    Text,
    WriterState,
)
from .reader import EventSource
from .wrapping import LineWrapper

logger = logging.getLogger(__name__)


class SinkWriter:
    """Append-only UTF-8 writer over a binary sink.

    Args:
        out: Binary file object opened for writing.

    Raises:
        SinkWriteError: From `write` when the sink rejects the data, for
            example because the disk is full or the handle is closed.
    """

    def __init__(self, out: BinaryIO):
        self._out = out

    def write(self, text: str) -> None:
        data = text.encode("utf-8")
        try:
            self._out.write(data)
        except (OSError, ValueError) as error:
            raise SinkWriteError(f"Could not write rendered output: {error}") from error


class ElementScope:
    """Events belonging to one element, ending at its closing tag.

    Created after the element's start event has been consumed. Iterating moves
    the scope from ``AWAITING_START`` to ``INSIDE`` and yields every event up
    to, but not including, the matching end event (state ``DONE``). Reaching
    the end of the stream first sets ``FAILED`` and raises.

    Raises:
        UnterminatedElementError: If the stream ends inside the element.
    """

    def __init__(self, events: EventSource, name: str):
        self.events = events
        self.name = name
        self.state = WriterState.AWAITING_START

    def __iter__(self) -> Iterator[MarkupEvent]:
        self.state = WriterState.INSIDE
        while True:
            event = self.events.next_event()
            if isinstance(event, EndOfStream):
                self.state = WriterState.FAILED
                raise UnterminatedElementError(self.name)
            if isinstance(event, EndElement) and event.name == self.name:
                self.state = WriterState.DONE
                return
            yield event


def _copy_verbatim(events: EventSource, out: SinkWriter, name: str, line_ending: LineEnding):
    # Whitespace at the edges of a run is markup indentation at the start of a
    # line, and a single separating space anywhere else.
    at_line_start = True
    pending_space = False
    for event in ElementScope(events, name):
        if isinstance(event, Text):
            content = event.content
            stripped = content.strip()
            if not stripped:
                pending_space = not at_line_start
                continue
            if pending_space or (content[0].isspace() and not at_line_start):
                out.write(" ")
            out.write(stripped)
            at_line_start = False
            pending_space = content[-1].isspace()
        elif isinstance(event, StartElement) and event.name == PARAGRAPH_ELEMENT:
            pending_space = False
        elif isinstance(event, EndElement) and event.name == PARAGRAPH_ELEMENT:
            out.write(line_ending.value * 2)
            at_line_start = True
            pending_space = False


def write_title(events: EventSource, out: SinkWriter, line_ending: LineEnding) -> None:
    """Copy the title text unwrapped, one blank line after each nested paragraph."""
    logger.debug("Writing <%s>", TITLE_ELEMENT)
    _copy_verbatim(events, out, TITLE_ELEMENT, line_ending)


def write_copyright(
    events: EventSource, out: SinkWriter, line_ending: LineEnding, config: RenderConfig
) -> None:
    """Copy the copyright notice unwrapped.

    The notice is written exactly as it appears in the document.
    `config.year` and `config.copyright_holder` are not substituted into it.
    """
    logger.debug("Writing <%s>", COPYRIGHT_ELEMENT)
    # TODO: substitute config.year and config.copyright_holder into the
    # <alt name="copyright"> placeholder of SPDX license documents.
    _copy_verbatim(events, out, COPYRIGHT_ELEMENT, line_ending)


def write_paragraph(
    events: EventSource, out: SinkWriter, line_ending: LineEnding, max_width: int
) -> None:
    """Wrap a body paragraph.

    Every text run inside the paragraph, including runs nested in inline
    elements, feeds the same wrapper, so the paragraph wraps as one stream of
    words.
    """
    wrapper = LineWrapper(out.write, max_width, line_ending)
    for event in ElementScope(events, PARAGRAPH_ELEMENT):
        if isinstance(event, Text):
            wrapper.feed(event.content)
    wrapper.finish()


def skip_element(events: EventSource, name: str) -> None:
    """Consume an element, nested elements of the same name included, writing nothing.

    Raises:
        UnterminatedElementError: If the stream ends inside the element.
    """
    depth = 1
    while depth:
        event = events.next_event()
        if isinstance(event, EndOfStream):
            raise UnterminatedElementError(name)
        if isinstance(event, StartElement) and event.name == name:
            depth += 1
        elif isinstance(event, EndElement) and event.name == name:
            depth -= 1
