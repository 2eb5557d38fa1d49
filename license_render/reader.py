"""Pull-based markup event reader."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator
from typing import BinaryIO, Protocol
from xml.sax import SAXParseException
from xml.sax.handler import ContentHandler

import defusedxml.sax
from defusedxml import DefusedXmlException

from .constants import READ_CHUNK_SIZE
from .exceptions import MarkupSyntaxError
from .models import EndElement, EndOfStream, MarkupEvent, StartElement, Text

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    """Anything the renderer can pull markup events from."""

    def next_event(self) -> MarkupEvent: ...


def _local_name(name: str) -> str:
    return name.rpartition(":")[2]


class _EventCollector(ContentHandler):
    """Translate SAX callbacks into queued markup events.

    Adjacent character data is merged so that entity references never split a
    text run in two.
    """

    def __init__(self, queue: deque[MarkupEvent], trim_text: bool):
        super().__init__()
        self._queue = queue
        self._trim_text = trim_text
        self._chars: list[str] = []

    def _flush(self) -> None:
        if not self._chars:
            return
        content = "".join(self._chars)
        self._chars.clear()
        if self._trim_text:
            content = content.strip()
        if content:
            self._queue.append(Text(content))

    def startElement(self, name, attrs):
        self._flush()
        self._queue.append(StartElement(_local_name(name)))

    def endElement(self, name):
        self._flush()
        self._queue.append(EndElement(_local_name(name)))

    def characters(self, content):
        self._chars.append(content)

    def endDocument(self):
        self._flush()


class MarkupEventReader:
    """Forward-only reader producing markup events from a byte source.

    Bytes are pulled from `source` one chunk at a time and only when no parsed
    event is waiting, so a document is never loaded whole. The reader cannot be
    rewound; once the document ends every further call returns `EndOfStream`.

    Args:
        source: Raw document bytes or a binary file object.
        trim_text: Strip surrounding whitespace from text runs and drop runs
            that are whitespace only. Off by default so that runs keep the
            spaces separating them from inline elements.
        chunk_size: Number of bytes read from `source` per pull.

    Raises:
        MarkupSyntaxError: From `next_event` when the document is malformed or
            uses forbidden constructs such as entity declarations.

    Examples:
        reader = MarkupEventReader(b"<text><p>Hello &amp; bye</p></text>")
        reader.next_event()  # StartElement("text")
    """

    def __init__(
        self,
        source: bytes | BinaryIO,
        *,
        trim_text: bool = False,
        chunk_size: int = READ_CHUNK_SIZE,
    ):
        self._source = source
        self._offset = 0
        self._chunk_size = chunk_size
        self._queue: deque[MarkupEvent] = deque()
        self._parser = defusedxml.sax.make_parser()
        self._parser.setContentHandler(_EventCollector(self._queue, trim_text))
        self._started = False
        self._finished = False

    def _read_chunk(self) -> bytes:
        if isinstance(self._source, (bytes, bytearray, memoryview)):
            chunk = bytes(self._source[self._offset : self._offset + self._chunk_size])
            self._offset += len(chunk)
            return chunk
        return self._source.read(self._chunk_size)

    def _pull(self) -> None:
        chunk = self._read_chunk()
        try:
            if chunk or not self._started:
                self._started = True
                self._parser.feed(chunk)
            if not chunk:
                self._finished = True
                self._parser.close()
        except SAXParseException as error:
            self._finished = True
            raise MarkupSyntaxError(
                error.getMessage(), error.getLineNumber(), error.getColumnNumber()
            ) from error
        except DefusedXmlException as error:
            self._finished = True
            raise MarkupSyntaxError(f"Forbidden markup construct: {error}") from error

    def next_event(self) -> MarkupEvent:
        """Return the next event, reading more input when needed."""
        while not self._queue and not self._finished:
            self._pull()
        if self._queue:
            return self._queue.popleft()
        return EndOfStream()

    def __iter__(self) -> Iterator[MarkupEvent]:
        while True:
            event = self.next_event()
            if isinstance(event, EndOfStream):
                return
            yield event


class EventSequence:
    """Expose an iterable of already-built events through `next_event`.

    The sequence is terminated with `EndOfStream` whether or not the iterable
    contains one.
    """

    def __init__(self, events: Iterable[MarkupEvent]):
        self._events = iter(events)

    def next_event(self) -> MarkupEvent:
        return next(self._events, EndOfStream())


def iter_events(events: Iterable[MarkupEvent]) -> EventSequence:
    """Wrap `events` so the renderer can pull from them.

    Examples:
        render(iter_events([StartElement("text"), EndElement("text")]), sink, config)
    """
    return EventSequence(events)
