"""Render license markup into the selected output encoding."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from .config import RenderConfig, normalize_config, validate_config
from .constants import COPYRIGHT_ELEMENT, PARAGRAPH_ELEMENT, TEXT_ELEMENT, TITLE_ELEMENT
from .exceptions import UnimplementedEncodingError
from .filesystem import (
    atomic_write,
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    safe_open_binary,
)
from .formats import OutputEncoding, Plain, format_encoding
from .models import EndOfStream, StartElement
from .reader import EventSource, MarkupEventReader
from .writers import (
    ElementScope,
    SinkWriter,
    skip_element,
    write_copyright,
    write_paragraph,
    write_title,
)

logger = logging.getLogger(__name__)


def _write_plain_text(
    events: EventSource, out: SinkWriter, config: RenderConfig, encoding: Plain
) -> None:
    for event in ElementScope(events, TEXT_ELEMENT):
        if not isinstance(event, StartElement):
            continue
        if event.name == TITLE_ELEMENT:
            write_title(events, out, encoding.line_ending)
        elif event.name == COPYRIGHT_ELEMENT:
            if config.emit_copyright:
                write_copyright(events, out, encoding.line_ending, config)
            else:
                logger.debug("Skipping <%s>", COPYRIGHT_ELEMENT)
                skip_element(events, COPYRIGHT_ELEMENT)
        elif event.name == PARAGRAPH_ELEMENT:
            write_paragraph(events, out, encoding.line_ending, encoding.line_width)


def _render_plain(
    events: EventSource, out: SinkWriter, config: RenderConfig, encoding: Plain
) -> None:
    while True:
        event = events.next_event()
        if isinstance(event, EndOfStream):
            return
        if isinstance(event, StartElement) and event.name == TEXT_ELEMENT:
            logger.debug("Found <%s> container", TEXT_ELEMENT)
            _write_plain_text(events, out, config, encoding)


Renderer = Callable[[EventSource, SinkWriter, RenderConfig, OutputEncoding], None]

# Markdown and Html are selectable but have no renderer yet.
RENDERERS: dict[type, Renderer] = {
    Plain: _render_plain,
}


def render(
    events: EventSource | bytes | BinaryIO,
    sink: BinaryIO,
    config: RenderConfig | None = None,
    encoding: OutputEncoding | None = None,
) -> None:
    """Render a license document to `sink`.

    Looks for the document's ``<text>`` container and renders its title,
    copyright notice (unless disabled) and paragraphs. Nothing is read or
    written when the encoding has no renderer.

    Args:
        events: Event source with a `next_event` method, or raw document bytes
            or a binary file object to read events from.
        sink: Binary file object receiving UTF-8 output through sequential writes.
        config: Render configuration. Defaults to a new `RenderConfig`.
        encoding: Output encoding. Defaults to the one `config` selects.

    Returns:
        None.

    Raises:
        ConfigError: If the configuration fails validation.
        UnimplementedEncodingError: If the encoding is Markdown or Html.
        MarkupSyntaxError: If the document is malformed, including
            `UnterminatedElementError` when it ends inside an element.
        SinkWriteError: If `sink` rejects a write. Output already written is
            left in place.

    Examples:
        with open("MIT.xml", "rb") as source, open("LICENSE", "wb") as sink:
            render(source, sink, RenderConfig(line_width=72))
    """
    config = normalize_config(config or RenderConfig())
    validate_config(config)
    encoding = encoding or config.encoding()

    renderer = RENDERERS.get(type(encoding))
    if renderer is None:
        raise UnimplementedEncodingError(encoding.name)

    if not hasattr(events, "next_event"):
        events = MarkupEventReader(events)

    logger.debug("Rendering with encoding %s", format_encoding(encoding))
    renderer(events, SinkWriter(sink), config, encoding)


def render_to_bytes(
    events: EventSource | bytes | BinaryIO,
    config: RenderConfig | None = None,
    encoding: OutputEncoding | None = None,
) -> bytes:
    """Render a license document and return the output bytes.

    Examples:
        render_to_bytes(b"<text><p>Hello</p></text>")  # b"Hello\\n\\n"
    """
    buffer = io.BytesIO()
    render(events, buffer, config, encoding)
    return buffer.getvalue()


def render_file(
    input_path: Path,
    output_path: Path,
    config: RenderConfig | None = None,
    encoding: OutputEncoding | None = None,
    max_file_size: int | None = None,
) -> None:
    """Render a license document file into `output_path`.

    The output file is only created or replaced when rendering succeeds.

    Args:
        input_path: License markup document.
        output_path: Destination of the rendered text.
        config: Render configuration. Defaults to a new `RenderConfig`.
        encoding: Output encoding. Defaults to the one `config` selects.
        max_file_size: Maximum input size in bytes. Defaults to
            `get_max_file_size()`.

    Raises:
        IOError: If the input cannot be read, is too large, or the output
            cannot be written.
        RenderError: If rendering fails.
    """
    limit = get_max_file_size() if max_file_size is None else max_file_size
    enforce_file_size(collect_file_stat(input_path), limit, input_path)

    with safe_open_binary(input_path) as source:
        atomic_write(output_path, lambda sink: render(source, sink, config, encoding))
    logger.debug("Wrote %s", output_path)
