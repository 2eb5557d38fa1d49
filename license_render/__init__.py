"""
license-render: render license XML documents as wrapped plain text.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    license-render MIT.xml --format plain,72 --out LICENSE

Library Usage:
    from license_render import RenderConfig, render

    with open("MIT.xml", "rb") as source, open("LICENSE", "wb") as sink:
        render(source, sink, RenderConfig(line_width=72))
"""

from .config import ConfigError, RenderConfig, build_config, load_config
from .exceptions import (
    MarkupSyntaxError,
    ParseEncodingError,
    RenderError,
    SinkWriteError,
    UnimplementedEncodingError,
    UnterminatedElementError,
)
from .formats import Html, Markdown, OutputEncoding, Plain, format_encoding, parse_encoding
from .models import EndElement, EndOfStream, LineEnding, MarkupEvent, StartElement, Text
from .reader import MarkupEventReader, iter_events
from .renderer import render, render_file, render_to_bytes
from .wrapping import LineWrapper, wrap_words

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "render",
    "render_to_bytes",
    "render_file",
    "wrap_words",
    "LineWrapper",
    "MarkupEventReader",
    "iter_events",
    # Configuration
    "RenderConfig",
    "build_config",
    "load_config",
    # Data models
    "MarkupEvent",
    "StartElement",
    "EndElement",
    "Text",
    "EndOfStream",
    "LineEnding",
    "OutputEncoding",
    "Plain",
    "Markdown",
    "Html",
    "parse_encoding",
    "format_encoding",
    # Exceptions
    "ConfigError",
    "RenderError",
    "MarkupSyntaxError",
    "UnterminatedElementError",
    "UnimplementedEncodingError",
    "SinkWriteError",
    "ParseEncodingError",
    # Version
    "__version__",
]
