"""Package-specific exception types."""

from __future__ import annotations


class RenderError(Exception):
    """Base class for errors raised while rendering a license document.

    A render is never resumed after one of these errors; callers restart from a
    fresh markup stream and a freshly opened sink.
    """


class MarkupSyntaxError(RenderError, ValueError):
    """Raised when the markup stream is not well-formed.

    Args:
        message: Description of the problem.
        line: One-based line number reported by the parser, if known.
        column: Zero-based column reported by the parser, if known.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class UnterminatedElementError(MarkupSyntaxError):
    """Raised when the stream ends before an element's closing tag.

    Args:
        element: Name of the element that was never closed.
    """

    def __init__(self, element: str):
        self.element = element
        super().__init__(f"Unexpected end of document inside <{element}>")


class UnimplementedEncodingError(RenderError, NotImplementedError):
    """Raised when the selected output encoding has no renderer.

    Args:
        encoding: Name of the requested encoding.
    """

    def __init__(self, encoding: str):
        self.encoding = encoding
        super().__init__(f"Output encoding '{encoding}' is not implemented yet")


class SinkWriteError(RenderError, OSError):
    """Raised when the output sink rejects a write."""


class ParseEncodingError(ValueError):
    """Raised when an output encoding string cannot be parsed."""
