"""Greedy word wrapping for paragraph text."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .models import LineEnding, WrapCursor


class LineWrapper:
    """Write words to a sink, breaking lines at a maximum width.

    Width is a count of characters (code points), separating spaces included.
    Words are never split: a word longer than `max_width` is written whole on a
    line of its own, and the word after it starts a new line.

    Args:
        write: Callable receiving each piece of output text.
        max_width: Maximum number of characters per line.
        line_ending: Sequence written for each break.

    Examples:
        parts = []
        wrapper = LineWrapper(parts.append, 10, LineEnding.UNIX)
        wrapper.feed("The quick brown fox")
        wrapper.finish()
        "".join(parts)  # "The quick\\nbrown fox\\n\\n"
    """

    def __init__(self, write: Callable[[str], object], max_width: int, line_ending: LineEnding):
        self._write = write
        self.max_width = max_width
        self.line_ending = line_ending
        self.cursor = WrapCursor()

    def feed(self, text: str) -> None:
        """Split `text` on runs of whitespace and add each word."""
        for word in text.split():
            self.add_word(word)

    def add_word(self, word: str) -> None:
        cursor = self.cursor
        if cursor.pending_space and (
            cursor.current_line_width >= self.max_width
            or cursor.current_line_width + 1 + len(word) > self.max_width
        ):
            self._write(self.line_ending.value)
            cursor.current_line_width = 0
            cursor.pending_space = False

        if cursor.pending_space:
            self._write(" ")
            cursor.current_line_width += 1

        self._write(word)
        cursor.current_line_width += len(word)
        cursor.pending_space = True

    def finish(self) -> None:
        """Terminate the paragraph with a blank line and reset the cursor."""
        self._write(self.line_ending.value * 2)
        self.cursor = WrapCursor()


def wrap_words(
    words: Iterable[str], max_width: int, line_ending: LineEnding = LineEnding.UNIX
) -> str:
    """Wrap `words` as one paragraph and return the text, terminator included.

    Examples:
        wrap_words(["aaa", "bbb"], 5)  # "aaa\\nbbb\\n\\n"
    """
    parts: list[str] = []
    wrapper = LineWrapper(parts.append, max_width, line_ending)
    for word in words:
        wrapper.feed(word)
    wrapper.finish()
    return "".join(parts)
