"""Text wrapping and formatting for styled terminal output.

ANSI-aware word wrapping that reopens active styling on every continuation
line, handles wide (CJK, emoji) characters by display column, and can clip
overlong lines with an ellipsis.

Truncation works per code point, not per grapheme cluster: a clip can land
inside a ZWJ emoji sequence such as a family emoji.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from streamdown.ansi.codes import ELLIPSIS, RESET
from streamdown.ansi.sgr import ansi_collapse
from streamdown.ansi.utils import (
    extract_ansi_codes,
    extract_escape,
    visible,
    visible_length,
)
from streamdown.ansi.width import CharWidth, text_width, wcwidth_char

logger = logging.getLogger(__name__)


@dataclass
class WrappedText:
    """Result of wrapping text: the finished lines and whether any was clipped."""

    lines: list[str] = field(default_factory=list)
    truncated: bool = False

    @classmethod
    def empty(cls) -> WrappedText:
        return cls()

    def is_empty(self) -> bool:
        return not self.lines

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)


# ---------------------------------------------------------------------------
# split_text
# ---------------------------------------------------------------------------


def split_text(text: str) -> list[str]:
    """Split *text* into words, keeping escape sequences inside the words.

    Each word is any leading escapes, a run of visible non-whitespace
    characters, and the whitespace run that follows it, so joining the words
    gives back the input (minus any whitespace at the very start).

    >>> split_text("hello  world")
    ['hello  ', 'world']
    """
    words: list[str] = []
    current: list[str] = []
    i = 0

    while i < len(text):
        extracted = extract_escape(text, i)
        if extracted is not None:
            code, length = extracted
            current.append(code)
            i += length
            continue

        ch = text[i]
        if not ch.isspace():
            current.append(ch)
            i += 1
            continue

        end = i
        while end < len(text) and text[end].isspace():
            end += 1
        # Leading whitespace belongs to no word
        if current or words:
            current.append(text[i:end])
            words.append("".join(current))
            current = []
        i = end

    if current:
        words.append("".join(current))

    return words


# ---------------------------------------------------------------------------
# text_wrap
# ---------------------------------------------------------------------------


def text_wrap(
    text: str,
    width: int,
    indent: int = 0,
    first_prefix: str = "",
    next_prefix: str = "",
    force_truncate: bool = False,
    preserve_format: bool = False,
    *,
    char_width: CharWidth = wcwidth_char,
) -> WrappedText:
    """Wrap *text* to fit within *width* display columns.

    ANSI-aware: the styling active at a line break is collapsed and reopened at
    the start of the next line.

    Args:
        text: The text to wrap, possibly containing escape sequences.
        width: Target width in columns. ``0`` returns *text* unchanged.
        indent: Spaces placed before continuation lines.
        first_prefix: Prefix for the first line (counts toward *width*).
        next_prefix: Prefix for every following line.
        force_truncate: Clip lines wider than *width* and end them with ``…``.
        preserve_format: Do not append a reset at the end of each line.
        char_width: Width of a single code point.

    Returns:
        The wrapped lines. Every line but the last is padded to *width*.
    """
    if width <= 0:
        return WrappedText([text], truncated=False)

    first_prefix_width = visible_length(first_prefix, char_width=char_width)
    next_prefix_width = visible_length(next_prefix, char_width=char_width)
    resetter = "" if preserve_format else RESET

    lines: list[str] = []
    truncated = False
    current_style: list[str] = []
    current_line = ""
    line_width = 0
    placed = False

    for word in split_text(text):
        word_width = visible_length(word, char_width=char_width)
        prefix_width = first_prefix_width if not lines else next_prefix_width
        available = max(width - prefix_width, 0)

        if word_width == 0 or not placed or line_width + word_width <= available:
            current_line += word
            line_width += word_width
            placed = placed or word_width > 0
        else:
            prefix = first_prefix if not lines else next_prefix
            line, clipped = _finish_line(
                prefix,
                current_line,
                width,
                resetter,
                force_truncate,
                pad=True,
                char_width=char_width,
            )
            truncated = truncated or clipped
            if line is not None:
                lines.append(line)

            # Style from before this word; the word carries its own codes
            current_line = " " * indent + "".join(current_style) + word
            line_width = indent + word_width
            placed = True

        current_style = ansi_collapse(current_style + extract_ansi_codes(word))

    if current_line:
        prefix = first_prefix if not lines else next_prefix
        line, clipped = _finish_line(
            prefix,
            current_line,
            width,
            resetter,
            force_truncate,
            pad=False,
            char_width=char_width,
        )
        truncated = truncated or clipped
        if line is not None:
            lines.append(line)

    return WrappedText(lines, truncated)


def _finish_line(
    prefix: str,
    content: str,
    width: int,
    resetter: str,
    force_truncate: bool,
    pad: bool,
    char_width: CharWidth,
) -> tuple[str | None, bool]:
    """Prefix, clip, reset and pad one line.

    Returns ``(line, clipped)``; ``line`` is ``None`` when the line has no
    visible non-space character. A padded line counts its prefix, the
    trailing line only its content.
    """
    line = prefix + content
    if not visible(line if pad else content).strip():
        logger.debug("Dropping formatting-only line %r", line)
        return None, False

    clipped = False
    if force_truncate and visible_length(line, char_width=char_width) > width:
        line = truncate_to_visible(line, width - 1, char_width=char_width) + ELLIPSIS
        clipped = True
        logger.debug("Clipped line to %d columns", width)

    line_width = visible_length(line, char_width=char_width)
    line += resetter
    if pad and line_width < width:
        line += " " * (width - line_width)

    return line, clipped


# ---------------------------------------------------------------------------
# truncate_to_visible
# ---------------------------------------------------------------------------


def truncate_to_visible(
    text: str,
    max_visible: int,
    *,
    char_width: CharWidth = wcwidth_char,
) -> str:
    """Return the longest prefix of *text* that fits in *max_visible* columns.

    Escape sequences are zero-width and copied whole. A wide character that
    would cross the limit is left out rather than overshooting it.
    """
    result: list[str] = []
    count = 0
    i = 0

    while i < len(text):
        extracted = extract_escape(text, i)
        if extracted is not None:
            code, length = extracted
            result.append(code)
            i += length
            continue

        ch = text[i]
        w = char_width(ch)
        if count + w > max_visible:
            break
        result.append(ch)
        count += w
        i += 1

    return "".join(result)


# ---------------------------------------------------------------------------
# simple_wrap
# ---------------------------------------------------------------------------


def simple_wrap(
    text: str,
    width: int,
    *,
    char_width: CharWidth = wcwidth_char,
) -> list[str]:
    """Greedy word wrap for plain text; escape sequences are not recognized.

    Whitespace runs collapse to a single space. Words wider than *width* get a
    line of their own.
    """
    if width <= 0 or not text:
        return [text]

    lines: list[str] = []
    current = ""
    current_width = 0

    for word in text.split():
        word_width = text_width(word, char_width)
        if not current:
            current = word
            current_width = word_width
        elif current_width + 1 + word_width <= width:
            current += " " + word
            current_width += 1 + word_width
        else:
            lines.append(current)
            current = word
            current_width = word_width

    if current:
        lines.append(current)

    if not lines:
        lines.append("")

    return lines
