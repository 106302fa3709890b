"""Simple ANSI-preserving wrap over :func:`split_up` segments."""

from __future__ import annotations

import re

from streamdown.ansi.codes import ESC
from streamdown.ansi.sgr import StyleState
from streamdown.ansi.utils import is_ansi_code, split_up
from streamdown.ansi.width import CharWidth, text_width, wcwidth_char

# Pieces of a text segment, each keeping the single space that ends it
_SPACE_PIECES = re.compile(r"[^ ]* |[^ ]+")


def wrap_ansi(
    text: str,
    width: int,
    *,
    char_width: CharWidth = wcwidth_char,
) -> list[str]:
    """Wrap *text* to *width* columns, carrying SGR state across lines.

    Breaks only after spaces; a piece wider than *width* overflows its line.
    Lines that end with styling active get a reset, and the next line reopens
    the collapsed style.
    """
    if width <= 0:
        return [text]

    lines: list[str] = []
    current_line = ""
    current_width = 0
    state = StyleState()

    for segment in split_up(text):
        if segment.startswith(ESC):
            if is_ansi_code(segment):
                state.apply(segment)
            current_line += segment
            continue

        for piece in _SPACE_PIECES.findall(segment):
            piece_width = text_width(piece, char_width)
            if current_width + piece_width > width and current_width > 0:
                lines.append(current_line + state.line_end_reset())
                current_line = state.prefix()
                current_width = 0

            current_line += piece
            current_width += piece_width

    if current_line or not lines:
        lines.append(current_line)

    return lines
