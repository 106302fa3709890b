"""Display-width measurement for terminal cells.

Width is a pluggable capability: every measuring function in this package takes
a ``char_width`` callable mapping a single code point to 0, 1 or 2 columns. The
default is backed by :mod:`wcwidth`.
"""

from __future__ import annotations

from typing import Callable

import wcwidth as _wcwidth

CharWidth = Callable[[str], int]


def wcwidth_char(ch: str) -> int:
    """Return the column width of *ch*.

    Combining and zero-width code points are 0, East-Asian wide ones are 2.
    Control characters, which ``wcwidth`` reports as -1, count as 0.
    """
    w = _wcwidth.wcwidth(ch)
    return max(w, 0)


def _is_printable_ascii(text: str) -> bool:
    for ch in text:
        cp = ord(ch)
        if cp < 0x20 or cp > 0x7E:
            return False
    return True


def text_width(text: str, char_width: CharWidth = wcwidth_char) -> int:
    """Sum *char_width* over the code points of *text*.

    No escape handling happens here; callers strip escapes first.
    """
    if not text:
        return 0

    # Fast path: printable ASCII is one column per character
    if char_width is wcwidth_char and _is_printable_ascii(text):
        return len(text)

    return sum(char_width(ch) for ch in text)
