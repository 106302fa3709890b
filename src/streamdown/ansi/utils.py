"""ANSI escape scanning: visible text, display width and SGR parameters.

Provides functions for stripping escape sequences, measuring the visible
terminal width of styled text, extracting SGR codes for style tracking, and
splitting a line into escape and text segments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from streamdown.ansi.codes import BEL, CSI, ESC
from streamdown.ansi.width import CharWidth, text_width, wcwidth_char


# ---------------------------------------------------------------------------
# Escape patterns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EscapePatterns:
    """Compiled escape matchers, built once and shared read-only.

    * ``sgr``: SGR and erase-line codes (``ESC[`` ... ``m`` / ``K``)
    * ``escape``: every recognized escape (CSI, OSC, bare ``ESC)``)
    * ``segment``: escape (``ESC`` ... ``m``) or text runs, for :func:`split_up`
    """

    sgr: re.Pattern[str]
    escape: re.Pattern[str]
    segment: re.Pattern[str]

    @classmethod
    def compile(cls) -> EscapePatterns:
        """Compile the escape patterns."""
        return cls(
            sgr=re.compile(r"\x1b\[[0-9;]*[mK]"),
            escape=re.compile(
                r"\x1b(?:"
                r"\[[^a-zA-Z]*[a-zA-Z]"           # CSI, through the first letter
                r"|\][^\x07]*?(?:\x07|\x1b\\)"    # OSC, through BEL or ST
                r"|\))"                           # bare escape
            ),
            segment=re.compile(r"\x1b[^m]*m|[^\x1b]+|\x1b"),
        )


PATTERNS = EscapePatterns.compile()


# ---------------------------------------------------------------------------
# visible / visible_length
# ---------------------------------------------------------------------------


def visible(text: str) -> str:
    """Remove all ANSI escape sequences from *text*.

    Unterminated sequences do not match and stay in the result. Stripping is
    repeated until nothing matches, so a sequence that only appears once
    another one is removed (``"\\x1b\\x1b[1m[2m"``) is stripped too.

    >>> visible("\\x1b[1mBold\\x1b[0m text")
    'Bold text'
    """
    stripped = PATTERNS.escape.sub("", text)
    while stripped != text:
        text = stripped
        stripped = PATTERNS.escape.sub("", text)
    return stripped


def visible_length(text: str, *, char_width: CharWidth = wcwidth_char) -> int:
    """Return the display width of *text* in terminal columns.

    Escapes are removed first; CJK and other wide characters count as two
    columns, combining marks as zero.

    >>> visible_length("\\x1b[1mHello\\x1b[0m")
    5
    >>> visible_length("你好")
    4
    """
    return text_width(visible(text), char_width)


# ---------------------------------------------------------------------------
# SGR code extraction
# ---------------------------------------------------------------------------


def extract_ansi_codes(text: str) -> list[str]:
    """Return the SGR and erase-line codes in *text*, in order of appearance."""
    return PATTERNS.sgr.findall(text)


def remove_ansi(line: str, code_list: list[str]) -> str:
    """Remove every occurrence of each code in *code_list* from *line*."""
    for code in code_list:
        line = line.replace(code, "")
    return line


def split_up(line: str) -> list[str]:
    """Split *line* into escape sequences and plain text segments.

    >>> split_up("\\x1b[1mBold\\x1b[0m text")
    ['\\x1b[1m', 'Bold', '\\x1b[0m', ' text']
    """
    return [segment for segment in PATTERNS.segment.findall(line) if segment]


def extract_escape(text: str, pos: int) -> tuple[str, int] | None:
    """Extract the escape sequence starting at *pos* in *text*.

    Returns ``(code, length)`` or ``None`` if ``text[pos]`` is not ESC.

    * CSI: ``ESC[`` through the first ASCII letter
    * OSC: ``ESC]`` through BEL or ``ESC\\``
    * ``ESC)``: both characters
    * anything else: the lone ESC

    These are the sequences :func:`visible` strips. A CSI or OSC without its
    terminator yields the lone ESC, so the rest of it is measured and clipped
    as visible text, the same way :func:`visible_length` counts it.
    """
    if pos >= len(text) or text[pos] != ESC:
        return None

    next_ch = text[pos + 1] if pos + 1 < len(text) else ""
    i = pos + 2

    if next_ch == "[":
        while i < len(text):
            ch = text[i]
            i += 1
            if ch.isascii() and ch.isalpha():
                return (text[pos:i], i - pos)
    elif next_ch == "]":
        while i < len(text):
            ch = text[i]
            i += 1
            if ch == BEL:
                return (text[pos:i], i - pos)
            if ch == ESC and i < len(text) and text[i] == "\\":
                i += 1
                return (text[pos:i], i - pos)
    elif next_ch == ")":
        return (text[pos:i], 2)

    return (ESC, 1)


def is_ansi_code(s: str) -> bool:
    """Return ``True`` if *s* starts with the CSI introducer."""
    return s.startswith(CSI)


def parse_sgr_params(code: str) -> list[int]:
    """Parse the numeric parameters of an SGR code like ``\\x1b[1;4m``.

    An empty body means reset and yields ``[0]``. Tokens that are not unsigned
    decimal integers are skipped.
    """
    body = code[len(CSI):] if code.startswith(CSI) else code
    if body and body[-1].isascii() and body[-1].isalpha():
        body = body[:-1]

    if not body:
        return [0]

    params: list[int] = []
    for token in body.split(";"):
        if token.isascii() and token.isdigit():
            params.append(int(token))
    return params
