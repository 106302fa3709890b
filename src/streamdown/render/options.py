"""Wrap configuration shared across many calls."""

from __future__ import annotations

from dataclasses import dataclass, replace

from streamdown.ansi.width import CharWidth, wcwidth_char
from streamdown.render.text import WrappedText, text_wrap


@dataclass(frozen=True)
class WrapOptions:
    """Settings for :func:`text_wrap`, minus the text and target width.

    A renderer typically keeps one of these per block (list item, blockquote)
    and derives nested ones with :meth:`with_prefix`.
    """

    indent: int = 0
    first_prefix: str = ""
    next_prefix: str = ""
    force_truncate: bool = False
    preserve_format: bool = False
    char_width: CharWidth = wcwidth_char

    def with_prefix(self, first_prefix: str, next_prefix: str | None = None) -> WrapOptions:
        """Return a copy using *first_prefix*, and *next_prefix* (default: the same)."""
        if next_prefix is None:
            next_prefix = first_prefix
        return replace(self, first_prefix=first_prefix, next_prefix=next_prefix)


def wrap(text: str, width: int, options: WrapOptions | None = None) -> WrappedText:
    """Wrap *text* to *width* columns using *options* (defaults when omitted)."""
    if options is None:
        options = WrapOptions()
    return text_wrap(
        text,
        width,
        options.indent,
        options.first_prefix,
        options.next_prefix,
        options.force_truncate,
        options.preserve_format,
        char_width=options.char_width,
    )
