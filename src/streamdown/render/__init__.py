"""streamdown-render: ANSI-aware word wrapping for terminal output."""

from streamdown.render.options import WrapOptions, wrap
from streamdown.render.text import (
    WrappedText,
    simple_wrap,
    split_text,
    text_wrap,
    truncate_to_visible,
)

__all__ = [
    "WrapOptions",
    "WrappedText",
    "simple_wrap",
    "split_text",
    "text_wrap",
    "truncate_to_visible",
    "wrap",
]
