"""Escape sequences and glyphs shared by the scanner and the wrappers."""

from __future__ import annotations

ESC = "\x1b"
CSI = "\x1b["
BEL = "\x07"

RESET = "\x1b[0m"

# Single display column, so a clip at ``width - 1`` always has room for it.
ELLIPSIS = "…"
