"""SGR (Select Graphic Rendition) state tracking and collapsing.

A history of applied SGR codes is reduced to the shortest list of codes that
puts a freshly reset terminal into the same state, so styling can be reopened
cheaply at the start of every wrapped line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from streamdown.ansi.codes import CSI, RESET
from streamdown.ansi.utils import parse_sgr_params

# Attribute parameter -> StyleState slot. Emission follows this order.
_ATTRIBUTES: dict[int, str] = {
    1: "bold",
    2: "dim",
    3: "italic",
    4: "underline",
    9: "strikeout",
}

# Clearing parameter -> slots it empties
_CLEARS: dict[int, tuple[str, ...]] = {
    22: ("bold", "dim"),
    23: ("italic",),
    24: ("underline",),
    29: ("strikeout",),
    39: ("foreground",),
    49: ("background",),
}


def _sgr(params: Sequence[int]) -> str:
    return f"{CSI}{';'.join(str(p) for p in params)}m"


def _is_sgr(code: str) -> bool:
    return code.startswith(CSI) and code.endswith("m")


def _is_foreground(p: int) -> bool:
    return 30 <= p <= 37 or 90 <= p <= 97


def _is_background(p: int) -> bool:
    return 40 <= p <= 47 or 100 <= p <= 107


def _extended_color(params: list[int], i: int) -> tuple[str | None, int]:
    """Read a ``38``/``48`` colour starting at ``params[i]``.

    Returns ``(code, consumed)``; ``code`` is ``None`` when the sub-form is
    incomplete or unknown.
    """
    if i + 1 >= len(params):
        return None, 0
    mode = params[i + 1]
    if mode == 5 and i + 2 < len(params):
        # 256-color: 38;5;N
        return _sgr(params[i : i + 3]), 3
    if mode == 2 and i + 4 < len(params):
        # RGB: 38;2;R;G;B
        return _sgr(params[i : i + 5]), 5
    return None, 0


@dataclass
class StyleState:
    """Active SGR state: one slot per category plus passthrough codes.

    Attribute slots hold the code that set them, colour slots hold the colour
    code, and ``passthrough`` keeps unrecognized codes (blink, reverse, ...)
    in arrival order.
    """

    bold: str | None = None
    dim: str | None = None
    italic: str | None = None
    underline: str | None = None
    strikeout: str | None = None
    foreground: str | None = None
    background: str | None = None
    passthrough: list[str] = field(default_factory=list)

    def apply(self, code: str) -> None:
        """Update the state from an SGR sequence like ``\\x1b[1;31m``.

        Codes that are not SGR (erase-line ``\\x1b[K`` and friends) are ignored.
        """
        if not _is_sgr(code):
            return

        params = parse_sgr_params(code)
        unknown: list[int] = []
        i = 0
        while i < len(params):
            p = params[i]

            if p == 0:
                self.reset()
                unknown.clear()
            elif p in _ATTRIBUTES:
                setattr(self, _ATTRIBUTES[p], _sgr([p]))
            elif p in _CLEARS:
                for slot in _CLEARS[p]:
                    setattr(self, slot, None)
            elif p in (38, 48):
                color, consumed = _extended_color(params, i)
                if color is None:
                    # Malformed colour: the rest of the code is unreliable
                    break
                if p == 38:
                    self.foreground = color
                else:
                    self.background = color
                i += consumed
                continue
            elif _is_foreground(p):
                self.foreground = _sgr([p])
            elif _is_background(p):
                self.background = _sgr([p])
            else:
                unknown.append(p)

            i += 1

        if not unknown:
            return
        if len(unknown) == len(params):
            self.passthrough.append(code)
        else:
            self.passthrough.append(_sgr(unknown))

    def reset(self) -> None:
        """Reset all tracked attributes to off."""
        self.bold = None
        self.dim = None
        self.italic = None
        self.underline = None
        self.strikeout = None
        self.foreground = None
        self.background = None
        self.passthrough = []

    def codes(self) -> list[str]:
        """Return the minimal codes that reproduce this state after a reset."""
        result: list[str] = []
        attrs = [p for p, slot in _ATTRIBUTES.items() if getattr(self, slot) is not None]
        if attrs:
            result.append(_sgr(attrs))
        if self.foreground is not None:
            result.append(self.foreground)
        if self.background is not None:
            result.append(self.background)
        result.extend(self.passthrough)
        return result

    def prefix(self) -> str:
        """Return the codes of :meth:`codes` joined into one string."""
        return "".join(self.codes())

    def is_active(self) -> bool:
        return bool(self.codes())

    def line_end_reset(self) -> str:
        """Return a reset sequence if any attribute is active, else empty."""
        if self.is_active():
            return RESET
        return ""


def ansi_collapse(code_list: Sequence[str]) -> list[str]:
    """Collapse an ordered history of SGR codes to a minimal equivalent list.

    Everything up to and including the last full reset is dropped. For the
    categories tracked by :class:`StyleState` only the latest setting survives;
    attributes are merged into a single code, followed by the foreground,
    the background and any passthrough codes in their original order.

    >>> ansi_collapse(["\\x1b[1m", "\\x1b[1m", "\\x1b[22m", "\\x1b[1m"])
    ['\\x1b[1m']
    """
    if not code_list:
        return []

    last_reset = -1
    for idx, code in enumerate(code_list):
        if _is_sgr(code) and parse_sgr_params(code) == [0]:
            last_reset = idx

    state = StyleState()
    for code in code_list[last_reset + 1 :]:
        state.apply(code)
    return state.codes()
