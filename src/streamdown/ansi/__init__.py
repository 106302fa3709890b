"""streamdown-ansi: escape scanning, display width and SGR state collapsing."""

from streamdown.ansi.codes import ELLIPSIS, RESET
from streamdown.ansi.sgr import StyleState, ansi_collapse
from streamdown.ansi.utils import (
    PATTERNS,
    EscapePatterns,
    extract_ansi_codes,
    extract_escape,
    is_ansi_code,
    parse_sgr_params,
    remove_ansi,
    split_up,
    visible,
    visible_length,
)
from streamdown.ansi.width import CharWidth, text_width, wcwidth_char
from streamdown.ansi.wrap import wrap_ansi

__all__ = [
    "CharWidth",
    "ELLIPSIS",
    "EscapePatterns",
    "PATTERNS",
    "RESET",
    "StyleState",
    "ansi_collapse",
    "extract_ansi_codes",
    "extract_escape",
    "is_ansi_code",
    "parse_sgr_params",
    "remove_ansi",
    "split_up",
    "text_width",
    "visible",
    "visible_length",
    "wcwidth_char",
    "wrap_ansi",
]
