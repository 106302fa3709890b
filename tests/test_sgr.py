"""Tests for streamdown.ansi.sgr -- SGR state tracking and collapsing."""

from __future__ import annotations

from streamdown.ansi.codes import RESET
from streamdown.ansi.sgr import StyleState, ansi_collapse

BOLD = "\x1b[1m"
BOLD_OFF = "\x1b[22m"


# ---------------------------------------------------------------------------
# ansi_collapse
# ---------------------------------------------------------------------------


class TestAnsiCollapse:
    """Reduce a style history to the minimal equivalent codes."""

    def test_empty(self) -> None:
        assert ansi_collapse([]) == []

    def test_repeated_bold_collapses_to_one(self) -> None:
        assert ansi_collapse([BOLD, BOLD, BOLD_OFF, BOLD]) == [BOLD]

    def test_reset_discards_earlier_codes(self) -> None:
        codes = ["\x1b[1m", "\x1b[31m", "\x1b[0m", "\x1b[3m"]
        assert ansi_collapse(codes) == ["\x1b[3m"]

    def test_empty_body_reset(self) -> None:
        assert ansi_collapse(["\x1b[1m", "\x1b[m"]) == []

    def test_trailing_reset_empties(self) -> None:
        assert ansi_collapse(["\x1b[1m", "\x1b[4m", RESET]) == []

    def test_attributes_combined_in_fixed_order(self) -> None:
        codes = ["\x1b[9m", "\x1b[3m", "\x1b[1m", "\x1b[4m", "\x1b[2m"]
        assert ansi_collapse(codes) == ["\x1b[1;2;3;4;9m"]

    def test_bold_off_clears_dim_too(self) -> None:
        assert ansi_collapse(["\x1b[1m", "\x1b[2m", "\x1b[22m"]) == []

    def test_attribute_clears(self) -> None:
        codes = ["\x1b[3m", "\x1b[4m", "\x1b[9m", "\x1b[23m", "\x1b[24m", "\x1b[29m"]
        assert ansi_collapse(codes) == []

    def test_foreground_replaced(self) -> None:
        codes = ["\x1b[31m", "\x1b[38;5;196m"]
        assert ansi_collapse(codes) == ["\x1b[38;5;196m"]

    def test_preserves_256_color(self) -> None:
        assert ansi_collapse(["\x1b[38;5;196m"]) == ["\x1b[38;5;196m"]

    def test_preserves_truecolor(self) -> None:
        assert ansi_collapse(["\x1b[38;2;255;0;0m"]) == ["\x1b[38;2;255;0;0m"]

    def test_preserves_legacy_and_bright_colors(self) -> None:
        assert ansi_collapse(["\x1b[31m"]) == ["\x1b[31m"]
        assert ansi_collapse(["\x1b[95m", "\x1b[104m"]) == ["\x1b[95m", "\x1b[104m"]

    def test_background_cleared(self) -> None:
        codes = ["\x1b[44m", "\x1b[48;2;1;2;3m", "\x1b[49m"]
        assert ansi_collapse(codes) == []

    def test_foreground_cleared(self) -> None:
        assert ansi_collapse(["\x1b[1m", "\x1b[32m", "\x1b[39m"]) == ["\x1b[1m"]

    def test_emission_order(self) -> None:
        codes = ["\x1b[41m", "\x1b[32m", "\x1b[1m"]
        assert ansi_collapse(codes) == ["\x1b[1m", "\x1b[32m", "\x1b[41m"]

    def test_passthrough_order_and_duplicates_kept(self) -> None:
        codes = ["\x1b[7m", "\x1b[1m", "\x1b[5m", "\x1b[7m"]
        assert ansi_collapse(codes) == ["\x1b[1m", "\x1b[7m", "\x1b[5m", "\x1b[7m"]

    def test_combined_code_sets_every_attribute(self) -> None:
        assert ansi_collapse(["\x1b[1;3m", BOLD_OFF]) == ["\x1b[3m"]

    def test_combined_code_with_unknown_param(self) -> None:
        assert ansi_collapse(["\x1b[1;5m"]) == ["\x1b[1m", "\x1b[5m"]

    def test_reset_inside_combined_code(self) -> None:
        assert ansi_collapse(["\x1b[1m", "\x1b[0;3m"]) == ["\x1b[3m"]

    def test_erase_line_is_not_a_reset(self) -> None:
        assert ansi_collapse(["\x1b[1m", "\x1b[K"]) == ["\x1b[1m"]

    def test_color_with_attributes_in_one_code(self) -> None:
        assert ansi_collapse(["\x1b[38;5;12;1m"]) == ["\x1b[1m", "\x1b[38;5;12m"]

    def test_idempotent(self) -> None:
        histories = [
            [BOLD, BOLD, BOLD_OFF, BOLD],
            ["\x1b[3m", "\x1b[1m", "\x1b[38;2;1;2;3m", "\x1b[7m", "\x1b[44m"],
            ["\x1b[1;5m", "\x1b[4m", "\x1b[0;2m", "\x1b[95m"],
            ["\x1b[5;7m", "\x1b[38;5;4m"],
        ]
        for history in histories:
            once = ansi_collapse(history)
            assert ansi_collapse(once) == once


# ---------------------------------------------------------------------------
# StyleState
# ---------------------------------------------------------------------------


class TestStyleState:
    """Direct use of the style record."""

    def test_starts_inactive(self) -> None:
        state = StyleState()
        assert not state.is_active()
        assert state.codes() == []
        assert state.prefix() == ""
        assert state.line_end_reset() == ""

    def test_apply_and_prefix(self) -> None:
        state = StyleState()
        state.apply("\x1b[1m")
        state.apply("\x1b[31m")
        assert state.prefix() == "\x1b[1m\x1b[31m"
        assert state.line_end_reset() == RESET

    def test_slot_replaced(self) -> None:
        state = StyleState()
        state.apply("\x1b[31m")
        state.apply("\x1b[32m")
        assert state.foreground == "\x1b[32m"

    def test_reset(self) -> None:
        state = StyleState()
        state.apply("\x1b[1;4;7m")
        state.reset()
        assert state.codes() == []

    def test_non_sgr_ignored(self) -> None:
        state = StyleState()
        state.apply("\x1b[2J")
        state.apply("hello")
        assert not state.is_active()

    def test_malformed_extended_color_ignored(self) -> None:
        state = StyleState()
        state.apply("\x1b[38;5m")
        assert state.foreground is None
