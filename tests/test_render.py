from __future__ import annotations

import pytest

from pico_engine.buffer import char_to_display, display_to_char, expand_tabs
from pico_engine.buffer.line import Line


def test_expand_tabs_uses_tab_stop() -> None:
    assert expand_tabs("\tx") == "  x"
    assert expand_tabs("a\tb") == "a b"
    assert expand_tabs("ab\tc", tab_stop=4) == "ab  c"


def test_expand_tabs_without_tabs_is_identity() -> None:
    assert expand_tabs("plain text") == "plain text"


@pytest.mark.parametrize("chars", ["", "abc", "\t", "a\tb\t\tc", "\t\tx"])
def test_render_never_shorter_than_chars(chars: str) -> None:
    render = expand_tabs(chars)

    assert len(render) >= len(chars)
    assert (len(render) == len(chars)) == ("\t" not in chars)


@pytest.mark.parametrize("chars", ["abc", "a\tb", "\t\tx\ty", "x\t"])
def test_display_round_trip(chars: str) -> None:
    for cx in range(len(chars) + 1):
        rx = char_to_display(chars, cx)
        assert display_to_char(chars, rx) == cx


def test_char_to_display_counts_tab_width() -> None:
    assert char_to_display("a\tb", 2) == 2
    assert char_to_display("\t\tb", 2) == 4
    assert char_to_display("\tb", 1, tab_stop=8) == 8


def test_display_to_char_inside_tab_maps_to_tab() -> None:
    assert display_to_char("\tb", 1, tab_stop=4) == 0
    assert display_to_char("\tb", 4, tab_stop=4) == 1


def test_display_to_char_past_end() -> None:
    assert display_to_char("abc", 10) == 3


def test_line_rebuilds_render_and_highlight() -> None:
    line = Line("a\tb")

    line.insert(0, "\t")

    assert line.chars == "\ta\tb"
    assert line.render == "  a b"
    assert len(line.highlight) == len(line.render)
