from __future__ import annotations

from pico_engine.buffer import Highlight, classify, highlight_to_color
from pico_engine.buffer.syntax import is_emphasized

H = Highlight


def test_classifier_call_example() -> None:
    hl = classify('foo("bar", 42);')

    assert hl[0:3] == [H.NORMAL] * 3
    assert hl[3] is H.BRACE
    assert hl[4:9] == [H.STRING] * 5
    assert hl[9] is H.NORMAL  # ,
    assert hl[10] is H.NORMAL
    assert hl[11:13] == [H.NUMBER, H.NUMBER]
    assert hl[13] is H.BRACE
    assert hl[14] is H.NORMAL  # ;


def test_numbers_need_a_separator_before() -> None:
    assert classify("x1") == [H.NORMAL, H.NORMAL]
    assert classify("3.14") == [H.NUMBER] * 4
    assert classify("a 7") == [H.NORMAL, H.NORMAL, H.NUMBER]


def test_hex_literal() -> None:
    assert classify("0x1F") == [H.NUMBER] * 4
    assert classify("0x1F.")[4] is H.NORMAL


def test_star_and_braces() -> None:
    assert classify("a*b") == [H.NORMAL, H.STAR, H.NORMAL]
    assert classify("<[{}]>") == [H.BRACE] * 6


def test_escape_inside_string() -> None:
    hl = classify(r'"a\nb"')

    assert hl == [H.STRING, H.STRING, H.ESCAPE, H.ESCAPE, H.STRING, H.STRING]


def test_hex_escape_spans_four_characters() -> None:
    hl = classify(r"'\x41z'")

    assert hl[1:5] == [H.ESCAPE] * 4
    assert hl[5] is H.STRING


def test_string_state_does_not_leak_past_quote() -> None:
    hl = classify("'a' (")

    assert hl[:3] == [H.STRING] * 3
    assert hl[4] is H.BRACE


def test_colors() -> None:
    assert highlight_to_color(H.NUMBER) == 31
    assert highlight_to_color(H.STRING) == 32
    assert highlight_to_color(H.BRACE) == 33
    assert highlight_to_color(H.MATCH) == 34
    assert highlight_to_color(H.STAR) == 35
    assert highlight_to_color(H.NORMAL) == 37
    assert highlight_to_color(H.ESCAPE) == highlight_to_color(H.STRING)
    assert is_emphasized(H.ESCAPE)
    assert not is_emphasized(H.STRING)
