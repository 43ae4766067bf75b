"""Per-line syntax classifier producing highlight categories for rendered text."""

from __future__ import annotations

from enum import IntEnum
from typing import List

QUOTES = "'\""
ESCAPE_INTRODUCERS = "\\%"
BRACES = "()[]{}<>"
SEPARATORS = "\",.()+-/*=~%<>[];"
HEX_DIGITS = "0123456789abcdefABCDEF"


class Highlight(IntEnum):
    NORMAL = 0
    NUMBER = 1
    BRACE = 2
    STAR = 3
    STRING = 4
    MATCH = 5
    ESCAPE = 6


_COLORS = {
    Highlight.NUMBER: 31,
    Highlight.STRING: 32,
    Highlight.ESCAPE: 32,
    Highlight.BRACE: 33,
    Highlight.MATCH: 34,
    Highlight.STAR: 35,
}
DEFAULT_COLOR = 37


def is_separator(ch: str) -> bool:
    return ch.isspace() or ch == "\0" or ch in SEPARATORS


def highlight_to_color(category: Highlight) -> int:
    """Map a category onto its ANSI foreground colour code."""

    return _COLORS.get(category, DEFAULT_COLOR)


def is_emphasized(category: Highlight) -> bool:
    """Escape sequences share the string colour but are drawn underlined."""

    return category is Highlight.ESCAPE


def classify(render: str) -> List[Highlight]:
    """Classify every character of ``render``; no state crosses line boundaries."""

    size = len(render)
    hl = [Highlight.NORMAL] * size
    prev_sep = True
    quote = ""
    hex_run = False

    i = 0
    while i < size:
        ch = render[i]
        prev_hl = hl[i - 1] if i > 0 else Highlight.NORMAL

        if quote:
            hl[i] = Highlight.STRING
            if ch in ESCAPE_INTRODUCERS and i + 1 < size:
                span = 2
                if render[i + 1] == "x":
                    span = 4
                end = min(i + span, size)
                for j in range(i, end):
                    hl[j] = Highlight.ESCAPE
                i = end
                prev_sep = False
                continue
            if ch == quote:
                quote = ""
            prev_sep = is_separator(ch)
            i += 1
            continue

        if ch in QUOTES:
            hl[i] = Highlight.STRING
            quote = ch
            hex_run = False
        elif ch.isdigit() and (prev_sep or prev_hl is Highlight.NUMBER):
            hl[i] = Highlight.NUMBER
            if prev_hl is not Highlight.NUMBER:
                hex_run = False
        elif ch == "." and prev_hl is Highlight.NUMBER and not hex_run:
            hl[i] = Highlight.NUMBER
        elif (
            ch in "xX"
            and prev_hl is Highlight.NUMBER
            and render[i - 1] == "0"
            and (i < 2 or hl[i - 2] is not Highlight.NUMBER)
        ):
            hl[i] = Highlight.NUMBER
            hex_run = True
        elif ch in HEX_DIGITS and hex_run and prev_hl is Highlight.NUMBER:
            hl[i] = Highlight.NUMBER
        elif ch == "*":
            hl[i] = Highlight.STAR
        elif ch in BRACES:
            hl[i] = Highlight.BRACE

        if hl[i] is not Highlight.NUMBER:
            hex_run = False
        prev_sep = is_separator(ch)
        i += 1

    return hl


__all__ = [
    "Highlight",
    "DEFAULT_COLOR",
    "classify",
    "highlight_to_color",
    "is_emphasized",
    "is_separator",
]
