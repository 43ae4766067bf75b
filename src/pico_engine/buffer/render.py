"""Tab expansion and character-offset <-> display-column mapping."""

from __future__ import annotations

DEFAULT_TAB_STOP = 2


def _advance(column: int, ch: str, tab_stop: int) -> int:
    if ch == "\t":
        return column + tab_stop - (column % tab_stop)
    return column + 1


def char_to_display(chars: str, cx: int, tab_stop: int = DEFAULT_TAB_STOP) -> int:
    """Return the display column of character offset ``cx``."""

    rx = 0
    for ch in chars[: max(0, cx)]:
        rx = _advance(rx, ch, tab_stop)
    return rx


def display_to_char(chars: str, rx: int, tab_stop: int = DEFAULT_TAB_STOP) -> int:
    """Return the character offset whose rendered cell covers column ``rx``.

    Offsets past the rendered width map to ``len(chars)``.
    """

    cur_rx = 0
    for cx, ch in enumerate(chars):
        cur_rx = _advance(cur_rx, ch, tab_stop)
        if cur_rx > rx:
            return cx
    return len(chars)


def expand_tabs(chars: str, tab_stop: int = DEFAULT_TAB_STOP) -> str:
    if "\t" not in chars:
        return chars
    parts: list[str] = []
    column = 0
    for ch in chars:
        if ch == "\t":
            width = tab_stop - (column % tab_stop)
            parts.append(" " * width)
            column += width
        else:
            parts.append(ch)
            column += 1
    return "".join(parts)


__all__ = ["DEFAULT_TAB_STOP", "char_to_display", "display_to_char", "expand_tabs"]
