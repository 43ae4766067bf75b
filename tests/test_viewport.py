from __future__ import annotations

import pytest

from pico_engine.buffer import CursorState, Document, scroll
from pico_engine.buffer.viewport import ScreenSize, effective_padding


def make_document(count: int) -> Document:
    return Document([f"line {index}" for index in range(count)])


def test_scroll_computes_rx_from_tabs() -> None:
    document = Document(["\t\tx"])
    state = CursorState(cx=2)

    scroll(state, document, 10, 80)

    assert state.rx == 4


def test_scroll_down_keeps_padding() -> None:
    document = make_document(100)
    state = CursorState(cy=30)

    scroll(state, document, 20, 80, padding=4)

    assert state.rowoff == 30 - 20 + 1 + 4


def test_scroll_up_keeps_padding() -> None:
    document = make_document(100)
    state = CursorState(cy=10, rowoff=40)

    scroll(state, document, 20, 80, padding=4)

    assert state.rowoff == 6


def test_scroll_never_past_last_screen() -> None:
    document = make_document(30)
    state = CursorState(cy=29)

    scroll(state, document, 20, 80, padding=4)

    assert state.rowoff == 10


def test_short_document_never_scrolls_down() -> None:
    document = make_document(5)
    state = CursorState(cy=4)

    scroll(state, document, 20, 80)

    assert state.rowoff == 0


def test_horizontal_scroll_and_zero_clamp() -> None:
    document = Document(["x" * 200])
    state = CursorState(cx=150)

    scroll(state, document, 10, 80)
    assert state.coloff == 150 - 80 + 1

    state.cx = 0
    scroll(state, document, 10, 80)
    assert state.coloff == 0


@pytest.mark.parametrize("screenrows", [1, 2, 3, 5, 8, 20])
def test_cursor_always_visible(screenrows: int) -> None:
    document = make_document(60)
    state = CursorState()
    for cy in [0, 5, 59, 30, 31, 2, 45, 0, 59]:
        state.cy = cy
        scroll(state, document, screenrows, 40)
        assert state.rowoff <= state.cy < state.rowoff + screenrows
        assert state.rowoff >= 0 and state.coloff >= 0


def test_effective_padding_shrinks_on_small_screens() -> None:
    assert effective_padding(4, 20) == 4
    assert effective_padding(4, 5) == 2
    assert effective_padding(4, 1) == 0


def test_screen_size_reserves_two_rows() -> None:
    size = ScreenSize(rows=24, cols=80)

    assert size.text_rows == 22
    assert size.text_cols("|") == 79
