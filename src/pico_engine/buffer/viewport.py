"""Scroll algorithm keeping the cursor visible with a fixed padding."""

from __future__ import annotations

from dataclasses import dataclass

from .document import Document
from .state import CursorState

DEFAULT_SCROLL_PADDING = 4
RESERVED_ROWS = 2


@dataclass(frozen=True, slots=True)
class ScreenSize:
    """Terminal dimensions; the bottom rows hold the status and message bars."""

    rows: int = 24
    cols: int = 80

    @property
    def text_rows(self) -> int:
        return max(0, self.rows - RESERVED_ROWS)

    def text_cols(self, gutter: str = "") -> int:
        return max(0, self.cols - len(gutter))


def effective_padding(padding: int, screenrows: int) -> int:
    """Shrink ``padding`` on screens too short to keep it above and below."""

    return max(0, min(padding, (screenrows - 1) // 2))


def scroll(
    state: CursorState,
    document: Document,
    screenrows: int,
    screencols: int,
    padding: int = DEFAULT_SCROLL_PADDING,
) -> CursorState:
    """Update ``rx``, ``rowoff`` and ``coloff`` in place and return ``state``."""

    state.rx = 0
    if 0 <= state.cy < document.line_count:
        state.rx = document.lines[state.cy].cx_to_rx(state.cx)

    if screenrows <= 0 or screencols <= 0:
        return state

    pad = effective_padding(padding, screenrows)
    numrows = document.line_count
    if state.cy < state.rowoff + pad:
        state.rowoff = max(0, state.cy - pad)
    if state.cy >= state.rowoff + screenrows - pad and numrows > screenrows:
        state.rowoff = min(state.cy - screenrows + 1 + pad, numrows - screenrows)

    if state.rx < state.coloff + 1:
        state.coloff = max(0, state.rx - 1)
    if state.rx >= state.coloff + screencols:
        state.coloff = state.rx - screencols + 1
    return state


__all__ = ["DEFAULT_SCROLL_PADDING", "ScreenSize", "effective_padding", "scroll"]
