"""Bounds helpers shared across buffer services."""

from __future__ import annotations

from .document import Document
from .state import Cursor, CursorState


def clamp_cursor(document: Document, row: int, col: int) -> Cursor:
    max_row = max(0, document.line_count - 1)
    row = max(0, min(row, max_row))
    col = max(0, min(col, len(document.lines[row])))
    return (row, col)


def ensure_cursor(document: Document, state: CursorState) -> CursorState:
    """Pull ``state`` back inside the document after any cursor change."""

    state.cy, state.cx = clamp_cursor(document, state.cy, state.cx)
    state.rowoff = max(0, state.rowoff)
    state.coloff = max(0, state.coloff)
    return state


__all__ = ["clamp_cursor", "ensure_cursor"]
