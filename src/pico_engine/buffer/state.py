"""Cursor and viewport offsets for a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)


@dataclass(slots=True)
class CursorState:
    """Logical cursor ``(cx, cy)``, derived ``rx`` and the scroll offsets."""

    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0

    @property
    def cursor(self) -> Cursor:
        return (self.cy, self.cx)

    def set_cursor(self, row: int, col: int) -> None:
        self.cy = row
        self.cx = col

    def snapshot(self) -> "ViewSnapshot":
        return ViewSnapshot(self.cx, self.cy, self.rowoff, self.coloff)

    def restore(self, snapshot: "ViewSnapshot") -> None:
        self.cx = snapshot.cx
        self.cy = snapshot.cy
        self.rowoff = snapshot.rowoff
        self.coloff = snapshot.coloff


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    cx: int
    cy: int
    rowoff: int
    coloff: int


__all__ = ["Cursor", "CursorState", "ViewSnapshot"]
