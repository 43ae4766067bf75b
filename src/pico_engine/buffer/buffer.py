"""High-level buffer façade combining the document with cursor state."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from pico_engine.runtime import telemetry

from .document import Document
from .line import Line
from .render import DEFAULT_TAB_STOP
from .state import Cursor, CursorState
from .validation import clamp_cursor, ensure_cursor


class Buffer:
    """Cursor-relative editing verbs over a :class:`Document`.

    Every verb runs inside a :class:`Transaction`, which profiles it and
    re-clamps the cursor afterwards.
    """

    def __init__(
        self,
        *,
        document: Optional[Document] = None,
        state: Optional[CursorState] = None,
    ) -> None:
        self.document = document or Document()
        self.state = state or CursorState()

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        filename: Optional[str] = None,
        tab_stop: int = DEFAULT_TAB_STOP,
    ) -> "Buffer":
        return cls(
            document=Document.from_text(text, filename=filename, tab_stop=tab_stop)
        )

    @property
    def name(self) -> str:
        return self.document.filename or "<unnamed>"

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def current_line(self) -> Line:
        return self.document.get_line(self.state.cy)

    def char_under_cursor(self) -> str:
        return self.current_line.char_at(self.state.cx)

    def set_cursor(self, row: int, col: int) -> Cursor:
        self.state.cy, self.state.cx = clamp_cursor(self.document, row, col)
        return self.state.cursor

    def insert_text(self, text: str) -> Cursor:
        with Transaction(self, "insert_text"):
            for ch in text:
                self.document.insert_char(self.state.cy, self.state.cx, ch)
                self.state.cx += 1
        return self.state.cursor

    def delete_backward(self) -> Optional[str]:
        """Delete left of the cursor, joining lines at column 0."""

        with Transaction(self, "delete_backward") as tx:
            cy, cx = self.state.cy, self.state.cx
            if cx == 0 and cy == 0:
                tx.noop = True
                return None
            join_column = len(self.document.lines[cy - 1]) if cx == 0 else 0
            removed = self.document.delete_char(cy, cx)
            if removed is None:
                tx.noop = True
                return None
            if cx == 0:
                self.state.set_cursor(cy - 1, join_column)
            else:
                self.state.cx = cx - 1
            return removed

    def delete_forward(self) -> Optional[str]:
        """Delete right of the cursor by stepping over it and deleting left."""

        cy, cx = self.state.cy, self.state.cx
        if cx < len(self.current_line):
            self.state.cx = cx + 1
        elif cy < self.document.line_count - 1:
            self.state.set_cursor(cy + 1, 0)
        else:
            return None
        return self.delete_backward()

    def insert_newline(self) -> Cursor:
        with Transaction(self, "insert_newline"):
            self.document.insert_newline(self.state.cy, self.state.cx)
            self.state.set_cursor(self.state.cy + 1, 0)
        return self.state.cursor

    def open_line(self, *, below: bool) -> Cursor:
        with Transaction(self, "open_line"):
            row = self.state.cy + 1 if below else self.state.cy
            self.document.insert_line(row, "")
            self.state.set_cursor(row, 0)
        return self.state.cursor

    def delete_current_line(self) -> Cursor:
        with Transaction(self, "delete_line"):
            self.document.delete_line(self.state.cy)
            self.state.cx = 0
        return self.state.cursor

    def load(self, text: str, *, filename: Optional[str] = None) -> None:
        with Transaction(self, "load"):
            self.document.load(text)
            if filename is not None:
                self.document.filename = filename
            self.state.set_cursor(0, 0)
            self.state.rowoff = self.state.coloff = 0


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.noop = False
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        ensure_cursor(self.buffer.document, self.buffer.state)
        if self.noop and self._handle is not None:
            self._handle.add_metadata("noop", True)
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction"]
