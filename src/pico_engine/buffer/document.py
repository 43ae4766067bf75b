"""Ordered collection of lines; owns every content mutation."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from .line import Line
from .render import DEFAULT_TAB_STOP

ENCODING = "utf-8"
JOIN_MARKER = "\n"


class Document:
    """List-of-lines text storage.

    Out-of-range indices are clamped (or the call ignored), never raised on:
    the mode layer computes positions from cursor math and a bad index is a
    bug to absorb, not a user-facing error. ``dirty`` counts content changes
    since the last load or save.
    """

    def __init__(
        self,
        lines: Optional[Sequence[str]] = None,
        *,
        filename: Optional[str] = None,
        tab_stop: int = DEFAULT_TAB_STOP,
    ) -> None:
        self.tab_stop = tab_stop
        self.filename = filename
        self.dirty = 0
        self.lines: List[Line] = [Line(text, tab_stop) for text in (lines or ())]
        if not self.lines:
            self.lines.append(Line("", tab_stop))

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        filename: Optional[str] = None,
        tab_stop: int = DEFAULT_TAB_STOP,
    ) -> "Document":
        document = cls(filename=filename, tab_stop=tab_stop)
        document.load(text)
        return document

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def get_line(self, index: int) -> Line:
        return self.lines[self._clamp_row(index)]

    def snapshot(self) -> Sequence[str]:
        """Return the current line contents without exposing the Line objects."""

        return tuple(line.chars for line in self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def _clamp_row(self, index: int) -> int:
        return max(0, min(index, len(self.lines) - 1))

    def insert_line(self, at: int, text: str = "") -> None:
        at = max(0, min(at, len(self.lines)))
        self.lines.insert(at, Line(text, self.tab_stop))
        self.dirty += 1

    def delete_line(self, at: int) -> None:
        if at < 0 or at >= len(self.lines):
            return
        del self.lines[at]
        self.dirty += 1
        if not self.lines:
            self.lines.append(Line("", self.tab_stop))

    def insert_char(self, cy: int, cx: int, ch: str) -> None:
        if cy >= len(self.lines):
            self.insert_line(len(self.lines), "")
        self.lines[self._clamp_row(cy)].insert(cx, ch)
        self.dirty += 1

    def delete_char(self, cy: int, cx: int) -> Optional[str]:
        """Delete the character left of ``(cy, cx)``.

        At column 0 the line is joined onto the previous one and ``"\\n"`` is
        returned. ``None`` means nothing was deleted.
        """

        if cy < 0 or cy >= len(self.lines):
            return None
        line = self.lines[cy]
        cx = min(cx, len(line))
        if cx <= 0:
            if cy == 0:
                return None
            self.lines[cy - 1].append(line.chars)
            self.dirty += 1
            self.delete_line(cy)
            return JOIN_MARKER
        removed = line.delete(cx - 1)
        if removed is not None:
            self.dirty += 1
        return removed

    def insert_newline(self, cy: int, cx: int) -> None:
        cy = self._clamp_row(cy)
        if cx <= 0:
            self.insert_line(cy, "")
            return
        tail = self.lines[cy].truncate(cx)
        self.insert_line(cy + 1, tail)

    def serialize(self) -> bytes:
        text = "".join(f"{line.chars}\n" for line in self.lines)
        return text.encode(ENCODING, errors="surrogateescape")

    def load(self, text: str) -> None:
        rows = [row.rstrip("\r\n") for row in text.split("\n")]
        if text.endswith("\n"):
            rows.pop()
        self.lines = [Line(row, self.tab_stop) for row in rows]
        if not self.lines:
            self.lines.append(Line("", self.tab_stop))
        self.dirty = 0


def decode(data: bytes) -> str:
    return data.decode(ENCODING, errors="surrogateescape")


__all__ = ["Document", "JOIN_MARKER", "decode"]
