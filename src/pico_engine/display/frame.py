"""Compose one full screen refresh from the editor state.

A :class:`Frame` is host-neutral: the terminal host writes ``encode()`` in a
single call, the Textual host walks ``rows`` and styles each segment.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from itertools import groupby
from typing import Callable, List, Optional, Sequence, Tuple

from pico_engine.buffer import Highlight, highlight_to_color
from pico_engine.buffer.document import ENCODING
from pico_engine.buffer.syntax import is_emphasized
from pico_engine.buffer.viewport import scroll
from pico_engine.modes.base_mode import ModeContext

ESC = "\x1b"
HIDE_CURSOR = f"{ESC}[?25l"
SHOW_CURSOR = f"{ESC}[?25h"
CURSOR_HOME = f"{ESC}[H"
CLEAR_LINE = f"{ESC}[K"
CLEAR_SCREEN = f"{ESC}[2J"
INVERT = f"{ESC}[7m"
BOLD = f"{ESC}[1m"
RESET = f"{ESC}[m"
DEFAULT_FG = f"{ESC}[39m"
UNDERLINE_ON = f"{ESC}[4m"
UNDERLINE_OFF = f"{ESC}[24m"
NEWLINE = "\r\n"


@dataclass(frozen=True, slots=True)
class Segment:
    """Run of characters sharing one highlight category."""

    text: str
    category: Highlight = Highlight.NORMAL

    @property
    def color(self) -> int:
        return highlight_to_color(self.category)

    @property
    def underline(self) -> bool:
        return is_emphasized(self.category)


@dataclass(frozen=True, slots=True)
class FrameRow:
    segments: Tuple[Segment, ...] = ()
    gutter: str = ""

    @property
    def text(self) -> str:
        return self.gutter + "".join(segment.text for segment in self.segments)


@dataclass(frozen=True, slots=True)
class Frame:
    rows: Tuple[FrameRow, ...]
    status: str
    message: str
    cursor: Tuple[int, int]  # (screen row, screen column), zero-based
    width: int

    def encode(self) -> bytes:
        out: List[str] = [HIDE_CURSOR, CURSOR_HOME]
        for row in self.rows:
            out.append(row.gutter)
            _encode_segments(out, row.segments)
            out.append(CLEAR_LINE)
            out.append(NEWLINE)
        out.extend((INVERT, self.status, RESET, NEWLINE))
        out.extend((BOLD, CLEAR_LINE, self.message, RESET))
        out.append(f"{ESC}[{self.cursor[0] + 1};{self.cursor[1] + 1}H")
        out.append(SHOW_CURSOR)
        return "".join(out).encode(ENCODING, errors="surrogateescape")


def _encode_segments(out: List[str], segments: Sequence[Segment]) -> None:
    if not segments:
        return
    current: Optional[int] = None
    underline = False
    for segment in segments:
        if segment.category is Highlight.NORMAL:
            if current is not None:
                out.append(DEFAULT_FG)
                current = None
        elif segment.color != current:
            current = segment.color
            out.append(f"{ESC}[{current}m")
        if segment.underline != underline:
            underline = segment.underline
            out.append(UNDERLINE_ON if underline else UNDERLINE_OFF)
        out.append(segment.text)
    if underline:
        out.append(UNDERLINE_OFF)
    out.append(DEFAULT_FG)


def split_segments(render: str, highlight: Sequence[Highlight]) -> Tuple[Segment, ...]:
    """Group ``render`` into runs of equal highlight."""

    pairs = zip(render, highlight)
    return tuple(
        Segment("".join(ch for ch, _ in run), category)
        for category, run in groupby(pairs, key=lambda pair: pair[1])
    )


def status_line(
    filename: Optional[str],
    dirty: bool,
    line_count: int,
    mode: str,
    cx: int,
    cy: int,
    width: int,
) -> str:
    """Left part clipped to ``width``; the right part only when it fits."""

    left = f" {(filename or '<unnamed>')[:20]}{'*' if dirty else ''} - {line_count} lines"
    right = f"{mode.upper()} {cx}/{cy + 1} "
    left = left[:width]
    remaining = width - len(left)
    if remaining >= len(right):
        return left + " " * (remaining - len(right)) + right
    return left + " " * remaining


@dataclass(slots=True)
class FrameComposer:
    """Turns a :class:`ModeContext` into a :class:`Frame`."""

    clock: Callable[[], float] = field(default=time.time)

    def compose(
        self,
        context: ModeContext,
        mode: str,
        *,
        now: Optional[float] = None,
    ) -> Frame:
        config = context.config
        screen = context.screen
        gutter = config.gutter
        text_rows = screen.text_rows
        text_cols = screen.text_cols(gutter)
        document = context.buffer.document
        state = context.buffer.state
        scroll(state, document, text_rows, text_cols, config.scroll_padding)

        rows: List[FrameRow] = []
        for y in range(text_rows):
            filerow = y + state.rowoff
            if filerow >= document.line_count:
                rows.append(FrameRow(gutter=gutter))
                continue
            line = document.lines[filerow]
            end = state.coloff + text_cols
            segments = split_segments(
                line.render[state.coloff : end], line.highlight[state.coloff : end]
            )
            rows.append(FrameRow(segments=segments, gutter=gutter))

        status = status_line(
            document.filename,
            document.dirty > 0,
            document.line_count,
            mode,
            state.cx,
            state.cy,
            screen.cols,
        )

        if context.prompt is not None:
            message = context.prompt.display
        else:
            moment = self.clock() if now is None else now
            message = context.message.visible(moment, config.message_timeout)
        message = message[: screen.cols]

        cursor = (state.cy - state.rowoff, state.rx - state.coloff + len(gutter))
        return Frame(
            rows=tuple(rows),
            status=status,
            message=message,
            cursor=cursor,
            width=screen.cols,
        )


__all__ = [
    "CLEAR_SCREEN",
    "CURSOR_HOME",
    "Frame",
    "FrameComposer",
    "FrameRow",
    "Segment",
    "split_segments",
    "status_line",
]
