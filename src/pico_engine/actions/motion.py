"""Cursor navigation and goto-line."""

from __future__ import annotations

from pico_engine.buffer import Buffer
from pico_engine.modes.base_mode import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ModeContext,
    ModeResult,
    PromptKind,
)

GOTO_LABEL = "Go to line: "


def move_cursor(buffer: Buffer, direction: str) -> None:
    """Step one cell; left/right wrap across line boundaries."""

    state = buffer.state
    document = buffer.document
    row, col = state.cy, state.cx
    if direction == ARROW_LEFT:
        if col > 0:
            col -= 1
        elif row > 0:
            row -= 1
            col = len(document.lines[row])
    elif direction == ARROW_RIGHT:
        if col < len(document.lines[row]):
            col += 1
        elif row < document.line_count - 1:
            row += 1
            col = 0
    elif direction == ARROW_UP:
        row -= 1
    elif direction == ARROW_DOWN:
        row += 1
    buffer.set_cursor(row, col)


def _moved(status: str) -> ModeResult:
    return ModeResult(consumed=True, status=status)


def move_left(context: ModeContext, match) -> ModeResult:
    del match
    move_cursor(context.buffer, ARROW_LEFT)
    return _moved("move_left")


def move_right(context: ModeContext, match) -> ModeResult:
    del match
    move_cursor(context.buffer, ARROW_RIGHT)
    return _moved("move_right")


def move_up(context: ModeContext, match) -> ModeResult:
    del match
    move_cursor(context.buffer, ARROW_UP)
    return _moved("move_up")


def move_down(context: ModeContext, match) -> ModeResult:
    del match
    move_cursor(context.buffer, ARROW_DOWN)
    return _moved("move_down")


def page_up(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    rows = context.screen.text_rows
    buffer.set_cursor(buffer.state.rowoff, buffer.state.cx)
    for _ in range(rows):
        move_cursor(buffer, ARROW_UP)
    return _moved("page_up")


def page_down(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    rows = context.screen.text_rows
    buffer.set_cursor(buffer.state.rowoff + rows - 1, buffer.state.cx)
    for _ in range(rows):
        move_cursor(buffer, ARROW_DOWN)
    return _moved("page_down")


def line_start(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.set_cursor(context.buffer.state.cy, 0)
    return _moved("line_start")


def line_end(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.set_cursor(buffer.state.cy, len(buffer.current_line))
    return _moved("line_end")


def first_line(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.set_cursor(0, context.buffer.state.cx)
    return _moved("first_line")


def last_line(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.set_cursor(buffer.document.line_count - 1, buffer.state.cx)
    return _moved("last_line")


def start_goto_line(context: ModeContext, match) -> ModeResult:
    del match
    context.open_prompt(PromptKind.GOTO_LINE, GOTO_LABEL)
    return ModeResult(consumed=True, status="prompt_open", message="goto_line")


def goto_line(context: ModeContext, text: str) -> ModeResult:
    """Jump to the 1-based line ``text``, clamped to the document."""

    try:
        target = int(text)
    except ValueError:
        context.set_message(f"Not a line number: {text}")
        return ModeResult(consumed=True, status="goto_invalid")
    buffer = context.buffer
    row, _ = buffer.set_cursor(target - 1, buffer.state.cx)
    return ModeResult(consumed=True, status="goto_line", message=str(row + 1))


__all__ = [
    "move_cursor",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "page_up",
    "page_down",
    "line_start",
    "line_end",
    "first_line",
    "last_line",
    "start_goto_line",
    "goto_line",
]
