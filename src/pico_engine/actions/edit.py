"""Text mutation actions: typing with auto-pairs, deletes, newlines."""

from __future__ import annotations

from pico_engine.buffer import Buffer
from pico_engine.modes.base_mode import ModeContext, ModeResult

PAIRS = {"(": ")", "[": "]", "{": "}", '"': '"'}
CLOSERS = frozenset(PAIRS.values())


def closer_for(ch: str) -> str | None:
    return PAIRS.get(ch)


def type_char(buffer: Buffer, ch: str) -> None:
    """Insert ``ch`` at the cursor, applying type-over and auto-pair rules."""

    if ch in CLOSERS and buffer.char_under_cursor() == ch:
        buffer.set_cursor(buffer.state.cy, buffer.state.cx + 1)
        return
    closer = closer_for(ch)
    if closer is None:
        buffer.insert_text(ch)
        return
    buffer.insert_text(ch + closer)
    buffer.set_cursor(buffer.state.cy, buffer.state.cx - 1)


def insert_typed(context: ModeContext, text: str) -> ModeResult:
    for ch in text:
        type_char(context.buffer, ch)
    return ModeResult(consumed=True, status="insert_text")


def insert_tab(context: ModeContext, match) -> ModeResult:
    del match
    return insert_typed(context, "\t")


def delete_backward(context: ModeContext, match) -> ModeResult:
    """Delete left; an opener whose closer sits under the cursor goes with it."""

    del match
    buffer = context.buffer
    removed = buffer.delete_backward()
    if removed is None:
        return ModeResult(consumed=True, status="noop")
    closer = closer_for(removed)
    if closer is not None and buffer.char_under_cursor() == closer:
        buffer.delete_forward()
        return ModeResult(consumed=True, status="delete_pair")
    return ModeResult(consumed=True, status="delete_backward")


def delete_forward(context: ModeContext, match) -> ModeResult:
    del match
    removed = context.buffer.delete_forward()
    status = "noop" if removed is None else "delete_forward"
    return ModeResult(consumed=True, status=status)


def insert_newline(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.insert_newline()
    return ModeResult(consumed=True, status="insert_newline")


def delete_line(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.delete_current_line()
    return ModeResult(consumed=True, status="delete_line")


__all__ = [
    "PAIRS",
    "closer_for",
    "type_char",
    "insert_typed",
    "insert_tab",
    "delete_backward",
    "delete_forward",
    "insert_newline",
    "delete_line",
]
