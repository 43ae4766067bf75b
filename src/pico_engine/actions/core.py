"""Mode-transition actions shared across modes."""

from __future__ import annotations

from pico_engine.modes.base_mode import INSERT, NORMAL, ModeContext, ModeResult


def enter_insert_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=INSERT, message="enter_insert")


def insert_after(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.set_cursor(buffer.state.cy, buffer.state.cx + 1)
    return ModeResult(consumed=True, switch_to=INSERT, message="insert_after")


def append_at_line_end(context: ModeContext, match) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.set_cursor(buffer.state.cy, len(buffer.current_line))
    return ModeResult(consumed=True, switch_to=INSERT, message="append_line")


def insert_at_line_start(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.set_cursor(context.buffer.state.cy, 0)
    return ModeResult(consumed=True, switch_to=INSERT, message="insert_line_start")


def open_line_below(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.open_line(below=True)
    return ModeResult(consumed=True, switch_to=INSERT, message="open_below")


def open_line_above(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.open_line(below=False)
    return ModeResult(consumed=True, switch_to=INSERT, message="open_above")


def exit_to_normal_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=NORMAL, message="exit_insert")


def noop_action(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "enter_insert_mode",
    "insert_after",
    "append_at_line_end",
    "insert_at_line_start",
    "open_line_below",
    "open_line_above",
    "exit_to_normal_mode",
    "noop_action",
]
