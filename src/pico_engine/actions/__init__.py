"""Editing verbs bound to keys; each takes ``(context, match)``."""

from .core import (
    append_at_line_end,
    enter_insert_mode,
    exit_to_normal_mode,
    insert_after,
    insert_at_line_start,
    noop_action,
    open_line_above,
    open_line_below,
)
from .edit import (
    delete_backward,
    delete_forward,
    delete_line,
    insert_newline,
    insert_tab,
    insert_typed,
)
from .file import quit_editor, save, start_save_as
from .motion import (
    first_line,
    last_line,
    line_end,
    line_start,
    move_down,
    move_left,
    move_right,
    move_up,
    page_down,
    page_up,
    start_goto_line,
)
from .search import start_search

__all__ = [
    "append_at_line_end",
    "enter_insert_mode",
    "exit_to_normal_mode",
    "insert_after",
    "insert_at_line_start",
    "noop_action",
    "open_line_above",
    "open_line_below",
    "delete_backward",
    "delete_forward",
    "delete_line",
    "insert_newline",
    "insert_tab",
    "insert_typed",
    "quit_editor",
    "save",
    "start_save_as",
    "first_line",
    "last_line",
    "line_end",
    "line_start",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "page_down",
    "page_up",
    "start_goto_line",
    "start_search",
]
