"""Built-in keymaps that seed each mode with the editor's key commands."""

from __future__ import annotations

from typing import Iterable, Sequence

from pico_engine.actions import core as core_actions
from pico_engine.actions import edit as edit_actions
from pico_engine.actions import file as file_actions
from pico_engine.actions import motion as motion_actions
from pico_engine.actions import search as search_actions

from .models import ActionRef, Binding, KeySequence, WhenClause
from .registry import KeymapRegistry

NORMAL = "normal"
INSERT = "insert"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("core.enter_insert", core_actions.enter_insert_mode, "Enter insert mode"),
    ActionRef("core.insert_after", core_actions.insert_after, "Insert after the cursor"),
    ActionRef("core.append_line", core_actions.append_at_line_end, "Append at end of line"),
    ActionRef(
        "core.insert_line_start",
        core_actions.insert_at_line_start,
        "Insert at start of line",
    ),
    ActionRef("core.open_below", core_actions.open_line_below, "Open a line below"),
    ActionRef("core.open_above", core_actions.open_line_above, "Open a line above"),
    ActionRef("core.exit_to_normal", core_actions.exit_to_normal_mode, "Return to normal mode"),
    ActionRef("core.refresh", core_actions.noop_action, "Redraw the screen"),
    ActionRef("motion.left", motion_actions.move_left, "Move left"),
    ActionRef("motion.right", motion_actions.move_right, "Move right"),
    ActionRef("motion.up", motion_actions.move_up, "Move up"),
    ActionRef("motion.down", motion_actions.move_down, "Move down"),
    ActionRef("motion.page_up", motion_actions.page_up, "Scroll one screen up"),
    ActionRef("motion.page_down", motion_actions.page_down, "Scroll one screen down"),
    ActionRef("motion.line_start", motion_actions.line_start, "Go to start of line"),
    ActionRef("motion.line_end", motion_actions.line_end, "Go to end of line"),
    ActionRef("motion.first_line", motion_actions.first_line, "Go to first line"),
    ActionRef("motion.last_line", motion_actions.last_line, "Go to last line"),
    ActionRef("motion.goto_line", motion_actions.start_goto_line, "Prompt for a line number"),
    ActionRef("edit.insert_tab", edit_actions.insert_tab, "Insert a tab"),
    ActionRef("edit.delete_backward", edit_actions.delete_backward, "Delete left"),
    ActionRef("edit.delete_forward", edit_actions.delete_forward, "Delete right"),
    ActionRef("edit.newline", edit_actions.insert_newline, "Split the line"),
    ActionRef("edit.delete_line", edit_actions.delete_line, "Delete the current line"),
    ActionRef("file.save", file_actions.save, "Save the file"),
    ActionRef("file.save_as", file_actions.start_save_as, "Save under a new name"),
    ActionRef("file.quit", file_actions.quit_editor, "Quit the editor"),
    ActionRef("search.start", search_actions.start_search, "Incremental search"),
)

# name, key, action, description, when
_COMMON: tuple[tuple[str, str, str, str, tuple[str, ...]], ...] = (
    ("quit", "ctrl+q", "file.quit", "Quit", ()),
    ("save", "ctrl+s", "file.save", "Save", ("has_filename",)),
    ("save_as", "ctrl+s", "file.save_as", "Save as", ("!has_filename",)),
    ("goto_line", "ctrl+g", "motion.goto_line", "Go to line", ()),
    ("find", "ctrl+f", "search.start", "Find", ()),
    ("delete_line", "ctrl+d", "edit.delete_line", "Delete line", ()),
    ("refresh", "ctrl+l", "core.refresh", "Refresh", ()),
    ("up", "UP", "motion.up", "Move up", ()),
    ("down", "DOWN", "motion.down", "Move down", ()),
    ("left", "LEFT", "motion.left", "Move left", ()),
    ("right", "RIGHT", "motion.right", "Move right", ()),
    ("page_up", "PAGE_UP", "motion.page_up", "Page up", ()),
    ("page_down", "PAGE_DOWN", "motion.page_down", "Page down", ()),
    ("home", "HOME", "motion.line_start", "Start of line", ()),
    ("end", "END", "motion.line_end", "End of line", ()),
    ("escape", "ESC", "core.exit_to_normal", "Normal mode", ()),
)


def _common_bindings(mode: str) -> tuple[Binding, ...]:
    bindings = []
    for name, key, action_id, description, when in _COMMON:
        bindings.append(
            Binding(
                id=f"{mode}.{name}",
                mode=mode,
                sequence=KeySequence.from_strings(key),
                action_id=action_id,
                description=description,
                when=tuple(WhenClause.parse(expr) for expr in when),
            )
        )
    return tuple(bindings)


def _bind(mode: str, name: str, action_id: str, *keys: str, description: str = "") -> Binding:
    return Binding(
        id=f"{mode}.{name}",
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
        description=description,
    )


NORMAL_BINDINGS: tuple[Binding, ...] = (
    _bind(NORMAL, "insert_before", "core.enter_insert", "i", description="Insert before cursor"),
    _bind(NORMAL, "insert_after", "core.insert_after", "a", description="Insert after cursor"),
    _bind(NORMAL, "append_line", "core.append_line", "A", description="Append at end of line"),
    _bind(NORMAL, "insert_line_start", "core.insert_line_start", "I"),
    _bind(NORMAL, "open_below", "core.open_below", "o", description="Open line below"),
    _bind(NORMAL, "open_above", "core.open_above", "O", description="Open line above"),
    _bind(NORMAL, "vi_left", "motion.left", "h"),
    _bind(NORMAL, "vi_down", "motion.down", "j"),
    _bind(NORMAL, "vi_up", "motion.up", "k"),
    _bind(NORMAL, "vi_right", "motion.right", "l"),
    _bind(NORMAL, "vi_line_start", "motion.line_start", "0"),
    _bind(NORMAL, "vi_line_end", "motion.line_end", "$"),
    _bind(NORMAL, "first_line", "motion.first_line", "g", "g", description="First line"),
    _bind(NORMAL, "last_line", "motion.last_line", "G", description="Last line"),
    _bind(NORMAL, "search", "search.start", "/", description="Search"),
    _bind(NORMAL, "goto_prompt", "motion.goto_line", ":", description="Go to line"),
)

INSERT_BINDINGS: tuple[Binding, ...] = (
    _bind(INSERT, "tab", "edit.insert_tab", "TAB"),
    _bind(INSERT, "backspace", "edit.delete_backward", "BACKSPACE"),
    _bind(INSERT, "ctrl_h", "edit.delete_backward", "ctrl+h"),
    _bind(INSERT, "delete", "edit.delete_forward", "DELETE"),
    _bind(INSERT, "enter", "edit.newline", "ENTER"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *_common_bindings(NORMAL),
    *_common_bindings(INSERT),
    *NORMAL_BINDINGS,
    *INSERT_BINDINGS,
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    excluded = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


__all__ = [
    "load_default_keymaps",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "NORMAL_BINDINGS",
    "INSERT_BINDINGS",
]
