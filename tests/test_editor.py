from __future__ import annotations

from pathlib import Path

import pytest

from pico_engine.editor import HELP_MESSAGE, Editor
from pico_engine.errors import FatalIOError
from pico_engine.modes import INSERT, NORMAL, KeyInput
from pico_engine.modes.base_mode import ARROW_DOWN, ESCAPE
from pico_engine.modes.keymap_helpers import keymaps_of


def open_editor(tmp_path: Path, content: str = "hello\nworld\n") -> Editor:
    target = tmp_path / "notes.txt"
    target.write_text(content)
    editor = Editor()
    editor.open(str(target))
    return editor


def test_starts_in_insert_mode_with_help_message() -> None:
    editor = Editor()

    frame = editor.compose()

    assert editor.mode == INSERT
    assert frame.message == HELP_MESSAGE
    assert frame.status.startswith(" <unnamed> - 1 lines")
    assert frame.status.endswith("INSERT 0/1 ")


def test_open_loads_file_and_enables_save(tmp_path: Path) -> None:
    editor = open_editor(tmp_path)

    assert editor.document.snapshot() == ("hello", "world")
    assert editor.document.dirty == 0
    assert keymaps_of(editor.context).flags["has_filename"] is True


def test_open_missing_file_is_fatal(tmp_path: Path) -> None:
    editor = Editor()

    with pytest.raises(FatalIOError):
        editor.open(str(tmp_path / "absent.txt"))


def test_type_then_save_writes_file(tmp_path: Path) -> None:
    editor = open_editor(tmp_path)

    editor.process_key(KeyInput.char("x"))
    assert editor.document.dirty > 0

    result = editor.process_key(KeyInput.ctrl("s"))

    assert result.status == "saved"
    assert editor.document.dirty == 0
    assert (tmp_path / "notes.txt").read_text() == "xhello\nworld\n"
    assert editor.compose().message == "13 bytes written to disk"


def test_save_failure_keeps_buffer_dirty(tmp_path: Path) -> None:
    editor = open_editor(tmp_path)
    editor.document.filename = str(tmp_path / "missing" / "notes.txt")
    editor.process_key(KeyInput.char("x"))

    result = editor.process_key(KeyInput.ctrl("s"))

    assert result.status == "save_failed"
    assert editor.document.dirty > 0
    assert editor.compose().message.startswith("Can't save! I/O error:")


def test_unnamed_buffer_save_opens_prompt() -> None:
    editor = Editor()

    editor.process_key(KeyInput.ctrl("s"))

    assert editor.compose().message == "Save as: "


def test_quit_clean_buffer_exits_immediately(tmp_path: Path) -> None:
    editor = open_editor(tmp_path)

    editor.process_key(KeyInput.ctrl("q"))

    assert editor.exit_requested


def test_escape_switches_to_normal_mode() -> None:
    editor = Editor()

    editor.process_key(KeyInput(ESCAPE))

    assert editor.mode == NORMAL
    assert "NORMAL" in editor.compose().status


def test_cursor_scrolls_into_view(tmp_path: Path) -> None:
    content = "".join(f"line {n}\n" for n in range(50))
    editor = open_editor(tmp_path, content)

    for _ in range(30):
        editor.process_key(KeyInput(ARROW_DOWN))
    frame = editor.compose()

    assert editor.buffer.state.rowoff > 0
    row, col = frame.cursor
    assert 0 <= row < editor.screen.text_rows
    assert col == 0
    assert frame.rows[row].text == "line 30"


def test_resize_changes_frame_geometry() -> None:
    editor = Editor()

    editor.resize(10, 40)
    frame = editor.compose()

    assert len(frame.rows) == 8
    assert frame.width == 40
    assert len(frame.status) == 40


def test_message_expires(tmp_path: Path) -> None:
    editor = Editor()
    editor.set_message("hi", now=100.0)

    assert editor.compose(now=104.0).message == "hi"
    assert editor.compose(now=105.5).message == ""
