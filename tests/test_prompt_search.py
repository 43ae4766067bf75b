from __future__ import annotations

from pathlib import Path

from pico_engine.buffer import Highlight
from pico_engine.editor import Editor
from pico_engine.modes import KeyInput, PromptKind
from pico_engine.modes.base_mode import (
    ARROW_DOWN,
    ARROW_UP,
    BACKSPACE,
    ENTER,
    ESCAPE,
)


def make_editor(text: str, *, mode: str = "insert") -> Editor:
    editor = Editor(initial_mode=mode)
    editor.buffer.load(text)
    return editor


def type_text(editor: Editor, text: str) -> None:
    for ch in text:
        editor.process_key(KeyInput.char(ch))


def press(editor: Editor, *keys: str) -> None:
    for key in keys:
        editor.process_key(KeyInput(key))


def test_search_wraps_around_document() -> None:
    editor = make_editor("needle here\nnothing\nnope\n")
    editor.buffer.set_cursor(2, 0)

    editor.process_key(KeyInput.ctrl("f"))
    type_text(editor, "needle")
    press(editor, ARROW_DOWN)

    assert editor.buffer.cursor == (0, 0)


def test_search_moves_cursor_to_match_column_and_overlays_match() -> None:
    editor = make_editor("abc\n\tfoo bar\n")

    editor.process_key(KeyInput.ctrl("f"))
    type_text(editor, "bar")

    line = editor.document.lines[1]
    assert editor.buffer.cursor == (1, 5)
    assert line.highlight[6:9] == [Highlight.MATCH] * 3


def test_search_restores_highlight_before_next_match() -> None:
    editor = make_editor("foo 1\nfoo 2\n")

    editor.process_key(KeyInput.ctrl("f"))
    type_text(editor, "foo")
    press(editor, ARROW_DOWN)

    first, second = editor.document.lines
    assert Highlight.MATCH not in first.highlight
    assert second.highlight[:3] == [Highlight.MATCH] * 3
    assert editor.buffer.cursor == (1, 0)

    press(editor, ARROW_UP)
    assert editor.buffer.cursor == (0, 0)
    assert Highlight.MATCH not in second.highlight


def test_search_cancel_restores_view() -> None:
    editor = make_editor("alpha\nbeta\ngamma\n")
    editor.buffer.set_cursor(0, 3)

    editor.process_key(KeyInput.ctrl("f"))
    type_text(editor, "gam")
    assert editor.buffer.cursor == (2, 0)
    press(editor, ESCAPE)

    assert editor.context.prompt is None
    assert editor.buffer.cursor == (0, 3)
    assert all(Highlight.MATCH not in line.highlight for line in editor.document)


def test_search_confirm_keeps_match_and_clears_overlay() -> None:
    editor = make_editor("alpha\nbeta\n")

    editor.process_key(KeyInput.ctrl("f"))
    type_text(editor, "eta")
    press(editor, ENTER)

    assert editor.context.prompt is None
    assert editor.buffer.cursor == (1, 1)
    assert Highlight.MATCH not in editor.document.lines[1].highlight


def test_search_keys_do_not_edit_document() -> None:
    editor = make_editor("abc\n")

    editor.process_key(KeyInput.ctrl("f"))
    type_text(editor, "(x")
    press(editor, BACKSPACE, ESCAPE)

    assert editor.document.snapshot() == ("abc",)
    assert editor.document.dirty == 0


def test_slash_opens_search_in_normal_mode() -> None:
    editor = make_editor("abc\n", mode="normal")

    type_text(editor, "/")

    assert editor.context.prompt is not None
    assert editor.context.prompt.kind is PromptKind.SEARCH


def test_goto_line_accepts_digits_and_clamps() -> None:
    editor = make_editor("a\nb\nc\nd\n")

    editor.process_key(KeyInput.ctrl("g"))
    type_text(editor, "3x")
    assert editor.context.prompt is not None
    assert editor.context.prompt.text == "3"
    press(editor, ENTER)
    assert editor.buffer.cursor[0] == 2

    editor.process_key(KeyInput.ctrl("g"))
    type_text(editor, "99")
    press(editor, ENTER)
    assert editor.buffer.cursor[0] == 3


def test_enter_on_empty_prompt_keeps_it_open() -> None:
    editor = make_editor("a\n")

    editor.process_key(KeyInput.ctrl("g"))
    press(editor, ENTER)

    assert editor.context.prompt is not None


def test_prompt_erase_keys() -> None:
    editor = make_editor("a\n")

    editor.process_key(KeyInput.ctrl("g"))
    type_text(editor, "123")
    press(editor, BACKSPACE)
    editor.process_key(KeyInput.ctrl("h"))

    assert editor.context.prompt is not None
    assert editor.context.prompt.text == "1"


def test_prompt_respects_maxlen() -> None:
    editor = make_editor("a\n")

    editor.process_key(KeyInput.ctrl("f"))
    type_text(editor, "x" * 200)

    assert editor.context.prompt is not None
    assert len(editor.context.prompt.text) == editor.config.prompt_maxlen


def test_save_without_filename_prompts_then_saves(tmp_path: Path) -> None:
    editor = make_editor("hello\n")
    target = tmp_path / "out.txt"

    editor.process_key(KeyInput.ctrl("s"))
    assert editor.context.prompt is not None
    assert editor.context.prompt.kind is PromptKind.SAVE_AS
    type_text(editor, str(target))
    press(editor, ENTER)

    assert target.read_bytes() == b"hello\n"
    assert editor.document.filename == str(target)
    assert editor.document.dirty == 0
    assert editor.context.message.text == "6 bytes written to disk"


def test_save_as_cancel_reports_abort() -> None:
    editor = make_editor("hello\n")

    editor.process_key(KeyInput.ctrl("s"))
    press(editor, ESCAPE)

    assert editor.context.prompt is None
    assert editor.document.filename is None
    assert editor.context.message.text == "Save aborted"
