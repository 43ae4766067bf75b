from __future__ import annotations

from pico_engine.buffer import Document
from pico_engine.buffer.document import JOIN_MARKER


def make_document(*lines: str) -> Document:
    return Document(list(lines))


def assert_consistent(document: Document) -> None:
    assert document.line_count >= 1
    for line in document:
        assert len(line.render) == len(line.highlight)


def test_empty_document_has_one_line() -> None:
    document = Document()

    assert document.snapshot() == ("",)
    assert document.dirty == 0


def test_load_strips_line_endings() -> None:
    document = Document.from_text("one\r\ntwo\nthree\n")

    assert document.snapshot() == ("one", "two", "three")
    assert document.dirty == 0


def test_load_empty_text() -> None:
    assert Document.from_text("").snapshot() == ("",)


def test_insert_line_clamps_index() -> None:
    document = make_document("a")

    document.insert_line(99, "z")
    document.insert_line(-5, "first")

    assert document.snapshot() == ("first", "a", "z")
    assert document.dirty == 2


def test_delete_last_line_leaves_empty_line() -> None:
    document = make_document("only")

    document.delete_line(0)

    assert document.snapshot() == ("",)
    assert document.dirty == 1


def test_delete_line_out_of_range_is_ignored() -> None:
    document = make_document("a", "b")

    document.delete_line(7)

    assert document.snapshot() == ("a", "b")
    assert document.dirty == 0


def test_insert_char_appends_line_at_end() -> None:
    document = make_document("a")

    document.insert_char(1, 0, "x")

    assert document.snapshot() == ("a", "x")


def test_delete_char_at_document_start_is_noop() -> None:
    document = make_document("abc")

    assert document.delete_char(0, 0) is None
    assert document.dirty == 0
    assert document.snapshot() == ("abc",)


def test_delete_char_joins_lines() -> None:
    document = make_document("ab", "cd")

    removed = document.delete_char(1, 0)

    assert removed == JOIN_MARKER
    assert document.snapshot() == ("abcd",)
    assert document.dirty > 0


def test_delete_char_returns_removed_character() -> None:
    document = make_document("abc")

    assert document.delete_char(0, 2) == "b"
    assert document.snapshot() == ("ac",)


def test_insert_newline_splits_or_inserts_before() -> None:
    document = make_document("hello")

    document.insert_newline(0, 2)
    assert document.snapshot() == ("he", "llo")

    document.insert_newline(1, 0)
    assert document.snapshot() == ("he", "", "llo")


def test_serialize_appends_trailing_newline() -> None:
    document = make_document("a", "b")

    assert document.serialize() == b"a\nb\n"


def test_surrogateescape_round_trip() -> None:
    raw = b"caf\xe9\n"
    document = Document.from_text(raw.decode("utf-8", errors="surrogateescape"))

    assert document.serialize() == raw


def test_random_edits_keep_document_consistent() -> None:
    document = make_document("x(1)", "\ty")
    edits = [
        (document.insert_char, (0, 1, "\t")),
        (document.delete_char, (1, 0)),
        (document.delete_char, (0, 0)),
        (document.insert_char, (5, 99, "q")),
        (document.delete_char, (0, 3)),
        (document.insert_newline, (0, 1)),
        (document.delete_line, (0,)),
        (document.delete_line, (0,)),
        (document.delete_line, (0,)),
    ]
    for operation, args in edits:
        operation(*args)
        assert_consistent(document)
