from __future__ import annotations

from typing import Iterable, List, Optional

import pytest

from pico_engine.adapters.terminal.keys import KeyDecoder, control_key


class ScriptedReader:
    """Byte source that reports a timeout once the script runs dry."""

    def __init__(self, data: bytes) -> None:
        self._pending: List[int] = list(data)
        self.timeouts: List[Optional[float]] = []

    def __call__(self, timeout: Optional[float]) -> bytes:
        self.timeouts.append(timeout)
        if not self._pending:
            return b""
        return bytes([self._pending.pop(0)])


def decode_all(data: bytes) -> Iterable[str]:
    decoder = KeyDecoder(ScriptedReader(data))
    keys = []
    while True:
        try:
            keys.append(decoder.read_key().token)
        except EOFError:
            return keys


@pytest.mark.parametrize(
    "data,expected",
    [
        (b"\x1b[A", "UP"),
        (b"\x1b[B", "DOWN"),
        (b"\x1b[C", "RIGHT"),
        (b"\x1b[D", "LEFT"),
        (b"\x1b[H", "HOME"),
        (b"\x1b[F", "END"),
        (b"\x1bOH", "HOME"),
        (b"\x1bOF", "END"),
        (b"\x1b[1~", "HOME"),
        (b"\x1b[7~", "HOME"),
        (b"\x1b[4~", "END"),
        (b"\x1b[8~", "END"),
        (b"\x1b[3~", "DELETE"),
        (b"\x1b[5~", "PAGE_UP"),
        (b"\x1b[6~", "PAGE_DOWN"),
    ],
)
def test_escape_sequences(data: bytes, expected: str) -> None:
    assert list(decode_all(data)) == [expected]


def test_lone_escape() -> None:
    assert list(decode_all(b"\x1b")) == ["ESC"]


def test_unknown_sequence_collapses_to_escape() -> None:
    assert list(decode_all(b"\x1b[Z")) == ["ESC"]


def test_control_bytes() -> None:
    assert list(decode_all(b"\x11\x13\x7f\x08\r\t")) == [
        "ctrl+q",
        "ctrl+s",
        "BACKSPACE",
        "BACKSPACE",
        "ENTER",
        "TAB",
    ]


def test_tab_carries_text() -> None:
    assert control_key(0x09).insertable == "\t"


def test_printable_and_utf8() -> None:
    decoder = KeyDecoder(ScriptedReader("aé".encode("utf-8")))

    first = decoder.read_key()
    second = decoder.read_key()

    assert first.insertable == "a"
    assert second.insertable == "é"


def test_escape_follow_up_reads_use_timeout() -> None:
    reader = ScriptedReader(b"\x1b[A")
    KeyDecoder(reader, timeout=0.05).read_key()

    assert reader.timeouts == [None, 0.05, 0.05]


def test_end_of_input_raises() -> None:
    with pytest.raises(EOFError):
        KeyDecoder(ScriptedReader(b"")).read_key()


def test_keys_typed_right_after_escape_are_kept() -> None:
    assert list(decode_all(b"\x1bix")) == ["ESC", "i", "x"]


def test_escape_then_single_key_before_timeout() -> None:
    assert list(decode_all(b"\x1bO")) == ["ESC", "O"]


def test_escape_then_open_above_and_text() -> None:
    assert list(decode_all(b"\x1bOab")) == ["ESC", "O", "a", "b"]


def test_escape_pair() -> None:
    assert list(decode_all(b"\x1b\x1b[A")) == ["ESC", "UP"]
