from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from pico_engine import storage
from pico_engine.buffer import Document
from pico_engine.errors import FatalIOError, RecoverableIOError


def test_load_missing_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(FatalIOError) as excinfo:
        storage.load_text(str(tmp_path / "missing.txt"))

    assert excinfo.value.path == str(tmp_path / "missing.txt")


def test_save_creates_file_with_mode(tmp_path: Path) -> None:
    target = tmp_path / "new.txt"

    written = storage.save_bytes(str(target), b"abc\n")

    assert written == 4
    assert target.read_bytes() == b"abc\n"
    assert stat.S_IMODE(os.stat(target).st_mode) & 0o600 == 0o600


def test_save_truncates_longer_file(tmp_path: Path) -> None:
    target = tmp_path / "old.txt"
    target.write_bytes(b"a much longer previous content\n")

    storage.save_bytes(str(target), b"short\n")

    assert target.read_bytes() == b"short\n"


def test_save_into_missing_directory_is_recoverable(tmp_path: Path) -> None:
    with pytest.raises(RecoverableIOError):
        storage.save_bytes(str(tmp_path / "nope" / "file.txt"), b"x")


def test_save_load_round_trip(tmp_path: Path) -> None:
    target = tmp_path / "round.txt"
    document = Document(["first", "\tsecond (x)", "", "caf\udce9"])

    storage.save_bytes(str(target), document.serialize())
    loaded = Document.from_text(storage.load_text(str(target)))

    assert loaded.snapshot() == document.snapshot()
