"""Raw-mode terminal session over stdin/stdout."""

from __future__ import annotations

import os
import select
import shutil
import sys
import termios
import tty
from typing import Any, List, Optional

from pico_engine.buffer.viewport import ScreenSize
from pico_engine.errors import FatalIOError


def window_size(fallback: ScreenSize = ScreenSize()) -> ScreenSize:
    size = shutil.get_terminal_size((fallback.cols, fallback.rows))
    return ScreenSize(rows=size.lines, cols=size.columns)


class RawTerminal:
    """Put the controlling terminal in raw mode for the life of the block.

    The saved attributes are restored on exit, including when the block
    raises, so the invoking shell is left usable.
    """

    def __init__(self, fdin: Optional[int] = None, fdout: Optional[int] = None) -> None:
        self.fdin = sys.stdin.fileno() if fdin is None else fdin
        self.fdout = sys.stdout.fileno() if fdout is None else fdout
        self._saved: Optional[List[Any]] = None

    def __enter__(self) -> "RawTerminal":
        try:
            self._saved = termios.tcgetattr(self.fdin)
            tty.setraw(self.fdin, termios.TCSAFLUSH)
        except termios.error as exc:
            raise FatalIOError(f"tcsetattr: {exc}") from exc
        return self

    def __exit__(self, *exc_info: object) -> bool:
        self.restore()
        return False

    def restore(self) -> None:
        if self._saved is None:
            return
        attributes, self._saved = self._saved, None
        try:
            termios.tcsetattr(self.fdin, termios.TCSAFLUSH, attributes)
        except termios.error as exc:
            raise FatalIOError(f"tcsetattr: {exc}") from exc

    def read_byte(self, timeout: Optional[float] = None) -> bytes:
        """Return one byte, or ``b""`` if ``timeout`` expires first."""

        if timeout is not None:
            ready, _, _ = select.select([self.fdin], [], [], timeout)
            if not ready:
                return b""
        return os.read(self.fdin, 1)

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            written = os.write(self.fdout, view)
            view = view[written:]


__all__ = ["RawTerminal", "window_size"]
