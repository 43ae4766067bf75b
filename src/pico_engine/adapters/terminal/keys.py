"""Decode raw terminal bytes into :class:`KeyInput` events."""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from pico_engine.buffer.document import ENCODING
from pico_engine.modes.base_mode import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    DELETE,
    END,
    ENTER,
    ESCAPE,
    HOME,
    PAGE_DOWN,
    PAGE_UP,
    TAB,
    KeyInput,
)

ByteReader = Callable[[Optional[float]], bytes]

ESC_BYTE = 0x1B
DEL_BYTE = 0x7F
CTRL_H = 0x08
SEQUENCE_TIMEOUT = 0.1

CSI_FINALS: Dict[str, str] = {
    "A": ARROW_UP,
    "B": ARROW_DOWN,
    "C": ARROW_RIGHT,
    "D": ARROW_LEFT,
    "H": HOME,
    "F": END,
}

CSI_TILDE: Dict[str, str] = {
    "1": HOME,
    "3": DELETE,
    "4": END,
    "5": PAGE_UP,
    "6": PAGE_DOWN,
    "7": HOME,
    "8": END,
}

SS3_FINALS: Dict[str, str] = {"H": HOME, "F": END}


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def control_key(byte: int) -> KeyInput:
    """Map a single control byte (< 32 or DEL) to a key."""

    if byte in (DEL_BYTE, CTRL_H):
        return KeyInput(BACKSPACE)
    if byte == 0x0D:
        return KeyInput(ENTER)
    if byte == 0x09:
        return KeyInput(TAB, text="\t")
    if byte == ESC_BYTE:
        return KeyInput(ESCAPE)
    return KeyInput.ctrl(chr(byte | 0x60))


class KeyDecoder:
    """Pull one logical key per :meth:`read_key` call from ``reader``.

    ``reader(timeout)`` returns one byte, or ``b""`` when ``timeout`` seconds
    pass without input. ``None`` blocks, and ``b""`` then means end of input.
    An escape byte not followed quickly by a recognised sequence is reported
    as a lone ESC; bytes read after it are replayed as their own keys, except
    the tail of an unknown ``ESC [`` sequence, which is dropped.
    """

    def __init__(self, reader: ByteReader, *, timeout: float = SEQUENCE_TIMEOUT) -> None:
        self._reader = reader
        self._timeout = timeout
        self._pushback: Deque[bytes] = deque()

    def read_key(self) -> KeyInput:
        first = self._pull(None)
        if not first:
            raise EOFError("input closed")
        byte = first[0]
        if byte == ESC_BYTE:
            return self._read_escape()
        if byte < 0x20 or byte == DEL_BYTE:
            return control_key(byte)
        return self._read_text(first)

    def _pull(self, timeout: Optional[float]) -> bytes:
        if self._pushback:
            return self._pushback.popleft()
        return self._reader(timeout)

    def _read_escape(self) -> KeyInput:
        seen: List[bytes] = []
        for _ in range(2):
            data = self._pull(self._timeout)
            if not data:
                break
            seen.append(data)
        text = b"".join(seen).decode("latin-1")

        if text[:1] == "[" and len(text) == 2:
            second = text[1]
            if second.isdigit():
                third = self._pull(self._timeout).decode("latin-1")
                if third == "~" and second in CSI_TILDE:
                    return KeyInput(CSI_TILDE[second])
                return KeyInput(ESCAPE)
            if second in CSI_FINALS:
                return KeyInput(CSI_FINALS[second])
            return KeyInput(ESCAPE)
        if text[:1] == "O" and text[1:] in SS3_FINALS:
            return KeyInput(SS3_FINALS[text[1:]])
        self._pushback.extendleft(reversed(seen))
        return KeyInput(ESCAPE)

    def _read_text(self, first: bytes) -> KeyInput:
        data = first
        for _ in range(_utf8_length(first[0]) - 1):
            more = self._pull(self._timeout)
            if not more:
                break
            data += more
        return KeyInput.char(data.decode(ENCODING, errors="surrogateescape"))


__all__ = ["ByteReader", "KeyDecoder", "control_key", "SEQUENCE_TIMEOUT"]
