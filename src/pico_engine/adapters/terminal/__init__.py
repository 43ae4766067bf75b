"""Raw-terminal host: termios raw mode, byte-level key decoding."""

from .console import RawTerminal, window_size
from .keys import KeyDecoder

__all__ = ["KeyDecoder", "RawTerminal", "window_size"]
