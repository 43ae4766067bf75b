"""Error hierarchy shared by the engine and its hosts."""

from __future__ import annotations


class PicoError(RuntimeError):
    """Base class for editor failures that carry a user-facing message."""


class FatalIOError(PicoError):
    """Terminal setup or file load failed; the host must restore and exit."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class RecoverableIOError(PicoError):
    """A save failed; the document stays dirty and the user may retry."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = ["PicoError", "FatalIOError", "RecoverableIOError"]
