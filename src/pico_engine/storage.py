"""File persistence for documents."""

from __future__ import annotations

import os

from pico_engine.buffer.document import decode
from pico_engine.errors import FatalIOError, RecoverableIOError
from pico_engine.runtime.telemetry import record_event, span

FILE_MODE = 0o644


def load_text(path: str) -> str:
    """Read ``path`` and decode it; a missing or unreadable file is fatal."""

    with span("storage::load", component="storage", metadata={"path": path}):
        try:
            with open(path, "rb") as handle:
                data = handle.read()
        except OSError as exc:
            raise FatalIOError(f"{path}: {exc.strerror or exc}", path=path) from exc
    record_event("file.load", data={"path": path, "bytes": len(data)})
    return decode(data)


def save_bytes(path: str, data: bytes) -> int:
    """Write ``data`` over ``path`` (created 0644 if missing); return bytes written."""

    with span(
        "storage::save", component="storage", metadata={"path": path}
    ) as handle:
        try:
            fd = os.open(path, os.O_RDWR | os.O_CREAT, FILE_MODE)
        except OSError as exc:
            raise RecoverableIOError(exc.strerror or str(exc), path=path) from exc
        try:
            os.ftruncate(fd, len(data))
            written = 0
            view = memoryview(data)
            while written < len(data):
                written += os.write(fd, view[written:])
        except OSError as exc:
            raise RecoverableIOError(exc.strerror or str(exc), path=path) from exc
        finally:
            os.close(fd)
        handle.add_metadata("bytes", written)
    return written


__all__ = ["FILE_MODE", "load_text", "save_bytes"]
