"""Save, save-as and quit."""

from __future__ import annotations

from pico_engine import storage
from pico_engine.errors import RecoverableIOError
from pico_engine.modes.base_mode import ModeContext, ModeResult, PromptKind
from pico_engine.runtime.telemetry import record_event

SAVE_AS_LABEL = "Save as: "


def write_document(context: ModeContext) -> ModeResult:
    """Persist the buffer under its current filename and report the outcome."""

    document = context.buffer.document
    if not document.filename:
        return start_save_as(context, None)
    data = document.serialize()
    try:
        written = storage.save_bytes(document.filename, data)
    except RecoverableIOError as exc:
        context.set_message(f"Can't save! I/O error: {exc}")
        record_event(
            "file.save_failed",
            level="warning",
            data={"path": document.filename, "reason": str(exc)},
        )
        return ModeResult(consumed=True, status="save_failed")
    document.dirty = 0
    context.set_message(f"{written} bytes written to disk")
    record_event("file.save", data={"path": document.filename, "bytes": written})
    return ModeResult(consumed=True, status="saved")


def save(context: ModeContext, match) -> ModeResult:
    del match
    return write_document(context)


def start_save_as(context: ModeContext, match) -> ModeResult:
    del match
    context.open_prompt(PromptKind.SAVE_AS, SAVE_AS_LABEL)
    return ModeResult(consumed=True, status="prompt_open", message="save_as")


def save_as(context: ModeContext, filename: str) -> ModeResult:
    context.buffer.document.filename = filename
    return write_document(context)


def abort_save(context: ModeContext) -> ModeResult:
    context.set_message("Save aborted")
    return ModeResult(consumed=True, status="save_aborted")


def quit_editor(context: ModeContext, match) -> ModeResult:
    """Quit, asking for repeated presses while the buffer has unsaved changes."""

    del match
    context.quit_remaining -= 1
    if context.buffer.document.dirty and context.quit_remaining > 0:
        context.set_message(
            "WARNING! File has unsaved changes. "
            f"Press C-Q {context.quit_remaining} more time(s) to quit."
        )
        return ModeResult(consumed=True, status="quit_pending")
    context.exit_requested = True
    record_event("editor.quit", data={"dirty": context.buffer.document.dirty})
    return ModeResult(consumed=True, status="quit")


__all__ = [
    "SAVE_AS_LABEL",
    "write_document",
    "save",
    "start_save_as",
    "save_as",
    "abort_save",
    "quit_editor",
]
