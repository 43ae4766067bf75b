"""Textual-free bridge between an :class:`Editor` and UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Iterable, Optional

from pico_engine.display import Frame
from pico_engine.editor import Editor
from pico_engine.modes import KeyInput, ModeResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_frame: Callable[[Frame], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


# Textual key names that differ from the engine's.
TEXTUAL_KEYS: Dict[str, str] = {
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "pageup": "PAGE_UP",
    "pagedown": "PAGE_DOWN",
    "home": "HOME",
    "end": "END",
    "delete": "DELETE",
    "backspace": "BACKSPACE",
    "escape": "ESC",
    "enter": "ENTER",
    "tab": "TAB",
}


def translate_key(
    key: str, character: Optional[str] = None, modifiers: Iterable[str] = ()
) -> KeyInput:
    """Build a :class:`KeyInput` from a Textual key name."""

    mods = tuple(str(mod).lower() for mod in modifiers)
    if key in TEXTUAL_KEYS:
        name = TEXTUAL_KEYS[key]
        text = "\t" if name == "TAB" else None
        return KeyInput(key=name, modifiers=mods, text=text)
    if key.startswith("ctrl+") and len(key) == 6:
        return KeyInput.ctrl(key[-1])
    if character and len(character) == 1 and character.isprintable():
        return KeyInput(key=character, modifiers=mods, text=character)
    return KeyInput(key=key.upper(), modifiers=mods)


class TextualEditorAdapter:
    """Feeds keys to the editor and pushes each new frame to the hooks."""

    EVENTS = ("mode.switch", "prompt.start", "prompt.end")

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    def resize(self, rows: int, cols: int) -> None:
        self.editor.resize(rows, cols)
        self.refresh()

    def handle_textual_key(
        self, key: str, *, text: Optional[str] = None, modifiers: Iterable[str] = ()
    ) -> ModeResult:
        """Translate a Textual key event, dispatch it and redraw."""

        key_input = translate_key(key, text, modifiers)
        result = self.editor.process_key(key_input)
        self._trace(
            f"{key_input.token} -> {result.status}",
            switch_to=result.switch_to,
            consumed=result.consumed,
        )
        self.refresh()
        if self.editor.exit_requested:
            self.hooks.request_exit()
        return result

    def refresh(self, now: Optional[float] = None) -> Frame:
        frame = self.editor.compose(now)
        self.hooks.update_frame(frame)
        self.hooks.update_status(frame.status)
        return frame

    def _subscribe_events(self) -> None:
        for event in self.EVENTS:
            self.editor.context.bus.subscribe(event, partial(self._forward, event))

    def _forward(self, name: str, payload: object | None) -> None:
        self._trace(f"bus {name}", payload=payload)
        self.hooks.handle_event(name, payload)

    def _trace(self, summary: str, **fields: object) -> None:
        buffer = self.editor.buffer
        cy, cx = buffer.cursor
        details = {
            "mode": self.editor.mode,
            "at": f"{cy + 1}:{cx}",
            "dirty": buffer.document.dirty,
            **{k: v for k, v in fields.items() if v is not None},
        }
        self.hooks.log(summary + " " + " ".join(f"{k}={v}" for k, v in details.items()))


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "translate_key"]
