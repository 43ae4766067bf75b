"""Base classes, key events and the shared editor state every mode sees."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from pico_engine.buffer import Buffer, Highlight, ViewSnapshot
from pico_engine.buffer.viewport import ScreenSize
from pico_engine.runtime.config import EditorConfig

ARROW_UP = "UP"
ARROW_DOWN = "DOWN"
ARROW_LEFT = "LEFT"
ARROW_RIGHT = "RIGHT"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"
HOME = "HOME"
END = "END"
DELETE = "DELETE"
BACKSPACE = "BACKSPACE"
ESCAPE = "ESC"
ENTER = "ENTER"
TAB = "TAB"

NORMAL = "normal"
INSERT = "insert"


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is a named key (``"UP"``, ``"ESC"``...) or the character itself;
    ``text`` is set when the key produces insertable text.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def char(cls, ch: str) -> "KeyInput":
        return cls(key=ch, text=ch)

    @classmethod
    def ctrl(cls, letter: str) -> "KeyInput":
        return cls(key=letter.lower(), modifiers=("ctrl",))

    @property
    def token(self) -> str:
        mods = sorted({m.strip().lower() for m in self.modifiers if m.strip()})
        return "+".join([*mods, self.key])

    @property
    def is_ctrl(self) -> bool:
        return "ctrl" in {m.lower() for m in self.modifiers}

    @property
    def insertable(self) -> Optional[str]:
        """Return the text to insert, or ``None`` for control/named keys."""

        if self.is_ctrl or not self.text:
            return None
        if self.text == "\t" or self.text.isprintable():
            return self.text
        return None


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class StatusMessage:
    """Transient message shown in the bottom row until it expires."""

    text: str = ""
    stamp: float = 0.0

    def set(self, text: str, now: Optional[float] = None) -> None:
        self.text = text
        self.stamp = time.time() if now is None else now

    def visible(self, now: float, timeout: float) -> str:
        if self.text and now - self.stamp < timeout:
            return self.text
        return ""


class PromptKind(Enum):
    SAVE_AS = "save_as"
    GOTO_LINE = "goto_line"
    SEARCH = "search"


@dataclass(slots=True)
class SearchState:
    """Incremental search bookkeeping; lives only while the prompt is open."""

    origin: int
    last_match: Optional[int] = None
    direction: int = 1
    saved_line: Optional[int] = None
    saved_highlight: Optional[List[Highlight]] = None


@dataclass(slots=True)
class Prompt:
    kind: PromptKind
    label: str
    text: str = ""
    maxlen: int = 128
    snapshot: Optional[ViewSnapshot] = None
    search: Optional[SearchState] = None

    @property
    def display(self) -> str:
        return f"{self.label}{self.text}"


@dataclass(slots=True)
class ModeContext:
    """The whole editor state: buffer, view, prompt overlay and services."""

    buffer: Buffer
    bus: "ModeBus"
    config: EditorConfig = field(default_factory=EditorConfig)
    screen: ScreenSize = field(default_factory=ScreenSize)
    message: StatusMessage = field(default_factory=StatusMessage)
    prompt: Optional[Prompt] = None
    quit_remaining: int = 0
    exit_requested: bool = False
    extras: Dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.quit_remaining <= 0:
            self.quit_remaining = self.config.quit_times

    def set_message(self, text: str) -> None:
        self.message.set(text)

    def open_prompt(self, kind: PromptKind, label: str) -> Prompt:
        prompt = Prompt(kind=kind, label=label, maxlen=self.config.prompt_maxlen)
        if kind is PromptKind.SEARCH:
            prompt.snapshot = self.buffer.state.snapshot()
            prompt.search = SearchState(origin=self.buffer.state.cy)
        self.prompt = prompt
        self.bus.emit("prompt.start", kind.value)
        return prompt

    def close_prompt(self) -> None:
        if self.prompt is None:
            return
        kind = self.prompt.kind
        self.prompt = None
        self.bus.emit("prompt.end", kind.value)


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover - abstract
        raise NotImplementedError
