"""Editor session: one document, its view, the modes and the frame composer."""

from __future__ import annotations

from typing import Optional

from pico_engine import storage
from pico_engine.buffer import Buffer, Document
from pico_engine.buffer.viewport import ScreenSize, scroll
from pico_engine.display import Frame, FrameComposer
from pico_engine.modes import (
    INSERT,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
)
from pico_engine.modes.mode_manager import ModeManager
from pico_engine.runtime import telemetry
from pico_engine.runtime.config import EditorConfig

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"


def create_default_manager(
    context: ModeContext, *, initial_mode: str = INSERT
) -> ModeManager:
    """Wire the default keymaps and both modes around ``context``."""

    manager = ModeManager(context)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.switch_mode(initial_mode)
    return manager


class Editor:
    """Host-facing facade.

    Hosts feed :class:`KeyInput` events to :meth:`process_key`, draw what
    :meth:`compose` returns and stop once :attr:`exit_requested` is set.
    The session starts in insert mode so typing edits straight away.
    """

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        screen: Optional[ScreenSize] = None,
        *,
        composer: Optional[FrameComposer] = None,
        initial_mode: str = INSERT,
    ) -> None:
        self.config = config or EditorConfig()
        document = Document(tab_stop=self.config.tab_stop)
        self.context = ModeContext(
            buffer=Buffer(document=document),
            bus=ModeBus(),
            config=self.config,
            screen=screen or ScreenSize(),
        )
        self.manager = create_default_manager(self.context, initial_mode=initial_mode)
        self.composer = composer or FrameComposer()
        self.logger = telemetry.get_logger("pico_engine.editor")
        self.set_message(HELP_MESSAGE)

    @property
    def buffer(self) -> Buffer:
        return self.context.buffer

    @property
    def document(self) -> Document:
        return self.context.buffer.document

    @property
    def mode(self) -> str:
        return self.manager.active_name or INSERT

    @property
    def screen(self) -> ScreenSize:
        return self.context.screen

    @property
    def exit_requested(self) -> bool:
        return self.context.exit_requested

    def open(self, path: str) -> None:
        """Load ``path``; raises :class:`~pico_engine.errors.FatalIOError`."""

        with telemetry.span("editor::open", component="editor", metadata={"path": path}):
            text = storage.load_text(path)
            self.buffer.load(text, filename=path)
        self.logger.info(f"opened {path} ({self.document.line_count} lines)")
        self.manager.refresh_flags()

    def process_key(self, key: KeyInput) -> ModeResult:
        result = self.manager.handle_key(key)
        self._scroll()
        return result

    def resize(self, rows: int, cols: int) -> None:
        self.context.screen = ScreenSize(rows=rows, cols=cols)
        self._scroll()

    def set_message(self, text: str, *, now: Optional[float] = None) -> None:
        self.context.message.set(text, now)

    def compose(self, now: Optional[float] = None) -> Frame:
        return self.composer.compose(self.context, self.mode, now=now)

    def _scroll(self) -> None:
        screen = self.context.screen
        scroll(
            self.buffer.state,
            self.document,
            screen.text_rows,
            screen.text_cols(self.config.gutter),
            self.config.scroll_padding,
        )


__all__ = ["Editor", "HELP_MESSAGE", "create_default_manager"]
