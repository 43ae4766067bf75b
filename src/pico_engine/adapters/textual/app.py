"""Executable Textual app that hosts the editor."""

from __future__ import annotations

import argparse
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.style import Style
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use pico_engine.adapters.textual.app"
    ) from exc

from pico_engine.buffer.viewport import ScreenSize
from pico_engine.display import Frame, FrameRow
from pico_engine.editor import Editor
from pico_engine.errors import FatalIOError
from pico_engine.runtime import telemetry
from pico_engine.runtime.config import EditorConfig

from .controller import TextualEditorAdapter, TextualUIHooks

ANSI_COLORS = {
    31: "red",
    32: "green",
    33: "yellow",
    34: "blue",
    35: "magenta",
    37: "white",
}


def _row_text(row: FrameRow, width: int) -> Text:
    text = Text(row.gutter, no_wrap=True)
    for segment in row.segments:
        if segment.category:
            style = Style(
                color=ANSI_COLORS.get(segment.color), underline=segment.underline
            )
            text.append(segment.text, style=style)
        else:
            text.append(segment.text)
    text.truncate(width, pad=True)
    return text


def frame_to_text(frame: Frame) -> Text:
    """Render a frame as rich text with the cursor cell reversed."""

    lines = [_row_text(row, frame.width) for row in frame.rows]
    lines.append(Text(frame.status, style="reverse", no_wrap=True))
    lines.append(Text(frame.message, style="bold", no_wrap=True))
    row, col = frame.cursor
    if 0 <= row < len(frame.rows):
        lines[row].stylize("reverse", col, col + 1)
    return Text("\n").join(lines)


class PicoTextualApp(App[None]):
    """Full-screen Textual host drawing the same frame as the terminal host."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-view {
		height: 1fr;
		padding: 0;
		content-align: left top;
	}
	"""

    # Textual binds ctrl+q to an immediate quit; the editor owns that key.
    BINDINGS = [Binding("ctrl+q", "editor_quit", "Quit", show=False, priority=True)]

    def __init__(self, *, path: Optional[str] = None, config: EditorConfig | None = None) -> None:
        super().__init__()
        self._path = path
        self._config = config
        self.editor: Editor | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._view: Static | None = None
        self.logger = telemetry.get_logger("pico_engine.textual")

    def compose(self) -> ComposeResult:
        self._view = Static("", id="editor-view")
        yield self._view

    def on_mount(self) -> None:
        size = ScreenSize(rows=self.size.height, cols=self.size.width)
        self.editor = Editor(config=self._config or EditorConfig.from_env(), screen=size)
        if self._path:
            try:
                self.editor.open(self._path)
            except FatalIOError as exc:
                self.exit(message=f"pico: {exc}", return_code=1)
                return
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            handle_event=self._handle_event,
            request_exit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)
        self.set_interval(1.0, self._tick)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.height, event.size.width)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        modifiers = ("ctrl",) if event.key.startswith("ctrl+") else ()
        self.adapter.handle_textual_key(
            event.key, text=event.character, modifiers=modifiers
        )
        event.stop()
        event.prevent_default()

    def action_editor_quit(self) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("ctrl+q", modifiers=("ctrl",))

    def _tick(self) -> None:
        # Lets an expired status message disappear without a keypress.
        if self.adapter:
            self.adapter.refresh()

    def _update_frame(self, frame: Frame) -> None:
        if self._view:
            self._view.update(frame_to_text(frame))

    def _handle_event(self, name: str, payload: Any | None) -> None:
        telemetry.record_event("textual.bus", level="debug", data={"event": name, "payload": payload})

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pico-textual", description="Run the editor inside a Textual app."
    )
    parser.add_argument("path", nargs="?", help="File to open")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = PicoTextualApp(path=args.path)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
