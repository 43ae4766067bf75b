"""``pico`` console entry point: run the editor in the raw terminal."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from pico_engine.display.frame import CLEAR_SCREEN, CURSOR_HOME
from pico_engine.editor import Editor
from pico_engine.errors import FatalIOError
from pico_engine.runtime import telemetry
from pico_engine.runtime.config import EditorConfig

from .console import RawTerminal, window_size
from .keys import KeyDecoder


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pico", description="Small terminal text editor.")
    parser.add_argument("path", nargs="?", help="File to open")
    parser.add_argument(
        "--tab-stop",
        type=int,
        default=None,
        help="Columns per tab stop (default: PICO_ENGINE_TAB_STOP or 2)",
    )
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> EditorConfig:
    config = EditorConfig.from_env()
    if args.tab_stop is None:
        return config
    return EditorConfig(
        tab_stop=args.tab_stop,
        scroll_padding=config.scroll_padding,
        quit_times=config.quit_times,
        message_timeout=config.message_timeout,
        gutter=config.gutter,
        prompt_maxlen=config.prompt_maxlen,
    )


def _clear(terminal: RawTerminal) -> None:
    terminal.write(f"{CLEAR_SCREEN}{CURSOR_HOME}".encode())


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Run one editing session; returns the process exit status."""

    args = _parse_args(argv)
    try:
        config = _build_config(args)
    except ValueError as exc:
        sys.stderr.write(f"pico: {exc}\n")
        return 2

    logger = telemetry.get_logger("pico_engine.terminal")
    editor = Editor(config=config, screen=window_size())
    try:
        if args.path:
            editor.open(args.path)
        with RawTerminal() as terminal:
            decoder = KeyDecoder(terminal.read_byte)
            try:
                while not editor.exit_requested:
                    size = window_size()
                    if size != editor.screen:
                        editor.resize(size.rows, size.cols)
                    terminal.write(editor.compose().encode())
                    try:
                        key = decoder.read_key()
                    except EOFError:
                        break
                    editor.process_key(key)
            finally:
                _clear(terminal)
    except FatalIOError as exc:
        logger.error(f"fatal: {exc}")
        sys.stderr.write(f"pico: {exc}\r\n")
        return 1
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
