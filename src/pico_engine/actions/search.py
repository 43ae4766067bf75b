"""Incremental search over rendered lines."""

from __future__ import annotations

from pico_engine.buffer import Highlight
from pico_engine.modes.base_mode import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ENTER,
    ESCAPE,
    KeyInput,
    ModeContext,
    ModeResult,
    Prompt,
    PromptKind,
    SearchState,
)
from pico_engine.runtime.telemetry import record_event

SEARCH_LABEL = "Search: "
FORWARD_KEYS = frozenset({ARROW_RIGHT, ARROW_DOWN})
BACKWARD_KEYS = frozenset({ARROW_LEFT, ARROW_UP})


def start_search(context: ModeContext, match) -> ModeResult:
    del match
    context.open_prompt(PromptKind.SEARCH, SEARCH_LABEL)
    return ModeResult(consumed=True, status="prompt_open", message="search")


def restore_highlight(context: ModeContext, search: SearchState) -> None:
    """Put back the highlight a previous match overlaid, if any."""

    if search.saved_line is None or search.saved_highlight is None:
        return
    lines = context.buffer.document.lines
    if search.saved_line < len(lines):
        line = lines[search.saved_line]
        if len(line.highlight) == len(search.saved_highlight):
            line.highlight = list(search.saved_highlight)
    search.saved_line = None
    search.saved_highlight = None


def search_step(context: ModeContext, prompt: Prompt, key: KeyInput) -> int | None:
    """Advance the search for ``prompt.text`` after ``key``.

    Returns the matched line index, or ``None`` when nothing matched.
    """

    search = prompt.search
    if search is None:
        return None
    restore_highlight(context, search)

    if key.key in (ENTER, ESCAPE):
        search.last_match = None
        search.direction = 1
        return None
    if key.key in FORWARD_KEYS:
        search.direction = 1
    elif key.key in BACKWARD_KEYS:
        search.direction = -1
    else:
        search.last_match = None
        search.direction = 1

    query = prompt.text
    lines = context.buffer.document.lines
    total = len(lines)
    if not query or total == 0:
        return None

    if search.last_match is None:
        search.direction = 1
        current = min(search.origin, total - 1) - 1
    else:
        current = search.last_match

    for _ in range(total):
        current = (current + search.direction) % total
        line = lines[current]
        column = line.render.find(query)
        if column == -1:
            continue
        state = context.buffer.state
        search.last_match = current
        state.cy = current
        state.cx = line.rx_to_cx(column)
        state.rowoff = total
        search.saved_line = current
        search.saved_highlight = list(line.highlight)
        end = column + len(query)
        line.highlight[column:end] = [Highlight.MATCH] * (end - column)
        record_event("search.hit", level="debug", data={"line": current, "column": column})
        return current
    return None


def cancel_search(context: ModeContext, prompt: Prompt) -> ModeResult:
    """Return the view to where it was when the search began."""

    if prompt.snapshot is not None:
        context.buffer.state.restore(prompt.snapshot)
    return ModeResult(consumed=True, status="search_cancelled")


def finish_search(context: ModeContext, prompt: Prompt) -> ModeResult:
    del context
    return ModeResult(consumed=True, status="search_done", message=prompt.text)


__all__ = [
    "SEARCH_LABEL",
    "start_search",
    "restore_highlight",
    "search_step",
    "cancel_search",
    "finish_search",
]
