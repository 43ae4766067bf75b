"""Single-line prompt overlay used for save-as, goto-line and search.

While ``context.prompt`` is set every key is routed here instead of the
active mode. Editing is shared; what confirm and cancel do depends on the
prompt kind.
"""

from __future__ import annotations

from typing import Callable, Dict

from pico_engine.actions import file as file_actions
from pico_engine.actions import motion as motion_actions
from pico_engine.actions import search as search_actions

from .base_mode import (
    BACKSPACE,
    DELETE,
    ENTER,
    ESCAPE,
    KeyInput,
    ModeContext,
    ModeResult,
    Prompt,
    PromptKind,
)

Confirm = Callable[[ModeContext, Prompt], ModeResult]
Cancel = Callable[[ModeContext, Prompt], ModeResult]


def _confirm_goto(context: ModeContext, prompt: Prompt) -> ModeResult:
    return motion_actions.goto_line(context, prompt.text)


def _confirm_save_as(context: ModeContext, prompt: Prompt) -> ModeResult:
    return file_actions.save_as(context, prompt.text)


def _cancel_save_as(context: ModeContext, prompt: Prompt) -> ModeResult:
    del prompt
    return file_actions.abort_save(context)


def _cancel_plain(context: ModeContext, prompt: Prompt) -> ModeResult:
    del context, prompt
    return ModeResult(consumed=True, status="prompt_cancelled")


_CONFIRM: Dict[PromptKind, Confirm] = {
    PromptKind.GOTO_LINE: _confirm_goto,
    PromptKind.SAVE_AS: _confirm_save_as,
    PromptKind.SEARCH: search_actions.finish_search,
}

_CANCEL: Dict[PromptKind, Cancel] = {
    PromptKind.GOTO_LINE: _cancel_plain,
    PromptKind.SAVE_AS: _cancel_save_as,
    PromptKind.SEARCH: search_actions.cancel_search,
}


def accepts(prompt: Prompt, ch: str) -> bool:
    if len(ch) != 1 or not ch.isprintable():
        return False
    if prompt.kind is PromptKind.GOTO_LINE:
        return ch.isdigit()
    return True


def _is_erase(key: KeyInput) -> bool:
    if key.key in (BACKSPACE, DELETE):
        return True
    return key.is_ctrl and key.key == "h"


def _finish(context: ModeContext, prompt: Prompt, key: KeyInput, handlers) -> ModeResult:
    if prompt.kind is PromptKind.SEARCH:
        search_actions.search_step(context, prompt, key)
    context.close_prompt()
    context.set_message("")
    return handlers[prompt.kind](context, prompt)


def handle_prompt_key(context: ModeContext, key: KeyInput) -> ModeResult:
    """Feed ``key`` to the active prompt."""

    prompt = context.prompt
    if prompt is None:
        return ModeResult(consumed=False, status="no_prompt")

    if key.key == ESCAPE:
        return _finish(context, prompt, key, _CANCEL)

    if key.key == ENTER:
        if prompt.text:
            return _finish(context, prompt, key, _CONFIRM)
    elif _is_erase(key):
        prompt.text = prompt.text[:-1]
    elif not key.is_ctrl and key.text and accepts(prompt, key.text):
        if len(prompt.text) < prompt.maxlen:
            prompt.text += key.text

    if prompt.kind is PromptKind.SEARCH:
        search_actions.search_step(context, prompt, key)
    return ModeResult(consumed=True, status="prompt")


__all__ = ["handle_prompt_key", "accepts"]
