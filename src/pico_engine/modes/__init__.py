"""Modes, the prompt overlay and key dispatch.

:class:`~pico_engine.modes.mode_manager.ModeManager` lives in its own module
because it loads the default keymaps, which import the action modules.
"""

from .base_mode import (
    INSERT,
    NORMAL,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    Prompt,
    PromptKind,
    SearchState,
    StatusMessage,
)
from .normal_mode import NormalMode
from .insert_mode import InsertMode

__all__ = [
    "INSERT",
    "NORMAL",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "Prompt",
    "PromptKind",
    "SearchState",
    "StatusMessage",
    "NormalMode",
    "InsertMode",
]
