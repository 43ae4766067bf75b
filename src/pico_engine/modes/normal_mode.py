"""Normal mode: single keys are commands; unbound keys are ignored."""

from __future__ import annotations

from .base_mode import NORMAL, KeyInput, ModeResult
from .keymap_helpers import KeymapMode


class NormalMode(KeymapMode):
    name = NORMAL

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=True, status="ignored")
