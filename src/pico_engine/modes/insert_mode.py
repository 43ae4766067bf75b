"""Insert mode: bound keys run actions, everything printable is typed."""

from __future__ import annotations

from pico_engine.actions.edit import insert_typed

from .base_mode import INSERT, KeyInput, ModeResult
from .keymap_helpers import KeymapMode


class InsertMode(KeymapMode):
    name = INSERT

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = key.insertable
        if text is None:
            return ModeResult(consumed=False, status="unbound")
        return insert_typed(self.context, text)
