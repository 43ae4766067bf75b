"""Routes keys to the prompt overlay or the active mode and switches modes."""

from __future__ import annotations

from typing import Dict, Optional, Type

from pico_engine.keymaps import KeymapRegistry
from pico_engine.keymaps.defaults import load_default_keymaps
from pico_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import KeymapServices
from .prompt import handle_prompt_key

# Statuses that keep the quit countdown running.
QUIT_STATUSES = frozenset({"quit", "quit_pending"})


class ModeManager:
    """Owns the registered modes and the keymaps they resolve through.

    Without an explicit ``keymaps`` the default bindings are loaded into a
    fresh registry. The first registered mode becomes active.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymaps: Optional[KeymapServices] = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        if keymaps is None:
            registry = KeymapRegistry(logger_name="pico_engine.keymaps")
            if load_defaults:
                load_default_keymaps(registry)
            keymaps = KeymapServices.for_registry(registry)
        self.keymaps = keymaps.attach(context)
        self.logger = telemetry.get_logger("pico_engine.modes")
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.refresh_flags()

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._modes.get(self._active) if self._active else None

    @property
    def active_name(self) -> Optional[str]:
        return self._active

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        mode = mode_cls(self.context)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        target = self._modes.get(name)
        if target is None:
            raise KeyError(f"Unknown mode '{name}'")
        if name == self._active:
            return
        previous = self._active
        current = self.active_mode
        if current is not None:
            current.on_exit(name)
        self._active = name
        target.on_enter(previous)
        telemetry.record_event("mode.switch", data={"from": previous, "to": name})
        self.context.bus.emit("mode.switch", name)

    def refresh_flags(self) -> None:
        """Recompute the flags ``when`` clauses test."""

        document = self.context.buffer.document
        self.keymaps.flags["has_filename"] = bool(document.filename)
        self.keymaps.flags["dirty"] = document.dirty > 0

    def handle_key(self, key: KeyInput) -> ModeResult:
        self.refresh_flags()
        prompt = self.context.prompt
        if prompt is not None:
            with telemetry.span(
                "mode::prompt",
                component="modes",
                metadata={"key": key.token, "prompt": prompt.kind.value},
            ):
                result = handle_prompt_key(self.context, key)
            self._reset_quit_counter()
            return result

        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name}", component="modes", metadata={"key": key.token}
        ):
            result = mode.handle_key(key)
        if result.status not in QUIT_STATUSES:
            self._reset_quit_counter()
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result

    def _reset_quit_counter(self) -> None:
        self.context.quit_remaining = self.context.config.quit_times


__all__ = ["ModeManager", "QUIT_STATUSES"]
