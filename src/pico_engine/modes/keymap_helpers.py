"""Keymap plumbing shared by the normal and insert modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pico_engine.keymaps import KeymapRegistry, KeymapResolver, ResolutionMatch
from pico_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

EXTRAS_KEY = "keymaps"


@dataclass(slots=True)
class KeymapServices:
    """Registry, resolver and the editor flags bindings are gated on."""

    registry: KeymapRegistry
    resolver: KeymapResolver
    flags: Dict[str, bool] = field(default_factory=dict)

    @classmethod
    def for_registry(cls, registry: KeymapRegistry) -> "KeymapServices":
        return cls(registry, KeymapResolver(registry, logger_name="pico_engine.keymaps"))

    def attach(self, context: ModeContext) -> "KeymapServices":
        context.extras[EXTRAS_KEY] = self
        return self


def keymaps_of(context: ModeContext) -> KeymapServices:
    services = context.extras.get(EXTRAS_KEY)
    if not isinstance(services, KeymapServices):
        raise RuntimeError("mode context has no keymaps attached")
    return services


class KeymapMode(Mode):
    """A mode whose keys are looked up in the keymap trie.

    Keys of an unfinished sequence wait in :attr:`pending`. If the sequence
    then misses, the last key is tried again on its own, so ``g x`` still
    runs ``x``. Keys with no binding at all go to :meth:`handle_unbound`.
    """

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.keymaps = keymaps_of(context)
        self.logger = telemetry.get_logger(f"pico_engine.modes.{self.name}")
        self._pending: List[str] = []

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._pending.append(key.token)
        result = self.keymaps.resolver.resolve(
            self.name, self._pending, context=self.keymaps.flags
        )
        if result.status == "pending":
            return ModeResult(consumed=True, status="pending")

        keys, self._pending = self._pending, []
        if result.match is not None:
            return self._run(result.match)
        if len(keys) > 1:
            self.logger.debug(f"sequence {' '.join(keys)} unbound, retrying last key")
            return self.handle_key(key)
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="unbound")

    def _run(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)
        return outcome if isinstance(outcome, ModeResult) else ModeResult(consumed=True)


__all__ = ["EXTRAS_KEY", "KeymapMode", "KeymapServices", "keymaps_of"]
