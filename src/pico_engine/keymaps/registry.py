"""Store of editor actions and the bindings that trigger them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from pico_engine.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Two bindings claim the same keys in one mode under the same guard."""

    def __init__(self, binding: Binding, existing: Binding) -> None:
        super().__init__(
            f"Binding '{binding.id}' ({binding.mode}: {binding.key_signature}) "
            f"clashes with '{existing.id}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Actions by id plus bindings grouped by mode.

    Several bindings may share a key sequence as long as their ``when``
    guards differ (``ctrl+s`` is save with a filename, save-as without);
    the resolver picks among them. An identical guard is a conflict.
    Every change bumps :meth:`revision` so cached tries can be rebuilt.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; ``replace`` evicts a same-id or clashing binding."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            clash = self.find_conflict(binding)
            if not replace:
                if clash is not None:
                    raise KeymapConflictError(binding, clash)
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
            if clash is not None:
                handle.add_metadata("evicted", clash.id)
                del self._bindings[clash.id]
            self._bindings[binding.id] = binding
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            self._revision += 1
        return binding

    def find_conflict(self, binding: Binding) -> Optional[Binding]:
        for existing in self.iter_bindings(binding.mode):
            if existing.id == binding.id:
                continue
            if (
                existing.key_signature == binding.key_signature
                and existing.guard == binding.guard
            ):
                return existing
        return None

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def modes(self) -> List[str]:
        return sorted({binding.mode for binding in self._bindings.values()})

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(self.modes()),
        )


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]
