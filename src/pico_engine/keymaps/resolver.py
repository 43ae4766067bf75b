"""Resolve pressed key sequences against the registry, one trie per mode."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from pico_engine.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class _Node:
    bindings: List[Binding] = field(default_factory=list)
    children: Dict[str, "_Node"] = field(default_factory=dict)


def _build_trie(bindings: Sequence[Binding]) -> _Node:
    root = _Node()
    for binding in bindings:
        node = root
        for token in binding.sequence.tokens:
            node = node.children.setdefault(token, _Node())
        node.bindings.append(binding)
    return root


def _rank(binding: Binding) -> Tuple[int, int, str]:
    # Higher priority first, then the binding with more satisfied clauses.
    return (-binding.priority, -len(binding.when), binding.id)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """``match`` runs an action, ``pending`` waits for another key, ``miss`` gives up.

    ``consumed`` counts the tokens that walked the trie; ``next_expected``
    lists the keys that would continue a pending sequence.
    """

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: Tuple[str, ...] = ()


class KeymapResolver:
    """Walks the pressed tokens down the trie for the active mode.

    A node that both completes a binding and continues into longer ones
    resolves immediately: there are no key timeouts, so a sequence only
    stays pending while nothing allowed matches yet.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, Tuple[int, _Node]] = {}

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        flags = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "keys": " ".join(tokens)},
        ) as handle:
            result = self._walk(self._trie(mode), tuple(tokens), flags)
            handle.add_metadata("status", result.status)
            return result

    def reset(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._tries.clear()
        else:
            self._tries.pop(mode, None)

    def _walk(
        self, node: _Node, tokens: Tuple[str, ...], flags: Mapping[str, bool]
    ) -> ResolutionResult:
        for depth, token in enumerate(tokens):
            child = node.children.get(token)
            if child is None:
                return ResolutionResult(status="miss", consumed=depth)
            node = child

        allowed = sorted((b for b in node.bindings if b.allows(flags)), key=_rank)
        if allowed:
            best = allowed[0]
            action = self._registry.get_action(best.action_id)
            return ResolutionResult(
                status="match",
                match=ResolutionMatch(binding=best, action=action),
                consumed=len(tokens),
            )
        if node.children:
            return ResolutionResult(
                status="pending",
                consumed=len(tokens),
                next_expected=tuple(sorted(node.children)),
            )
        return ResolutionResult(status="miss", consumed=len(tokens))

    def _trie(self, mode: str) -> _Node:
        revision = self._registry.revision()
        cached = self._tries.get(mode)
        if cached is not None and cached[0] == revision:
            return cached[1]
        root = _build_trie(list(self._registry.iter_bindings(mode)))
        self._tries[mode] = (revision, root)
        return root


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]
