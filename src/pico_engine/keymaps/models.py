"""Value types for key bindings.

A key is written as a token: a bare key (``"a"``, ``"PAGE_UP"``) or
modifiers joined to it with ``+`` (``"ctrl+q"``). Modifiers are lower-cased
and sorted so ``"CTRL+q"`` and ``"ctrl+q"`` name the same key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, FrozenSet, Mapping, Tuple

MODIFIER_SEPARATOR = "+"


def canonical_modifiers(modifiers: Tuple[str, ...]) -> Tuple[str, ...]:
    cleaned = {m.strip().lower() for m in modifiers if m.strip()}
    return tuple(sorted(cleaned))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    modifiers: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", canonical_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return MODIFIER_SEPARATOR.join((*self.modifiers, self.key))

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Read ``"ctrl+q"`` notation; ``"ctrl++"`` is ctrl plus the ``+`` key."""

        body, last = token[:-1], token[-1:]
        if MODIFIER_SEPARATOR not in body:
            return cls(token)
        head, _, tail = body.rpartition(MODIFIER_SEPARATOR)
        return cls(tail + last, tuple(head.split(MODIFIER_SEPARATOR)))


@dataclass(frozen=True, slots=True)
class KeySequence:
    """One or more strokes pressed in order (``g g``)."""

    strokes: Tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("a key sequence needs at least one stroke")

    @classmethod
    def from_strings(cls, *tokens: str) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(token) for token in tokens if token))

    @property
    def tokens(self) -> Tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Requires an editor flag (``has_filename``, ``dirty``) to be set or clear."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        text = expression.strip()
        negated = text.startswith("!")
        flag = text[1:] if negated else text
        if not flag:
            raise ValueError(f"invalid when expression {expression!r}")
        return cls(flag, not negated)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) == self.expected

    def __str__(self) -> str:
        return self.flag if self.expected else f"!{self.flag}"


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A named editor command.

    ``handler(context, match)`` runs the command against the mode context and
    returns a ``ModeResult``.
    """

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for {self.id!r} is not callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: Tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        for name in ("id", "mode", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")
        clauses = tuple(
            c if isinstance(c, WhenClause) else WhenClause.parse(str(c)) for c in self.when
        )
        object.__setattr__(self, "when", clauses)

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)

    @property
    def guard(self) -> FrozenSet[WhenClause]:
        return frozenset(self.when)

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)


__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
    "canonical_modifiers",
]
