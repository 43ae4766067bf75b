from __future__ import annotations

from pico_engine.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)


def build_resolver(*specs: tuple) -> tuple[KeymapRegistry, KeymapResolver]:
    """Each spec is ``(binding_id, keys, action_id, when, priority)``."""

    registry = KeymapRegistry()
    for binding_id, keys, action_id, when, priority in specs:
        try:
            registry.get_action(action_id)
        except KeyError:
            registry.register_action(ActionRef(action_id, lambda context, match: None))
        registry.register_binding(
            Binding(
                id=binding_id,
                mode="normal",
                sequence=KeySequence.from_strings(*keys),
                action_id=action_id,
                when=when,
                priority=priority,
            )
        )
    return registry, KeymapResolver(registry)


FIRST_LINE = ("normal.first_line", ("g", "g"), "motion.first_line", (), 0)


def test_full_sequence_matches() -> None:
    _, resolver = build_resolver(FIRST_LINE)

    result = resolver.resolve("normal", ("g", "g"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == "normal.first_line"
    assert result.match.action.id == "motion.first_line"
    assert result.consumed == 2


def test_prefix_is_pending() -> None:
    _, resolver = build_resolver(FIRST_LINE)

    result = resolver.resolve("normal", ("g",))

    assert result.status == "pending"
    assert result.next_expected == ("g",)


def test_wrong_continuation_misses() -> None:
    _, resolver = build_resolver(FIRST_LINE)

    result = resolver.resolve("normal", ("g", "x"))

    assert result.status == "miss"
    assert result.consumed == 1


def test_unknown_mode_misses() -> None:
    _, resolver = build_resolver(FIRST_LINE)

    assert resolver.resolve("insert", ("g",)).status == "miss"


def test_when_clause_gates_match() -> None:
    _, resolver = build_resolver(
        ("normal.save", ("ctrl+s",), "file.save", (WhenClause("has_filename"),), 0)
    )

    assert resolver.resolve("normal", ("ctrl+s",), context={}).status == "miss"
    hit = resolver.resolve("normal", ("ctrl+s",), context={"has_filename": True})
    assert hit.status == "match"


def test_guarded_binding_beats_fallback_when_flag_holds() -> None:
    _, resolver = build_resolver(
        ("normal.save_any", ("ctrl+s",), "file.save_as", (), 0),
        ("normal.save", ("ctrl+s",), "file.save", (WhenClause("has_filename"),), 0),
    )

    named = resolver.resolve("normal", ("ctrl+s",), context={"has_filename": True})
    unnamed = resolver.resolve("normal", ("ctrl+s",), context={})

    assert named.match is not None and named.match.binding.id == "normal.save"
    assert unnamed.match is not None and unnamed.match.binding.id == "normal.save_any"


def test_priority_outranks_guard_specificity() -> None:
    _, resolver = build_resolver(
        ("normal.refresh", ("ctrl+l",), "core.refresh", (), 5),
        ("normal.dirty_refresh", ("ctrl+l",), "core.other", (WhenClause("dirty"),), 0),
    )

    result = resolver.resolve("normal", ("ctrl+l",), context={"dirty": True})

    assert result.match is not None
    assert result.match.binding.id == "normal.refresh"


def test_complete_binding_beats_longer_prefix() -> None:
    _, resolver = build_resolver(
        ("normal.g", ("g",), "core.g", (), 0),
        FIRST_LINE,
    )

    result = resolver.resolve("normal", ("g",))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == "normal.g"


def test_trie_rebuilt_after_registry_change() -> None:
    registry, resolver = build_resolver()
    assert resolver.resolve("normal", ("G",)).status == "miss"

    registry.register_action(ActionRef("motion.last_line", lambda context, match: None))
    registry.register_binding(
        Binding(
            id="normal.last_line",
            mode="normal",
            sequence=KeySequence.from_strings("G"),
            action_id="motion.last_line",
        )
    )

    assert resolver.resolve("normal", ("G",)).status == "match"
