from __future__ import annotations

from prose_engine.keymaps import (
    ActionRef,
    Binding,
    KeyEvent,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
    load_default_keymaps,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    token: str = "meta+k",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        token=token,
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    for action_id in sorted({binding.action_id for binding in bindings}):
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_token() -> None:
    registry = build_registry([make_binding("test.k")])
    resolver = KeymapResolver(registry)

    result = resolver.resolve(KeyEvent("k", meta=True))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding is not None
    assert result.match.binding.id == "test.k"


def test_resolver_respects_when_clauses() -> None:
    registry = build_registry(
        [
            make_binding(
                "reorder",
                token="ArrowUp",
                action_id="structure.reorder",
                when=(WhenClause("sentence_selection"),),
            ),
            make_binding(
                "line",
                token="ArrowUp",
                action_id="cursor.line",
                when=(WhenClause("sentence_selection", False),),
            ),
        ]
    )
    resolver = KeymapResolver(registry)

    selected = resolver.resolve(KeyEvent("ArrowUp"), flags={"sentence_selection": True})
    plain = resolver.resolve(KeyEvent("ArrowUp"), flags={"sentence_selection": False})

    assert selected.match is not None and selected.match.action.id == "structure.reorder"
    assert plain.match is not None and plain.match.action.id == "cursor.line"


def test_resolver_prefers_higher_priority() -> None:
    registry = build_registry(
        [
            make_binding("low", when=(WhenClause("word_selection"),)),
            make_binding(
                "high",
                action_id="core.other",
                when=(WhenClause("word_selection"), WhenClause("sentence_selection", False)),
                priority=5,
            ),
        ]
    )
    resolver = KeymapResolver(registry)

    result = resolver.resolve(KeyEvent("k", meta=True), flags={"word_selection": True})

    assert result.match is not None
    assert result.match.binding is not None
    assert result.match.binding.id == "high"


def test_unbound_printable_key_falls_back_to_insert() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    result = resolver.resolve(KeyEvent("x"))

    assert result.status == "insert"
    assert result.match is not None
    assert result.match.binding is None
    assert result.match.action.id == "edit.insert_character"


def test_modified_or_named_unbound_keys_miss() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    assert resolver.resolve(KeyEvent("x", ctrl=True)).status == "miss"
    assert resolver.resolve(KeyEvent("q", meta=True)).status == "miss"
    assert resolver.resolve(KeyEvent("Tab")).status == "miss"


def test_shifted_meta_letter_matches_lowercase_binding() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    result = resolver.resolve(KeyEvent("Z", meta=True, shift=True))

    assert result.match is not None
    assert result.match.action.id == "history.redo"


def test_key_event_from_mapping() -> None:
    event = KeyEvent.from_mapping({"key": "ArrowRight", "altKey": True, "shiftKey": True})

    assert event.token == "alt+shift+ArrowRight"
    assert not event.is_printable
