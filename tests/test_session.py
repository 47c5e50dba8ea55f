from __future__ import annotations

from typing import List

import pytest

from prose_engine.buffer import (
    EditorState,
    FragmentSnapshot,
    IdSequence,
    InvariantViolation,
    SentenceRecord,
)
from prose_engine.keymaps import ActionRef, Binding, KeyEvent, KeymapRegistry
from prose_engine.runtime import EngineConfig
from prose_engine.selection import IndexSelection
from prose_engine.session import EditSession, KeyBus


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def key(name: str, **modifiers: bool) -> KeyEvent:
    return KeyEvent(name, **modifiers)


def test_typing_burst_is_one_undo_step() -> None:
    clock = FakeClock()
    session = EditSession(clock=clock)

    for char in "hello":
        session.handle_key(key(char))
        clock.now += 0.05
    session.handle_key(key("Backspace"))

    assert session.state.text == "hell"
    assert session.undo() is True
    assert session.state.text == "hello"
    assert session.undo() is True
    assert session.state.text == ""
    assert session.undo() is False


def test_pause_longer_than_window_splits_undo_groups() -> None:
    clock = FakeClock()
    session = EditSession(clock=clock)

    session.type_text("ab")
    clock.now += 1.0
    session.type_text("cd")

    assert session.history.undo_depth == 2
    session.undo()
    assert session.state.text == "ab"


def test_redo_replays_undone_edits() -> None:
    session = EditSession.from_text("One.")
    session.handle_key(key("Enter", meta=True))
    assert session.state.committed == frozenset({0})

    session.undo()
    assert session.state.committed == frozenset()
    session.redo()
    assert session.state.committed == frozenset({0})


def test_moves_and_selection_do_not_create_history() -> None:
    session = EditSession.from_text("cat dog")

    session.handle_key(key("ArrowLeft", alt=True))
    session.handle_key(key("ArrowLeft", alt=True, shift=True))
    session.handle_key(key("Escape"))

    assert session.history.undo_depth == 0


def test_noop_edit_creates_no_undo_step() -> None:
    session = EditSession.from_text("abc")
    session.handle_key(key("ArrowLeft", meta=True))
    session.handle_key(key("a", ctrl=True))
    assert session.state.cursor == 0

    result = session.handle_key(key("Backspace"))

    assert result.consumed is True
    assert result.changed is False
    assert session.history.undo_depth == 0


def test_arrow_down_reorders_only_with_sentence_selection() -> None:
    session = EditSession(EditorState.from_text("A. B. C.", cursor=3, committed={1}))

    session.handle_key(key("ArrowRight", meta=True, shift=True))
    assert session.state.sentence_selection == IndexSelection(1, 1, "right")
    result = session.handle_key(key("ArrowDown"))

    assert result.action_id == "structure.reorder_down"
    assert session.state.text == "A. C. B."
    assert session.state.committed == frozenset({2})

    session.handle_key(key("Escape"))
    assert session.handle_key(key("ArrowDown")).action_id == "cursor.line_down"
    assert session.state.text == "A. C. B."


def test_typing_over_committed_word_through_keys() -> None:
    session = EditSession(EditorState.from_text("Pick one.", cursor=5, committed={0}))

    session.handle_key({"key": "ArrowRight", "altKey": True, "shiftKey": True})
    session.type_text("two")

    assert session.state.text == "Pick one two."
    assert session.state.ghost_ranges == ((5, 9),)
    assert session.state.cursor == 12


def test_unbound_keys_are_ignored() -> None:
    session = EditSession.from_text("abc")

    result = session.handle_key(key("q", ctrl=True))

    assert result.consumed is False
    assert session.state.text == "abc"


def test_bus_publishes_state_and_content_changes() -> None:
    session = EditSession()
    mirrors: List[object] = []
    contents: List[List[SentenceRecord]] = []
    session.subscribe("state.changed", mirrors.append)
    unsubscribe = session.subscribe("content.changed", contents.append)  # type: ignore[arg-type]

    session.type_text("Hi.")
    session.handle_key(key("ArrowLeft"))

    assert len(mirrors) == 4
    assert len(contents) == 3
    assert contents[-1] == [SentenceRecord("Hi.", False, "")]

    unsubscribe()
    session.type_text("!")
    assert len(contents) == 3


def test_debug_invariants_catch_broken_actions() -> None:
    registry = KeymapRegistry()
    registry.register_action(
        ActionRef(id="test.break", handler=lambda context, event: EditorState(text="x", cursor=9))
    )
    registry.register_binding(Binding(id="test.break", token="ctrl+b", action_id="test.break"))
    session = EditSession(config=EngineConfig(debug_invariants=True), registry=registry)

    with pytest.raises(InvariantViolation) as excinfo:
        session.handle_key(key("b", ctrl=True))

    assert excinfo.value.state is not None
    assert session.state.text == ""


def test_rejected_action_leaves_history_untouched() -> None:
    registry = KeymapRegistry()
    registry.register_action(
        ActionRef(
            id="test.overcommit",
            handler=lambda context, event: context.state.evolve(committed=frozenset({9})),
            history="force",
        )
    )
    registry.register_binding(
        Binding(id="test.overcommit", token="ctrl+o", action_id="test.overcommit")
    )
    session = EditSession(
        EditorState.from_text("A. B."),
        config=EngineConfig(debug_invariants=True),
        registry=registry,
    )
    before = session.state

    with pytest.raises(InvariantViolation):
        session.handle_key(key("o", ctrl=True))

    assert session.state is before
    assert session.history.undo_depth == 0
    assert session.history.redo_depth == 0


def test_records_and_fragment_snapshot() -> None:
    session = EditSession(
        EditorState.from_text("Hello world. Goodbye.", committed={1}),
        ids=IdSequence("draft"),
    )

    assert session.records() == [
        SentenceRecord("Hello world.", False, " "),
        SentenceRecord("Goodbye.", True, ""),
    ]
    assert session.fragment_snapshot().to_dict() == {
        "id": "draft-1",
        "sentences": [
            {"text": "Hello world.", "committed": False, "separator": " "},
            {"text": "Goodbye.", "committed": True, "separator": ""},
        ],
    }


def test_push_to_sync_collaborator() -> None:
    pushed: List[FragmentSnapshot] = []

    class MemorySync:
        def push_records(self, fragment: FragmentSnapshot) -> None:
            pushed.append(fragment)

    session = EditSession.from_text("One.", fragment_id="fragment-7")
    session.push_to(MemorySync())

    assert pushed[0].fragment_id == "fragment-7"
    assert pushed[0].sentences == (SentenceRecord("One.", False, ""),)


def test_load_records_resets_history() -> None:
    session = EditSession()
    session.type_text("scratch")

    session.load_records(
        [SentenceRecord.from_dict({"text": "One."}), SentenceRecord("Two.", True)]
    )

    assert session.state.text == "One. Two."
    assert session.state.committed == frozenset({1})
    assert session.history.undo_depth == 0


def test_shared_id_sequence_across_sessions() -> None:
    ids = IdSequence()

    first = EditSession(ids=ids)
    second = EditSession(ids=ids)

    assert (first.fragment_id, second.fragment_id) == ("fragment-1", "fragment-2")


def test_key_bus_runs_listeners_in_order() -> None:
    bus = KeyBus()
    seen: List[str] = []
    bus.subscribe("ping", lambda payload: seen.append(f"a:{payload}"))
    bus.subscribe("ping", lambda payload: seen.append(f"b:{payload}"))

    bus.emit("ping", 1)

    assert seen == ["a:1", "b:1"]
    assert not bus.has_listeners("pong")
