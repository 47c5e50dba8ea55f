from __future__ import annotations

import pytest

from prose_engine.actions import delete_backward, insert_text, toggle_commit
from prose_engine.buffer import EditHistory, EditorState, HistorySnapshot
from prose_engine.selection import IndexSelection


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_inserts_within_window_share_one_snapshot() -> None:
    clock = FakeClock()
    history = EditHistory(batch_window=0.5, clock=clock)
    state = EditorState()

    assert history.snapshot_before_edit(state, force=False) is True
    clock.advance(0.1)
    assert history.snapshot_before_edit(state, force=False) is False

    assert history.undo_depth == 1


def test_inserts_outside_window_start_a_new_group() -> None:
    clock = FakeClock()
    history = EditHistory(batch_window=0.5, clock=clock)
    state = EditorState()

    history.snapshot_before_edit(state, force=False)
    clock.advance(0.6)
    history.snapshot_before_edit(state, force=False)

    assert history.undo_depth == 2


def test_forced_snapshot_closes_typing_group() -> None:
    clock = FakeClock()
    history = EditHistory(batch_window=0.5, clock=clock)
    state = EditorState()

    history.snapshot_before_edit(state, force=False)
    history.snapshot_before_edit(state, force=True)
    history.snapshot_before_edit(state, force=False)

    assert history.undo_depth == 3


def test_undo_and_redo_round_trip() -> None:
    clock = FakeClock()
    history = EditHistory(clock=clock)
    states = [EditorState.from_text("One.", committed={0})]
    operations = [
        lambda s: insert_text(s, " Two."),
        lambda s: toggle_commit(s),
        lambda s: delete_backward(s, "word"),
    ]
    for operation in operations:
        clock.advance(1.0)
        history.snapshot_before_edit(states[-1], force=True)
        states.append(operation(states[-1]))

    current = states[-1]
    for _ in operations:
        restored = history.undo(current)
        assert restored is not None
        current = restored
    assert current.editable_fields() == states[0].editable_fields()
    assert history.undo(current) is None

    for _ in operations:
        restored = history.redo(current)
        assert restored is not None
        current = restored
    assert current.editable_fields() == states[-1].editable_fields()
    assert history.redo(current) is None


def test_restore_clears_selections() -> None:
    history = EditHistory()
    selected = EditorState.from_text("A. B.").evolve(
        sentence_selection=IndexSelection(0, 1, "right")
    )

    history.snapshot_before_edit(selected, force=True)
    restored = history.undo(EditorState.from_text("changed"))

    assert restored is not None
    assert restored.text == "A. B."
    assert restored.sentence_selection is None


def test_new_snapshot_clears_redo() -> None:
    history = EditHistory()
    history.snapshot_before_edit(EditorState.from_text("a"), force=True)
    history.undo(EditorState.from_text("ab"))
    assert history.can_redo()

    history.snapshot_before_edit(EditorState.from_text("a"), force=True)

    assert not history.can_redo()


def test_depth_is_capped_oldest_first() -> None:
    history = EditHistory(limit=2)
    for text in ("one", "two", "three"):
        history.snapshot_before_edit(EditorState.from_text(text), force=True)

    assert history.undo_depth == 2
    first = history.undo(EditorState.from_text("four"))
    second = history.undo(first)  # type: ignore[arg-type]
    assert (first.text, second.text) == ("three", "two")  # type: ignore[union-attr]
    assert history.undo(second) is None  # type: ignore[arg-type]


def test_snapshot_captures_editable_fields() -> None:
    state = EditorState(text="Pick one two.", cursor=12, committed=frozenset({0}), ghost_ranges=((5, 9),))

    snapshot = HistorySnapshot.capture(state)

    assert snapshot.restore().editable_fields() == state.editable_fields()


def test_history_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError):
        EditHistory(limit=0)
