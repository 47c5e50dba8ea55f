"""Cursor motion at char, word, sentence and line granularity."""

from __future__ import annotations

from typing import Literal

from prose_engine.buffer import EditorState
from prose_engine.document import boundaries
from prose_engine.selection import Direction

Vertical = Literal["up", "down"]


def _moved(state: EditorState, pos: int) -> EditorState:
    cleared = state.without_selections()
    if pos == cleared.cursor:
        return cleared
    return cleared.evolve(cursor=pos)


def move_char(state: EditorState, direction: Direction) -> EditorState:
    step = 1 if direction == "right" else -1
    return _moved(state, max(0, min(len(state.text), state.cursor + step)))


def move_word(state: EditorState, direction: Direction) -> EditorState:
    if direction == "right":
        return _moved(state, boundaries.next_word_boundary(state.text, state.cursor))
    return _moved(state, boundaries.previous_word_boundary(state.text, state.cursor))


def move_sentence(state: EditorState, direction: Direction) -> EditorState:
    if direction == "right":
        return _moved(state, boundaries.next_sentence_boundary(state.text, state.cursor))
    return _moved(state, boundaries.previous_sentence_boundary(state.text, state.cursor))


def move_line_start(state: EditorState) -> EditorState:
    return _moved(state, boundaries.line_start(state.text, state.cursor))


def move_line_end(state: EditorState) -> EditorState:
    return _moved(state, boundaries.line_end(state.text, state.cursor))


def move_line(state: EditorState, direction: Vertical) -> EditorState:
    """Vertical move keeping the column; selections are left alone."""

    if direction == "up":
        target = boundaries.line_above(state.text, state.cursor)
    else:
        target = boundaries.line_below(state.text, state.cursor)
    if target is None or target == state.cursor:
        return state
    return state.evolve(cursor=target)


def clear_selections(state: EditorState) -> EditorState:
    return state.without_selections()


__all__ = [
    "Vertical",
    "clear_selections",
    "move_char",
    "move_line",
    "move_line_end",
    "move_line_start",
    "move_sentence",
    "move_word",
]
