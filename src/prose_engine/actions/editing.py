"""Text-changing operations: insert, backspace and the shared splice."""

from __future__ import annotations

from typing import Literal, Optional, Tuple

from prose_engine.buffer import EditorState, normalize_ghosts
from prose_engine.buffer import committed as committed_ops
from prose_engine.buffer import ghosts
from prose_engine.document import (
    sentence_range_for,
    sentences_overlapping,
    word_range_for,
)
from prose_engine.document.boundaries import (
    previous_sentence_boundary,
    previous_word_boundary,
)
from prose_engine.selection import IndexSelection

Granularity = Literal["char", "word", "sentence"]


def splice(state: EditorState, start: int, end: int, inserted: str, *, cursor: int) -> EditorState:
    """Replace ``[start, end)`` with ``inserted`` and carry every index along.

    Selections are cleared; ghost ranges and committed indices follow the
    text they were attached to.
    """

    text = state.text[:start] + inserted + state.text[end:]
    updated = EditorState(text=text, cursor=cursor)
    return updated.evolve(
        ghost_ranges=ghosts.after_splice(state.ghost_ranges, start, end, len(inserted)),
        committed=committed_ops.after_splice(
            state.committed, state.ast, updated.ast, start, end, len(inserted)
        ),
    )


def selection_range(state: EditorState) -> Optional[Tuple[int, int]]:
    if state.sentence_selection is not None:
        return sentence_range_for(state.ast, state.sentence_selection)
    if state.word_selection is not None:
        return word_range_for(state.ast, state.word_selection)
    return None


def _touches_committed(state: EditorState, start: int, end: int) -> bool:
    return any(i in state.committed for i in sentences_overlapping(state.ast, start, end))


def ghost_separator(typed: str) -> str:
    return " " if typed[:1].isalnum() else ""


def insert_text(state: EditorState, typed: str) -> EditorState:
    """Type ``typed`` at the cursor or over the active selection.

    Typing over a selection inside a committed sentence keeps the old text
    as a ghost range and appends the new text right after it.
    """

    if not typed:
        return state
    span = selection_range(state)
    if span is None:
        pos = state.cursor
        return splice(state, pos, pos, typed, cursor=pos + len(typed))

    start, end = span
    if not _touches_committed(state, start, end):
        return splice(state, start, end, typed, cursor=start + len(typed))

    separator = ghost_separator(typed)
    inserted = separator + typed
    updated = splice(state, end, end, inserted, cursor=end + len(inserted))
    return updated.evolve(
        ghost_ranges=normalize_ghosts(
            updated.ghost_ranges + ((start, end + len(separator)),)
        )
    )


def insert_newline(state: EditorState) -> EditorState:
    return insert_text(state, "\n")


def _delete_sentence_selection(state: EditorState, selection: IndexSelection) -> EditorState:
    start, end = sentence_range_for(state.ast, selection)
    low, high = selection.span
    text = state.text[:start] + state.text[end:]
    updated = EditorState(text=text, cursor=start)
    return updated.evolve(
        ghost_ranges=ghosts.after_delete(state.ghost_ranges, start, end),
        committed=committed_ops.after_sentence_delete(
            state.committed, low, high, updated.ast
        ),
    )


def delete_backward(state: EditorState, granularity: Granularity = "char") -> EditorState:
    """Backspace: the active selection, else one char/word/sentence left."""

    if state.sentence_selection is not None:
        return _delete_sentence_selection(state, state.sentence_selection)
    if state.word_selection is not None:
        start, end = word_range_for(state.ast, state.word_selection)
        return splice(state, start, end, "", cursor=start)

    pos = state.cursor
    if pos <= 0:
        return state
    if granularity == "sentence":
        target = previous_sentence_boundary(state.text, pos)
    elif granularity == "word":
        target = previous_word_boundary(state.text, pos)
    else:
        target = pos - 1
    if target >= pos:
        return state
    return splice(state, target, pos, "", cursor=target)


__all__ = [
    "Granularity",
    "delete_backward",
    "ghost_separator",
    "insert_newline",
    "insert_text",
    "selection_range",
    "splice",
]
