"""Sentence-level structure edits: commit toggling and reordering."""

from __future__ import annotations

from prose_engine.buffer import EditorState
from prose_engine.buffer import committed as committed_ops
from prose_engine.document import sentence_index_at
from prose_engine.selection import IndexSelection

from .cursor import Vertical


def toggle_commit(state: EditorState) -> EditorState:
    """Commit or uncommit the selected sentences, or the one at the cursor.

    A selection flips as a block: all committed means uncommit all, anything
    else commits all.
    """

    sentences = state.ast.sentences
    if not sentences:
        return state
    selection = state.sentence_selection
    if selection is not None:
        high = min(selection.high, len(sentences) - 1)
        return state.evolve(
            committed=committed_ops.toggled(state.committed, range(selection.low, high + 1)),
            word_selection=None,
            sentence_selection=None,
        )
    index = sentence_index_at(state.ast, state.cursor)
    return state.evolve(committed=committed_ops.toggled(state.committed, range(index, index + 1)))


def _follow(selection: IndexSelection, delta: int) -> IndexSelection:
    low, high = selection.low + delta, selection.high + delta
    if selection.direction == "right":
        return IndexSelection(start=low, end=high, direction="right")
    return IndexSelection(start=high, end=low, direction="left")


def reorder(state: EditorState, direction: Vertical) -> EditorState:
    """Swap the selected sentence block with its neighbour above or below.

    Separator text between the two is preserved, ghost ranges are dropped
    and committed marks move with their sentences.
    """

    selection = state.sentence_selection
    sentences = state.ast.sentences
    if selection is None or not sentences:
        return state
    low, high = selection.low, min(selection.high, len(sentences) - 1)
    text = state.text
    first, last = sentences[low], sentences[high]

    if direction == "up":
        if low <= 0:
            return state
        neighbour = sentences[low - 1]
        before = text[: neighbour.char_start]
        between = text[neighbour.char_end : first.char_start] or " "
        moved = text[first.char_start : last.char_end]
        new_text = before + moved + between + neighbour.text_in(text) + text[last.char_end :]
        cursor = len(before)
        delta = -1
    else:
        if high >= len(sentences) - 1:
            return state
        neighbour = sentences[high + 1]
        before = text[: first.char_start]
        between = text[last.char_end : neighbour.char_start] or " "
        moved = text[first.char_start : last.char_end]
        new_text = before + neighbour.text_in(text) + between + moved + text[neighbour.char_end :]
        cursor = len(before) + len(neighbour.text_in(text)) + len(between)
        delta = 1

    updated = EditorState(text=new_text, cursor=cursor)
    # An unterminated last sentence merges with whatever now follows it.
    if len(updated.ast.sentences) != len(sentences):
        return state
    return updated.evolve(
        sentence_selection=_follow(selection, delta),
        committed=committed_ops.after_reorder(state.committed, low, high, delta),
    )


__all__ = ["reorder", "toggle_commit"]
