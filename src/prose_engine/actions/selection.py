"""Word and sentence selection commands."""

from __future__ import annotations

from prose_engine.buffer import EditorState
from prose_engine.document import sentence_index_at, word_index_at
from prose_engine.selection import Direction, extend


def extend_word_selection(state: EditorState, direction: Direction) -> EditorState:
    ast = state.ast
    count = len(ast.words)
    anchor = word_index_at(ast, state.cursor)
    if direction == "right":
        blocked = anchor >= count - 1 and state.cursor >= len(state.text)
    else:
        blocked = state.cursor == 0
    selection = extend(
        state.word_selection, direction, anchor=anchor, count=count, blocked=blocked
    )
    if selection == state.word_selection:
        return state
    return state.evolve(word_selection=selection)


def extend_sentence_selection(state: EditorState, direction: Direction) -> EditorState:
    ast = state.ast
    count = len(ast.sentences)
    anchor = sentence_index_at(ast, state.cursor)
    if direction == "right":
        blocked = state.cursor >= len(state.text) or (
            anchor >= count - 1
            and count > 0
            and state.cursor >= ast.sentences[-1].char_end
        )
    else:
        blocked = state.cursor == 0
    selection = extend(
        state.sentence_selection, direction, anchor=anchor, count=count, blocked=blocked
    )
    if selection == state.sentence_selection:
        return state
    return state.evolve(sentence_selection=selection)


__all__ = ["extend_sentence_selection", "extend_word_selection"]
