"""Key-bound command handlers.

Each handler receives the session's ``EditContext`` and the triggering key
event and returns the next state. Handlers never mutate the context; the
session decides whether the result is recorded in history.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from prose_engine.buffer import EditHistory, EditorState

from . import cursor, editing, selection, structure

if TYPE_CHECKING:  # pragma: no cover
    from prose_engine.keymaps.models import KeyEvent


@dataclass(frozen=True, slots=True)
class EditContext:
    state: EditorState
    history: EditHistory


def char_left(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return cursor.move_char(context.state, "left")


def char_right(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return cursor.move_char(context.state, "right")


def word_left(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return cursor.move_word(context.state, "left")


def word_right(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return cursor.move_word(context.state, "right")


def sentence_left(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return cursor.move_sentence(context.state, "left")


def sentence_right(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return cursor.move_sentence(context.state, "right")


def line_start(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return cursor.move_line_start(context.state)


def line_end(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return cursor.move_line_end(context.state)


def line_up(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return cursor.move_line(context.state, "up")


def line_down(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return cursor.move_line(context.state, "down")


def escape(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return cursor.clear_selections(context.state)


def select_word_left(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return selection.extend_word_selection(context.state, "left")


def select_word_right(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return selection.extend_word_selection(context.state, "right")


def select_sentence_left(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return selection.extend_sentence_selection(context.state, "left")


def select_sentence_right(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return selection.extend_sentence_selection(context.state, "right")


def insert_character(context: EditContext, event: KeyEvent) -> EditorState:
    return editing.insert_text(context.state, event.key)


def insert_newline(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return editing.insert_newline(context.state)


def backspace(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return editing.delete_backward(context.state, "char")


def backspace_word(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return editing.delete_backward(context.state, "word")


def backspace_sentence(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return editing.delete_backward(context.state, "sentence")


def toggle_commit(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return structure.toggle_commit(context.state)


def reorder_up(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return structure.reorder(context.state, "up")


def reorder_down(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return structure.reorder(context.state, "down")


def undo(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return context.history.undo(context.state) or context.state


def redo(context: EditContext, event: KeyEvent) -> EditorState:
    del event
    return context.history.redo(context.state) or context.state


__all__ = [
    "EditContext",
    "backspace",
    "backspace_sentence",
    "backspace_word",
    "char_left",
    "char_right",
    "escape",
    "insert_character",
    "insert_newline",
    "line_down",
    "line_end",
    "line_start",
    "line_up",
    "redo",
    "reorder_down",
    "reorder_up",
    "select_sentence_left",
    "select_sentence_right",
    "select_word_left",
    "select_word_right",
    "sentence_left",
    "sentence_right",
    "toggle_commit",
    "undo",
    "word_left",
    "word_right",
]
