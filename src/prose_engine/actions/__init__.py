"""Edit engine operations and the command handlers bound to keys."""

from .commands import EditContext
from .cursor import (
    clear_selections,
    move_char,
    move_line,
    move_line_end,
    move_line_start,
    move_sentence,
    move_word,
)
from .editing import delete_backward, insert_newline, insert_text
from .selection import extend_sentence_selection, extend_word_selection
from .structure import reorder, toggle_commit

__all__ = [
    "EditContext",
    "clear_selections",
    "delete_backward",
    "extend_sentence_selection",
    "extend_word_selection",
    "insert_newline",
    "insert_text",
    "move_char",
    "move_line",
    "move_line_end",
    "move_line_start",
    "move_sentence",
    "move_word",
    "reorder",
    "toggle_commit",
]
