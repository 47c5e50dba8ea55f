"""Built-in keymap that seeds a session with the editor's standard keys."""

from __future__ import annotations

from typing import Iterable, Sequence

from prose_engine.actions import commands

from .models import ActionRef, Binding, WhenClause
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="cursor.char_left",
        handler=commands.char_left,
        description="Move one character left",
    ),
    ActionRef(
        id="cursor.char_right",
        handler=commands.char_right,
        description="Move one character right",
    ),
    ActionRef(
        id="cursor.word_left",
        handler=commands.word_left,
        description="Move to the previous word start",
    ),
    ActionRef(
        id="cursor.word_right",
        handler=commands.word_right,
        description="Move past the end of the current word",
    ),
    ActionRef(
        id="cursor.sentence_left",
        handler=commands.sentence_left,
        description="Move to the previous sentence start",
    ),
    ActionRef(
        id="cursor.sentence_right",
        handler=commands.sentence_right,
        description="Move to the next sentence start",
    ),
    ActionRef(
        id="cursor.line_start",
        handler=commands.line_start,
        description="Move to the start of the line",
    ),
    ActionRef(
        id="cursor.line_end",
        handler=commands.line_end,
        description="Move to the end of the line",
    ),
    ActionRef(
        id="cursor.line_up",
        handler=commands.line_up,
        description="Move to the same column on the previous line",
    ),
    ActionRef(
        id="cursor.line_down",
        handler=commands.line_down,
        description="Move to the same column on the next line",
    ),
    ActionRef(
        id="selection.clear",
        handler=commands.escape,
        description="Clear word and sentence selections",
    ),
    ActionRef(
        id="selection.word_left",
        handler=commands.select_word_left,
        description="Extend the word selection left",
    ),
    ActionRef(
        id="selection.word_right",
        handler=commands.select_word_right,
        description="Extend the word selection right",
    ),
    ActionRef(
        id="selection.sentence_left",
        handler=commands.select_sentence_left,
        description="Extend the sentence selection left",
    ),
    ActionRef(
        id="selection.sentence_right",
        handler=commands.select_sentence_right,
        description="Extend the sentence selection right",
    ),
    ActionRef(
        id="edit.insert_character",
        handler=commands.insert_character,
        history="batch",
        description="Insert the typed character",
    ),
    ActionRef(
        id="edit.insert_newline",
        handler=commands.insert_newline,
        history="force",
        description="Insert a line break",
    ),
    ActionRef(
        id="edit.backspace",
        handler=commands.backspace,
        history="force",
        description="Delete the previous character or the selection",
    ),
    ActionRef(
        id="edit.backspace_word",
        handler=commands.backspace_word,
        history="force",
        description="Delete back to the previous word start",
    ),
    ActionRef(
        id="edit.backspace_sentence",
        handler=commands.backspace_sentence,
        history="force",
        description="Delete back to the previous sentence start",
    ),
    ActionRef(
        id="structure.toggle_commit",
        handler=commands.toggle_commit,
        history="force",
        description="Toggle the committed flag of the selected sentences",
    ),
    ActionRef(
        id="structure.reorder_up",
        handler=commands.reorder_up,
        history="force",
        description="Swap the selected sentences with the one before",
    ),
    ActionRef(
        id="structure.reorder_down",
        handler=commands.reorder_down,
        history="force",
        description="Swap the selected sentences with the one after",
    ),
    ActionRef(
        id="history.undo",
        handler=commands.undo,
        description="Undo the last edit",
        metadata={"event": "session.undo"},
    ),
    ActionRef(
        id="history.redo",
        handler=commands.redo,
        description="Redo the last undone edit",
        metadata={"event": "session.redo"},
    ),
)

_WITH_SENTENCES = (WhenClause("sentence_selection"),)
_WITHOUT_SENTENCES = (WhenClause("sentence_selection", False),)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(id="cursor.char_left", token="ArrowLeft", action_id="cursor.char_left"),
    Binding(id="cursor.char_right", token="ArrowRight", action_id="cursor.char_right"),
    Binding(id="cursor.word_left", token="alt+ArrowLeft", action_id="cursor.word_left"),
    Binding(
        id="cursor.word_right", token="alt+ArrowRight", action_id="cursor.word_right"
    ),
    Binding(
        id="cursor.sentence_left",
        token="meta+ArrowLeft",
        action_id="cursor.sentence_left",
    ),
    Binding(
        id="cursor.sentence_right",
        token="meta+ArrowRight",
        action_id="cursor.sentence_right",
    ),
    Binding(id="cursor.line_start", token="ctrl+a", action_id="cursor.line_start"),
    Binding(id="cursor.line_end", token="ctrl+e", action_id="cursor.line_end"),
    Binding(
        id="cursor.line_up",
        token="ArrowUp",
        action_id="cursor.line_up",
        when=_WITHOUT_SENTENCES,
    ),
    Binding(
        id="cursor.line_down",
        token="ArrowDown",
        action_id="cursor.line_down",
        when=_WITHOUT_SENTENCES,
    ),
    Binding(id="selection.clear", token="Escape", action_id="selection.clear"),
    Binding(
        id="selection.word_left",
        token="alt+shift+ArrowLeft",
        action_id="selection.word_left",
    ),
    Binding(
        id="selection.word_right",
        token="alt+shift+ArrowRight",
        action_id="selection.word_right",
    ),
    Binding(
        id="selection.sentence_left",
        token="meta+shift+ArrowLeft",
        action_id="selection.sentence_left",
    ),
    Binding(
        id="selection.sentence_right",
        token="meta+shift+ArrowRight",
        action_id="selection.sentence_right",
    ),
    Binding(id="edit.insert_newline", token="Enter", action_id="edit.insert_newline"),
    Binding(id="edit.backspace", token="Backspace", action_id="edit.backspace"),
    Binding(
        id="edit.backspace_word",
        token="alt+Backspace",
        action_id="edit.backspace_word",
    ),
    Binding(
        id="edit.backspace_sentence",
        token="meta+Backspace",
        action_id="edit.backspace_sentence",
    ),
    Binding(
        id="structure.toggle_commit",
        token="meta+Enter",
        action_id="structure.toggle_commit",
    ),
    Binding(
        id="structure.reorder_up",
        token="ArrowUp",
        action_id="structure.reorder_up",
        when=_WITH_SENTENCES,
    ),
    Binding(
        id="structure.reorder_down",
        token="ArrowDown",
        action_id="structure.reorder_down",
        when=_WITH_SENTENCES,
    ),
    Binding(id="history.undo", token="meta+z", action_id="history.undo"),
    Binding(id="history.redo", token="meta+shift+z", action_id="history.redo"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    overrides: Iterable[Binding] | None = None,
) -> None:
    """Register built-in actions and bindings.

    ``overrides`` replace whatever default they collide with, by id or by
    token under the same ``when`` flags.
    """

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not _selected(binding.action_id, allowed_actions):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if overrides:
        for binding in overrides:
            registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True
