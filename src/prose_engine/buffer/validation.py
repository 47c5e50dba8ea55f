"""Invariant checks for editor state."""

from __future__ import annotations

from .state import EditorState


class InvariantViolation(RuntimeError):
    """Raised when a state breaks an invariant every operation must keep."""

    def __init__(self, message: str, *, state: EditorState | None = None) -> None:
        super().__init__(message)
        self.state = state


def validate_state(state: EditorState) -> EditorState:
    ast = state.ast
    if not 0 <= state.cursor <= len(state.text):
        raise InvariantViolation("Cursor out of range", state=state)

    for index in state.committed:
        if not 0 <= index < len(ast.sentences):
            raise InvariantViolation(
                f"Committed index {index} has no sentence", state=state
            )

    previous_end = -1
    for start, end in state.ghost_ranges:
        if not 0 <= start < end <= len(state.text):
            raise InvariantViolation(f"Ghost range {(start, end)} out of bounds", state=state)
        if start < previous_end:
            raise InvariantViolation("Ghost ranges overlap or are unsorted", state=state)
        previous_end = end

    for name, selection, count in (
        ("word", state.word_selection, len(ast.words)),
        ("sentence", state.sentence_selection, len(ast.sentences)),
    ):
        if selection is not None and not (0 <= selection.low and selection.high < count):
            raise InvariantViolation(f"{name} selection out of range", state=state)
    return state


__all__ = ["InvariantViolation", "validate_state"]
