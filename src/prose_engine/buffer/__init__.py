"""Editor state, history and collaborator boundary types."""

from .history import EditHistory, HistorySnapshot
from .state import EditorState, GhostRange, normalize_ghosts
from .sync import (
    EditorMirror,
    EditorSync,
    FragmentSnapshot,
    HighlightSpan,
    IdSequence,
    SentenceRecord,
    records_from_state,
    state_from_records,
)
from .validation import InvariantViolation, validate_state

__all__ = [
    "EditHistory",
    "EditorMirror",
    "EditorState",
    "EditorSync",
    "FragmentSnapshot",
    "GhostRange",
    "HighlightSpan",
    "HistorySnapshot",
    "IdSequence",
    "InvariantViolation",
    "SentenceRecord",
    "normalize_ghosts",
    "records_from_state",
    "state_from_records",
    "validate_state",
]
