"""Editing sessions: key dispatch, history policy and change events."""

from prose_engine.keymaps import KeyEvent

from .bus import KeyBus
from .session import DispatchResult, EditSession

__all__ = ["DispatchResult", "EditSession", "KeyBus", "KeyEvent"]
