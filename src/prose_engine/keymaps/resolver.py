"""Resolve a key event to the binding that should handle it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, Optional

from .models import ActionRef, Binding, KeyEvent
from .registry import KeymapRegistry

INSERT_ACTION_ID = "edit.insert_character"


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Optional[Binding]
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "insert", "miss"]
    token: str
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Picks the highest-priority binding whose ``when`` clauses hold.

    Unbound printable keys (no ctrl/meta) fall through to the registered
    character-insert action.
    """

    def __init__(
        self,
        registry: KeymapRegistry,
        *,
        insert_action_id: str = INSERT_ACTION_ID,
    ) -> None:
        self._registry = registry
        self._insert_action_id = insert_action_id

    def resolve(
        self, event: KeyEvent, *, flags: Optional[Mapping[str, bool]] = None
    ) -> ResolutionResult:
        token = event.token
        context = flags or {}
        candidates = [
            binding
            for binding in self._registry.bindings_for(token)
            if binding.allows(context)
        ]
        if candidates:
            candidates.sort(key=lambda b: (-b.priority, b.id))
            chosen = candidates[0]
            action = self._registry.get_action(chosen.action_id)
            return ResolutionResult("match", token, ResolutionMatch(chosen, action))

        if event.is_printable:
            try:
                action = self._registry.get_action(self._insert_action_id)
            except KeyError:
                return ResolutionResult("miss", token)
            return ResolutionResult("insert", token, ResolutionMatch(None, action))

        return ResolutionResult("miss", token)


__all__ = ["INSERT_ACTION_ID", "KeymapResolver", "ResolutionMatch", "ResolutionResult"]
