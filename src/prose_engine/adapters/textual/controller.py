"""Minimal Textual adapter that wires an EditSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from prose_engine.buffer import EditorMirror
from prose_engine.keymaps import KeyEvent
from prose_engine.session import DispatchResult, EditSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


_KEY_NAMES: Dict[str, str] = {
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "up": "ArrowUp",
    "down": "ArrowDown",
    "backspace": "Backspace",
    "enter": "Enter",
    "return": "Enter",
    "escape": "Escape",
    "tab": "Tab",
    "space": " ",
    "home": "Home",
    "end": "End",
    "delete": "Delete",
}

_MODIFIERS: Dict[str, str] = {
    "shift": "shift",
    "alt": "alt",
    "option": "alt",
    "ctrl": "ctrl",
    "control": "ctrl",
    "meta": "meta",
    "super": "meta",
    "cmd": "meta",
}


def translate_textual_key(key: str, character: Optional[str] = None) -> Optional[KeyEvent]:
    """Map a Textual key name (``shift+left``, ``backspace``, ``a``) to a KeyEvent.

    Returns ``None`` for keys the engine has no logical name for.
    """

    if not key:
        return None
    *prefixes, name = key.split("+")
    modifiers: set[str] = set()
    for prefix in prefixes:
        modifier = _MODIFIERS.get(prefix.lower())
        if modifier is None:
            return None
        modifiers.add(modifier)

    if name in _KEY_NAMES:
        logical = _KEY_NAMES[name]
    elif (
        character
        and len(character) == 1
        and character.isprintable()
        and not modifiers & {"ctrl", "meta"}
    ):
        logical = character
    elif len(name) == 1:
        logical = name
    else:
        return None

    return KeyEvent(
        logical,
        shift="shift" in modifiers,
        alt="alt" in modifiers,
        ctrl="ctrl" in modifiers,
        meta="meta" in modifiers,
    )


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[EditorMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditAdapter:
    """Bridges EditSession + bus events to a Textual-friendly surface."""

    def __init__(self, session: EditSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._unsubscribers = [
            session.subscribe("state.changed", self._on_state_changed),
            session.subscribe(
                "content.changed",
                lambda payload: self._handle_event("content.changed", payload),
            ),
        ]
        self._refresh_buffer()
        self.hooks.update_status(self.status_line())

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> DispatchResult:
        """Translate a Textual key event into a KeyEvent and dispatch it."""

        event = translate_textual_key(key, character)
        if event is None:
            self._log_state("key ignored", key=key)
            return DispatchResult(consumed=False)
        self._log_state("key ->", key=key, token=event.token)
        result = self.session.handle_key(event)
        self.hooks.update_status(self.status_line(result.action_id))
        self._log_state(
            "result <-",
            consumed=result.consumed,
            action=result.action_id,
            changed=result.changed,
        )
        return result

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def status_line(self, action_id: Optional[str] = None) -> str:
        state = self.session.state
        ast = state.ast
        parts = [
            f"cursor {state.cursor}",
            f"sentences {ast.sentence_count}",
            f"committed {len(state.committed)}",
            f"undo {self.session.history.undo_depth}",
        ]
        if action_id:
            parts.insert(0, action_id)
        return " | ".join(parts)

    def _on_state_changed(self, payload: object | None) -> None:
        if isinstance(payload, EditorMirror):
            self.hooks.update_buffer(payload)

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.session.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        state = self.session.state
        return {
            "fragment": self.session.fragment_id,
            "cursor": state.cursor,
            "word_selection": state.word_selection,
            "sentence_selection": state.sentence_selection,
            "ghosts": state.ghost_ranges,
        }


__all__ = ["TextualEditAdapter", "TextualUIHooks", "translate_textual_key"]
