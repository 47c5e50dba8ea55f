"""Editing session: owns one live state, its history and key dispatch."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Mapping, Optional, Union

from prose_engine.actions import EditContext
from prose_engine.buffer import (
    EditHistory,
    EditorMirror,
    EditorState,
    EditorSync,
    FragmentSnapshot,
    IdSequence,
    SentenceRecord,
    records_from_state,
    state_from_records,
    validate_state,
)
from prose_engine.buffer.history import Clock
from prose_engine.keymaps import (
    KeyEvent,
    KeymapRegistry,
    KeymapResolver,
    load_default_keymaps,
)
from prose_engine.runtime import EngineConfig, telemetry

from .bus import KeyBus, Listener

KeyInput = Union[KeyEvent, Mapping[str, object]]


@dataclass(slots=True)
class DispatchResult:
    """Outcome of ``EditSession.handle_key``."""

    consumed: bool
    action_id: Optional[str] = None
    changed: bool = False


class EditSession:
    """Processes one key event at a time against a single fragment.

    Every event is resolved, applied and published before the next one is
    accepted. Listeners on ``bus`` receive ``state.changed`` with an
    ``EditorMirror`` and ``content.changed`` with the sentence records
    whenever text or the committed set moves.
    """

    def __init__(
        self,
        state: Optional[EditorState] = None,
        *,
        config: Optional[EngineConfig] = None,
        clock: Clock = time.monotonic,
        registry: Optional[KeymapRegistry] = None,
        resolver: Optional[KeymapResolver] = None,
        bus: Optional[KeyBus] = None,
        load_defaults: bool = True,
        fragment_id: Optional[str] = None,
        ids: Optional[IdSequence] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self._state = state if state is not None else EditorState()
        self.history = EditHistory(
            limit=self.config.history_limit,
            batch_window=self.config.batch_window,
            clock=clock,
            logger_name="prose_engine.history",
        )
        self.logger = telemetry.get_logger("prose_engine.session")
        self.registry = registry or KeymapRegistry(logger_name="prose_engine.keymaps")
        if load_defaults and registry is None:
            load_default_keymaps(self.registry)
        self.resolver = resolver or KeymapResolver(self.registry)
        self.bus = bus or KeyBus()
        self.fragment_id = fragment_id or (ids or IdSequence()).next_id()

    @classmethod
    def from_text(cls, text: str, **kwargs: object) -> "EditSession":
        return cls(EditorState.from_text(text), **kwargs)  # type: ignore[arg-type]

    @property
    def state(self) -> EditorState:
        return self._state

    def flags(self) -> dict[str, bool]:
        return {
            "sentence_selection": self._state.sentence_selection is not None,
            "word_selection": self._state.word_selection is not None,
        }

    def handle_key(self, event: KeyInput) -> DispatchResult:
        if not isinstance(event, KeyEvent):
            event = KeyEvent.from_mapping(event)
        with telemetry.span(
            "session::dispatch",
            logger_name="prose_engine.session",
            component="session",
            metadata={"token": event.token, "fragment": self.fragment_id},
        ) as handle:
            resolution = self.resolver.resolve(event, flags=self.flags())
            if resolution.match is None:
                handle.add_metadata("status", resolution.status)
                return DispatchResult(consumed=False)

            action = resolution.match.action
            handle.add_metadata("action", action.id)
            previous = self._state
            result = action(EditContext(previous, self.history), event)
            if not isinstance(result, EditorState):
                raise TypeError(
                    f"Action '{action.id}' returned {type(result).__name__}, expected EditorState"
                )
            changed = self._apply(previous, result, action.history)
            event_name = action.metadata.get("event")
            if event_name and changed:
                telemetry.record_event(
                    str(event_name),
                    data={"fragment": self.fragment_id, "undo_depth": self.history.undo_depth},
                    logger_name="prose_engine.session",
                )
            return DispatchResult(consumed=True, action_id=action.id, changed=changed)

    def type_text(self, text: str) -> List[DispatchResult]:
        """Dispatch each character as its own key event."""

        results: List[DispatchResult] = []
        for char in text:
            key = "Enter" if char == "\n" else char
            results.append(self.handle_key(KeyEvent(key)))
        return results

    def undo(self) -> bool:
        return self.handle_key(KeyEvent("z", meta=True)).changed

    def redo(self) -> bool:
        return self.handle_key(KeyEvent("z", meta=True, shift=True)).changed

    def load_text(self, text: str) -> None:
        """Replace the live state; history does not survive a load."""

        self.history.clear()
        self._publish(self._state, EditorState.from_text(text))

    def load_records(self, records: Iterable[SentenceRecord]) -> None:
        self.history.clear()
        self._publish(self._state, state_from_records(tuple(records)))

    def mirror(self) -> EditorMirror:
        return EditorMirror.of(self._state)

    def records(self) -> List[SentenceRecord]:
        return records_from_state(self._state)

    def fragment_snapshot(self) -> FragmentSnapshot:
        return FragmentSnapshot(self.fragment_id, tuple(self.records()))

    def push_to(self, sync: EditorSync) -> FragmentSnapshot:
        snapshot = self.fragment_snapshot()
        sync.push_records(snapshot)
        return snapshot

    def subscribe(self, event: str, callback: Listener) -> Callable[[], None]:
        return self.bus.subscribe(event, callback)

    def _apply(
        self, previous: EditorState, result: EditorState, policy: Optional[str]
    ) -> bool:
        if self.config.debug_invariants:
            validate_state(result)
        edited = previous.editable_fields() != result.editable_fields()
        if policy is not None and edited:
            self.history.snapshot_before_edit(previous, force=policy == "force")
        return self._publish(previous, result)

    def _publish(self, previous: EditorState, result: EditorState) -> bool:
        self._state = result
        if result == previous:
            return False
        self.bus.emit("state.changed", EditorMirror.of(result))
        if result.text != previous.text or result.committed != previous.committed:
            self.bus.emit("content.changed", records_from_state(result))
        return True


__all__ = ["DispatchResult", "EditSession", "KeyInput"]
