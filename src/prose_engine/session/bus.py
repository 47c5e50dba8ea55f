"""Minimal publish/subscribe bus a session uses to announce changes."""

from __future__ import annotations

from typing import Callable, Dict

Listener = Callable[[object], None]


class KeyBus:
    """Synchronous event bus; listeners run in subscription order."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> Callable[[], None]:
        listeners = self._subscribers.setdefault(event, [])
        listeners.append(callback)

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)

    def has_listeners(self, event: str) -> bool:
        return bool(self._subscribers.get(event))


__all__ = ["KeyBus", "Listener"]
