from __future__ import annotations

from typing import List

from prose_engine.adapters.textual import (
    TextualEditAdapter,
    TextualUIHooks,
    translate_textual_key,
)
from prose_engine.keymaps import KeyEvent
from prose_engine.session import EditSession


def test_translate_textual_key_names() -> None:
    assert translate_textual_key("left") == KeyEvent("ArrowLeft")
    assert translate_textual_key("shift+right") == KeyEvent("ArrowRight", shift=True)
    assert translate_textual_key("alt+backspace") == KeyEvent("Backspace", alt=True)
    assert translate_textual_key("super+enter") == KeyEvent("Enter", meta=True)
    assert translate_textual_key("space", " ") == KeyEvent(" ")
    assert translate_textual_key("full_stop", ".") == KeyEvent(".")
    assert translate_textual_key("ctrl+a") == KeyEvent("a", ctrl=True)


def test_translate_textual_key_rejects_unknown_keys() -> None:
    assert translate_textual_key("f5") is None
    assert translate_textual_key("hyper+x") is None
    assert translate_textual_key("") is None


def test_adapter_updates_buffer_and_status() -> None:
    session = EditSession()
    updates: List[str] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: updates.append(mirror.text),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualEditAdapter(session, hooks)

    adapter.handle_textual_key("h", character="h")
    adapter.handle_textual_key("i", character="i")
    adapter.handle_textual_key("backspace")

    assert updates == ["", "h", "hi", "h"]
    assert statuses[-1].startswith("edit.backspace | cursor 1")


def test_adapter_relays_content_events_and_logs() -> None:
    session = EditSession.from_text("One.")
    events: List[tuple[str, object | None]] = []
    lines: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        handle_event=lambda name, payload: events.append((name, payload)),
        log=lines.append,
    )
    adapter = TextualEditAdapter(session, hooks)

    result = adapter.handle_textual_key("super+enter")

    assert result.action_id == "structure.toggle_commit"
    assert [name for name, _ in events] == ["content.changed"]
    assert any(line.startswith("key ->") for line in lines)
    assert any(line.startswith("result <-") for line in lines)


def test_adapter_ignores_untranslatable_keys() -> None:
    session = EditSession.from_text("abc")
    lines: List[str] = []
    adapter = TextualEditAdapter(
        session, TextualUIHooks(update_buffer=lambda mirror: None, log=lines.append)
    )

    result = adapter.handle_textual_key("f5")

    assert result.consumed is False
    assert lines[-1].startswith("key ignored")


def test_adapter_close_unsubscribes() -> None:
    session = EditSession()
    updates: List[str] = []
    adapter = TextualEditAdapter(
        session, TextualUIHooks(update_buffer=lambda mirror: updates.append(mirror.text))
    )

    adapter.close()
    session.type_text("x")

    assert updates == [""]
