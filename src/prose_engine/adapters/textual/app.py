"""Executable Textual app that hosts the prose engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use prose_engine.adapters.textual.app"
    ) from exc

from prose_engine.buffer import EditorMirror
from prose_engine.keymaps import Binding
from prose_engine.runtime import EngineConfig, telemetry
from prose_engine.session import EditSession

from .controller import TextualEditAdapter, TextualUIHooks

# Terminals rarely deliver a distinct meta key; these stand in for it.
TERMINAL_BINDINGS: tuple[Binding, ...] = (
    Binding(id="terminal.undo", token="ctrl+z", action_id="history.undo"),
    Binding(id="terminal.redo", token="ctrl+y", action_id="history.redo"),
    Binding(
        id="terminal.sentence_left",
        token="ctrl+ArrowLeft",
        action_id="cursor.sentence_left",
    ),
    Binding(
        id="terminal.sentence_right",
        token="ctrl+ArrowRight",
        action_id="cursor.sentence_right",
    ),
    Binding(
        id="terminal.select_sentence_left",
        token="ctrl+shift+ArrowLeft",
        action_id="selection.sentence_left",
    ),
    Binding(
        id="terminal.select_sentence_right",
        token="ctrl+shift+ArrowRight",
        action_id="selection.sentence_right",
    ),
    Binding(
        id="terminal.toggle_commit",
        token="ctrl+t",
        action_id="structure.toggle_commit",
    ),
    Binding(
        id="terminal.backspace_word",
        token="ctrl+w",
        action_id="edit.backspace_word",
    ),
)

SELECTED_STYLE = "on dark_blue"
UNCOMMITTED_STYLE = "grey62"
GHOST_STYLE = "strike red"
CURSOR_STYLE = "reverse"


def create_default_session(
    text: str = "", *, config: Optional[EngineConfig] = None
) -> EditSession:
    """Build an EditSession with the default keymap plus terminal fallbacks."""

    session = EditSession.from_text(text, config=config or EngineConfig.from_env())
    for binding in TERMINAL_BINDINGS:
        session.registry.register_binding(binding)
    return session


def render_mirror(mirror: EditorMirror) -> Text:
    """Styled rich text for one mirror: highlights, ghosts and the cursor."""

    rendered = Text(mirror.text)
    for span in mirror.highlight_spans():
        styles = []
        if span.uncommitted:
            styles.append(UNCOMMITTED_STYLE)
        if span.selected:
            styles.append(SELECTED_STYLE)
        if span.ghost:
            styles.append(GHOST_STYLE)
        if styles:
            rendered.stylize(" ".join(styles), span.start, span.end)
    if mirror.cursor >= len(mirror.text) or mirror.text[mirror.cursor] == "\n":
        rendered = _insert_cursor_cell(rendered, mirror.cursor)
    else:
        rendered.stylize(CURSOR_STYLE, mirror.cursor, mirror.cursor + 1)
    return rendered


def _insert_cursor_cell(rendered: Text, position: int) -> Text:
    head, tail = rendered[:position], rendered[position:]
    head.append(" ", style=CURSOR_STYLE)
    head.append_text(tail)
    return head


@dataclass
class UIState:
    status_text: str = ""
    last_event: str = ""


class ProseEngineApp(App[None]):
    """Minimal Textual UI embedding the prose engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, text: str = "", config: Optional[EngineConfig] = None) -> None:
        super().__init__()
        self._state = UIState()
        self._initial_text = text
        self._config = config
        self.session: EditSession | None = None
        self.adapter: TextualEditAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.session = create_default_session(self._initial_text, config=self._config)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualEditAdapter(self.session, hooks)

    async def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()
            self.adapter = None

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        result = self.adapter.handle_textual_key(event.key, character=event.character)
        if result.consumed:
            event.stop()

    def _update_buffer(self, mirror: EditorMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        self._state.last_event = name
        if name == "content.changed" and isinstance(payload, list):
            self.sub_title = f"{len(payload)} sentences"

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "adapter.log",
            level="debug",
            data={"line": line},
            logger_name="prose_engine.adapters.textual",
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the prose engine Textual demo.")
    parser.add_argument(
        "--text",
        default="",
        help="Initial fragment text",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="telelog preset to apply instead of PROSE_ENGINE_* variables",
    )
    parser.add_argument(
        "--debug-invariants",
        action="store_true",
        help="Validate the full editor state after every key",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    config = EngineConfig.from_env()
    if args.debug_invariants:
        config = EngineConfig(
            history_limit=config.history_limit,
            batch_window_ms=config.batch_window_ms,
            debug_invariants=True,
        )
    app = ProseEngineApp(text=args.text, config=config)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
