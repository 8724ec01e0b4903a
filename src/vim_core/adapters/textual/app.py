"""Executable Textual app that hosts the Vim engine."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use vim_core.adapters.textual.app"
    ) from exc

from vim_core.buffer import CharSelection, EditorSnapshot, LineSelection
from vim_core.config import EngineConfig
from vim_core.editor import Editor

from .controller import TextualUIHooks, TextualVimAdapter

SAMPLE_TEXT = """\
def greet(name):
    message = "hello, " + name
    return (message, len(message))

# try: ciw, da(, yy p, V j d, /name<Enter> n, u ctrl+r
"""


def _selected(snapshot: EditorSnapshot, row: int, col: int) -> bool:
    selection = snapshot.selection
    if isinstance(selection, LineSelection):
        return selection.start_row <= row <= selection.end_row
    if isinstance(selection, CharSelection):
        start, end = selection.ordered()
        return tuple(start) <= (row, col) <= tuple(end)
    return False


def render_snapshot(snapshot: EditorSnapshot, height: int) -> Text:
    """Render the visible rows with cursor, selection and search styling."""

    matches = {}
    for match in snapshot.search_highlights:
        for col in range(match.start, match.end):
            matches[(match.row, col)] = match == snapshot.current_match
    text = Text()
    first = snapshot.scroll_offset
    for row in range(first, min(first + height, len(snapshot.rows))):
        cells = snapshot.rows[row]
        for col, (char, _width) in enumerate(cells):
            style = ""
            if (row, col) in matches:
                style = "black on yellow" if matches[(row, col)] else "black on dark_goldenrod"
            if _selected(snapshot, row, col):
                style = "reverse"
            if (row, col) == tuple(snapshot.cursor):
                style = "black on white"
            text.append(char, style=style)
        if tuple(snapshot.cursor) == (row, len(cells)):
            text.append(" ", style="black on white")
        text.append("\n")
    return text


@dataclass
class UIState:
    status_text: str = ""
    command_text: str = ""


class VimCoreApp(App[None]):
    """Minimal Textual UI embedding the Vim engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		content-align: left top;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, text: str = SAMPLE_TEXT, *, config: EngineConfig | None = None) -> None:
        super().__init__()
        self._state = UIState()
        self.editor = Editor(text, config=config or EngineConfig.from_env())
        self.adapter: TextualVimAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._status_widget
        yield self._command_widget
        yield Footer()

    async def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_command=self._show_command,
            handle_event=self._handle_event,
        )
        self.adapter = TextualVimAdapter(self.editor, hooks)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter and self._buffer_widget:
            height = max(self._buffer_widget.size.height, 1)
            self.adapter.resize(height)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        if event.is_printable and event.character:
            self.adapter.handle_textual_key(event.character, text=event.character)
        else:
            self.adapter.handle_textual_key(event.key)
        event.stop()

    def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.handle_paste(event.text)
        event.stop()

    def on_click(self, event: events.Click) -> None:
        self._pointer("press", event)
        self._pointer("release", event)

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if event.button:
            self._pointer("drag", event)

    def _pointer(self, kind: str, event: Any) -> None:
        if not self.adapter or not self._buffer_widget:
            return
        offset = event.get_content_offset(self._buffer_widget)
        if offset is None:
            return
        row = offset.y + self.editor.scroll_offset
        self.adapter.handle_pointer(kind, row, offset.x)

    def _update_buffer(self, snapshot: EditorSnapshot) -> None:
        if self._buffer_widget:
            height = max(self._buffer_widget.size.height, self.editor.viewport_height)
            self._buffer_widget.update(render_snapshot(snapshot, height))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            cursor = self.editor.cursor
            self._status_widget.update(f"{status}  {cursor.row + 1}:{cursor.col + 1}")

    def _show_command(self, command: str) -> None:
        self._state.command_text = command
        if self._command_widget:
            self._command_widget.update(command)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "visual.selection":
            self._update_status("selection")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the vim_core Textual demo.")
    parser.add_argument(
        "--telemetry-preset",
        choices=("development", "production", "performance"),
        default=os.environ.get("VIM_CORE_TELEMETRY_PRESET"),
        help="telelog preset applied before the editor starts",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = replace(EngineConfig.from_env(), telemetry_preset=args.telemetry_preset)
    VimCoreApp(config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
