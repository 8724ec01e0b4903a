from __future__ import annotations

from typing import Any, Dict, List

from vim_core import Editor
from vim_core.adapters.textual import TextualUIHooks, TextualVimAdapter, translate_key
from vim_core.buffer import EditorSnapshot
from vim_core.modes import KeyInput


def make_adapter(text: str = "", **hooks: Any) -> TextualVimAdapter:
    hooks.setdefault("update_buffer", lambda snapshot: None)
    return TextualVimAdapter(Editor(text), TextualUIHooks(**hooks))


def test_translate_key_names() -> None:
    assert translate_key("escape") == KeyInput("ESC")
    assert translate_key("a") == KeyInput("a", text="a")
    assert translate_key("space") == KeyInput(" ", text=" ")
    assert translate_key("ctrl+r") == KeyInput("r", ("ctrl",))
    assert translate_key("ctrl+h") == KeyInput("BACKSPACE")


def test_adapter_updates_buffer_and_status() -> None:
    snapshots: List[EditorSnapshot] = []
    statuses: List[str] = []
    adapter = make_adapter(
        update_buffer=snapshots.append,
        update_status=statuses.append,
    )

    adapter.handle_textual_key("i")
    adapter.handle_textual_key("h")
    adapter.handle_textual_key("escape")

    assert snapshots[-1].text == "h"
    assert snapshots[-1].mode == "normal"
    assert "INSERT" in statuses
    assert "enter_insert" in statuses
    assert statuses[-1] == "exit_insert"


def test_adapter_shows_search_command_line() -> None:
    command_lines: List[str] = []
    adapter = make_adapter("foo bar", show_command=command_lines.append)

    adapter.handle_textual_key("/", text="/")
    adapter.handle_textual_key("b", text="b")
    assert command_lines[-1] == "/b"

    adapter.handle_textual_key("enter")
    assert command_lines[-1] == ""
    assert adapter.editor.cursor == (0, 4)


def test_adapter_surfaces_visual_selection_events() -> None:
    events: List[Dict[str, Any]] = []
    adapter = make_adapter(
        "abc",
        handle_event=lambda name, payload: events.append({"name": name, "payload": payload}),
    )

    adapter.handle_textual_key("v")
    adapter.handle_textual_key("l")

    assert {"name": "mode.switch", "payload": "visual"} in events
    visual_payloads = [event for event in events if event["name"] == "visual.selection"]
    assert visual_payloads[-1]["payload"]["cursor"] == (0, 1)


def test_adapter_forwards_pointer_and_resize() -> None:
    snapshots: List[EditorSnapshot] = []
    adapter = make_adapter("\n".join("row" for _ in range(30)), update_buffer=snapshots.append)

    adapter.handle_pointer("press", 20, 1)
    adapter.resize(5)

    assert snapshots[-1].cursor == (20, 1)
    assert snapshots[-1].scroll_offset == 16


def test_adapter_forwards_paste() -> None:
    snapshots: List[EditorSnapshot] = []
    adapter = make_adapter("abc", update_buffer=snapshots.append)

    adapter.handle_paste("xy")

    assert adapter.editor.text() == "axybc"
    assert snapshots[-1].cursor == (0, 2)


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter = make_adapter(log=logs.append)

    adapter.handle_textual_key("i")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") and "mode='insert'" in line for line in logs)
