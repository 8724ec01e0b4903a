from __future__ import annotations

from typing import List

import pytest

from vim_core.actions import Action
from vim_core.buffer import Buffer
from vim_core.modes import (
    InsertMode,
    KeyInput,
    ModeContext,
    ModeManager,
    NormalMode,
    OperatorPending,
    SearchMode,
    parse_keys,
)


def make_manager(text: str = "") -> ModeManager:
    context = ModeContext(buffer=Buffer.from_text(text))
    manager = ModeManager(context)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(SearchMode)
    return manager


def test_first_registered_mode_is_active() -> None:
    manager = make_manager()

    assert manager.active_mode is not None
    assert manager.active_mode.name == "normal"
    assert manager.modes() == ("normal", "insert", "search")


def test_duplicate_mode_rejected() -> None:
    manager = make_manager()

    with pytest.raises(ValueError):
        manager.register_mode(NormalMode)


def test_unknown_mode_switch_raises() -> None:
    manager = make_manager()

    with pytest.raises(KeyError):
        manager.switch_mode("replace")


def test_mode_switch_emits_bus_event() -> None:
    manager = make_manager()
    seen: List[object] = []
    manager.context.bus.subscribe("mode.switch", seen.append)

    manager.switch_mode("insert")
    manager.switch_mode("insert")

    assert seen == ["insert"]
    assert manager.context.mode == "insert"


def test_normal_mode_tracks_pending_state() -> None:
    manager = make_manager("abc")
    normal = manager.active_mode

    result = manager.handle_key(KeyInput("d", text="d"))

    assert result.status == "pending"
    assert isinstance(normal.state, OperatorPending)
    manager.switch_mode("insert")
    assert normal.pending_keys == ()


def test_insert_mode_falls_back_to_text() -> None:
    manager = make_manager()
    manager.switch_mode("insert")
    insert = manager.active_mode

    result = insert.handle_key(KeyInput("q", text="q"))
    assert result.action == Action(name="insert_text", text="q")

    ctrl = insert.handle_key(KeyInput("q", ("ctrl",)))
    assert not ctrl.consumed


def test_search_mode_text_extends_pattern() -> None:
    manager = make_manager("abc")

    for key in parse_keys("/bc"):
        manager.handle_key(key)

    assert manager.context.search.pattern == "bc"
    assert manager.context.buffer.cursor == (0, 1)


def test_parse_keys_notation() -> None:
    keys = parse_keys("d<Esc><C-r><lt>\n")

    assert keys == [
        KeyInput("d", text="d"),
        KeyInput("ESC"),
        KeyInput("r", ("ctrl",)),
        KeyInput("<", text="<"),
        KeyInput("ENTER"),
    ]
