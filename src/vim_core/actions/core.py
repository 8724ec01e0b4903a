"""Mode-entry, history and cancel actions shared across modes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vim_core.buffer.validation import first_non_blank
from vim_core.config import Mode

from .models import Action, ActionOutcome

if TYPE_CHECKING:
    from vim_core.modes.base_mode import ModeContext

INSERT = Mode.INSERT.value


def insert_before(context: "ModeContext", action: Action) -> ActionOutcome:
    del context, action
    return ActionOutcome(switch_to=INSERT, message="enter_insert")


def append(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    buffer = context.buffer
    buffer.begin_undo_group("insert")
    row, col = buffer.cursor
    if buffer.document.row_length(row):
        buffer.set_cursor(row, col + 1)
    return ActionOutcome(switch_to=INSERT, message="enter_insert")


def insert_line_start(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    buffer = context.buffer
    buffer.begin_undo_group("insert")
    row = buffer.cursor.row
    buffer.set_cursor(row, first_non_blank(buffer.document.get_line(row)))
    return ActionOutcome(switch_to=INSERT, message="enter_insert")


def append_line_end(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    buffer = context.buffer
    buffer.begin_undo_group("insert")
    row = buffer.cursor.row
    buffer.set_cursor(row, buffer.document.row_length(row))
    return ActionOutcome(switch_to=INSERT, message="enter_insert")


def _open_row(context: "ModeContext", row: int) -> ActionOutcome:
    buffer = context.buffer
    buffer.begin_undo_group("insert")
    with buffer.transaction("open_line"):
        buffer.document.insert_rows(row, [""])
        buffer.set_cursor(row, 0)
    return ActionOutcome(switch_to=INSERT, message="enter_insert")


def open_below(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    return _open_row(context, context.buffer.cursor.row + 1)


def open_above(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    return _open_row(context, context.buffer.cursor.row)


def cancel(context: "ModeContext", action: Action) -> ActionOutcome:
    del context, action
    return ActionOutcome(applied=False, status="cancelled")


def undo(context: "ModeContext", action: Action) -> ActionOutcome:
    steps = 0
    for _ in range(action.repeat):
        if not context.buffer.undo():
            break
        steps += 1
    return ActionOutcome(applied=steps > 0, status="ok" if steps else "noop")


def redo(context: "ModeContext", action: Action) -> ActionOutcome:
    steps = 0
    for _ in range(action.repeat):
        if not context.buffer.redo():
            break
        steps += 1
    return ActionOutcome(applied=steps > 0, status="ok" if steps else "noop")


__all__ = [
    "append",
    "append_line_end",
    "cancel",
    "insert_before",
    "insert_line_start",
    "open_above",
    "open_below",
    "redo",
    "undo",
]
