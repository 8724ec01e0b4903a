"""Insert-mode text entry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vim_core.buffer import Cursor
from vim_core.config import Mode

from .models import Action, ActionOutcome

if TYPE_CHECKING:
    from vim_core.modes.base_mode import ModeContext


def insert_text(context: "ModeContext", action: Action) -> ActionOutcome:
    text = action.text or ""
    if not text:
        return ActionOutcome(applied=False, status="noop")
    buffer = context.buffer
    with buffer.transaction("insert_text"):
        end = buffer.document.insert_text(buffer.cursor, text * action.repeat)
        buffer.set_cursor(*end)
    return ActionOutcome()


def insert_newline(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    buffer = context.buffer
    with buffer.transaction("insert_newline"):
        buffer.set_cursor(*buffer.document.split_row(buffer.cursor))
    return ActionOutcome()


def insert_backspace(context: "ModeContext", action: Action) -> ActionOutcome:
    """Delete before the cursor; at column 0 join with the previous row."""

    del action
    buffer = context.buffer
    row, col = buffer.cursor
    if col == 0 and row == 0:
        return ActionOutcome(applied=False, status="noop")
    if col > 0:
        start = Cursor(row, col - 1)
    else:
        start = Cursor(row - 1, buffer.document.row_length(row - 1))
    with buffer.transaction("insert_backspace"):
        buffer.document.delete_range(start, Cursor(row, col))
        buffer.set_cursor(*start)
    return ActionOutcome()


def insert_delete(context: "ModeContext", action: Action) -> ActionOutcome:
    """Delete under the cursor; at end of row pull the next row up."""

    del action
    buffer = context.buffer
    document = buffer.document
    row, col = buffer.cursor
    if col < document.row_length(row):
        end = Cursor(row, col + 1)
    elif row < document.line_count - 1:
        end = Cursor(row + 1, 0)
    else:
        return ActionOutcome(applied=False, status="noop")
    with buffer.transaction("insert_delete"):
        document.delete_range(Cursor(row, col), end)
        buffer.set_cursor(row, col)
    return ActionOutcome()


def insert_delete_to_line_start(context: "ModeContext", action: Action) -> ActionOutcome:
    """Delete back to the first non-blank, or to column 0 from inside the indent."""

    del action
    buffer = context.buffer
    row, col = buffer.cursor
    if col == 0:
        return ActionOutcome(applied=False, status="noop")
    line = buffer.document.get_line(row)
    start = len(line) - len(line.lstrip())
    if start >= col:
        start = 0
    with buffer.transaction("insert_delete_to_line_start"):
        buffer.document.delete_range(Cursor(row, start), Cursor(row, col))
        buffer.set_cursor(row, start)
    return ActionOutcome()


def exit_insert(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    buffer = context.buffer
    row, col = buffer.cursor
    if col > 0:
        buffer.set_cursor(row, col - 1)
    return ActionOutcome(switch_to=Mode.NORMAL.value, message="exit_insert")


__all__ = [
    "exit_insert",
    "insert_backspace",
    "insert_delete",
    "insert_delete_to_line_start",
    "insert_newline",
    "insert_text",
]
