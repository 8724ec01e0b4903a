"""Operators and single-key editing commands (``d``/``c``/``y``, ``x``, ``J``, ``p``)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from vim_core.buffer import Buffer, Cursor, Granularity, RegisterValue
from vim_core.buffer.validation import first_non_blank
from vim_core.config import Mode

from .models import Action, ActionOutcome
from .ranges import OperatorRange, operator_range, range_text

if TYPE_CHECKING:
    from vim_core.modes.base_mode import ModeContext


def write_register(buffer: Buffer, rng: OperatorRange) -> str:
    text = range_text(buffer, rng)
    if text:
        granularity = Granularity.LINE if rng.linewise else Granularity.CHARACTER
        buffer.register.write(text, granularity)
    return text


def delete_range(buffer: Buffer, rng: OperatorRange, *, label: str = "delete") -> bool:
    """Remove ``rng`` into the register; the cursor lands where it started."""

    text = write_register(buffer, rng)
    if not text:
        return False
    document = buffer.document
    with buffer.transaction(label):
        if rng.linewise:
            document.delete_rows(rng.first_row, rng.last_row)
            row = document.clamp_row(rng.first_row)
            buffer.set_cursor(row, first_non_blank(document.get_line(row)))
        else:
            document.delete_range(rng.start, rng.end)
            buffer.set_cursor(*rng.start)
    return True


def change_range(buffer: Buffer, rng: OperatorRange) -> None:
    """Delete ``rng`` inside an open insert undo group.

    Whole lines are replaced by one empty row the cursor is placed on.
    """

    buffer.begin_undo_group("change")
    write_register(buffer, rng)
    document = buffer.document
    with buffer.transaction("change"):
        if rng.linewise:
            whole = rng.first_row == 0 and rng.last_row >= document.line_count - 1
            document.delete_rows(rng.first_row, rng.last_row)
            if not whole:
                document.insert_rows(rng.first_row, [""])
            buffer.set_cursor(rng.first_row, 0)
        else:
            document.delete_range(rng.start, rng.end)
            buffer.set_cursor(*rng.start)


def delete(context: "ModeContext", action: Action) -> ActionOutcome:
    rng = operator_range(context, action)
    if rng is None:
        return ActionOutcome(applied=False, status="no_range")
    return ActionOutcome(applied=delete_range(context.buffer, rng))


def change(context: "ModeContext", action: Action) -> ActionOutcome:
    rng = operator_range(context, action)
    if rng is None:
        return ActionOutcome(applied=False, status="no_range")
    change_range(context.buffer, rng)
    return ActionOutcome(switch_to=Mode.INSERT.value)


def yank(context: "ModeContext", action: Action) -> ActionOutcome:
    rng = operator_range(context, action)
    if rng is None:
        return ActionOutcome(applied=False, status="no_range")
    buffer = context.buffer
    write_register(buffer, rng)
    if rng.linewise:
        buffer.set_cursor(rng.first_row, buffer.cursor.col, keep_sticky=True)
    else:
        buffer.set_cursor(*rng.start)
    return ActionOutcome(message="yank")


def delete_char(context: "ModeContext", action: Action) -> ActionOutcome:
    buffer = context.buffer
    row, col = buffer.cursor
    length = buffer.document.row_length(row)
    if length == 0:
        return ActionOutcome(applied=False, status="empty_row")
    col = min(col, length - 1)
    rng = OperatorRange(Cursor(row, col), Cursor(row, min(col + action.repeat, length)))
    return ActionOutcome(applied=delete_range(buffer, rng, label="delete_char"))


def _to_end_of_line(buffer: Buffer, action: Action) -> OperatorRange:
    row, col = buffer.cursor
    last = buffer.document.clamp_row(row + action.repeat - 1)
    return OperatorRange(Cursor(row, col), Cursor(last, buffer.document.row_length(last)))


def delete_to_eol(context: "ModeContext", action: Action) -> ActionOutcome:
    rng = _to_end_of_line(context.buffer, action)
    return ActionOutcome(applied=delete_range(context.buffer, rng, label="delete_to_eol"))


def change_to_eol(context: "ModeContext", action: Action) -> ActionOutcome:
    change_range(context.buffer, _to_end_of_line(context.buffer, action))
    return ActionOutcome(switch_to=Mode.INSERT.value)


def join_rows(buffer: Buffer, row: int, joins: int) -> bool:
    """Join ``joins`` following rows onto ``row``; the cursor lands on the last join point."""

    document = buffer.document
    if row >= document.line_count - 1:
        return False
    with buffer.transaction("join"):
        target = None
        for _ in range(max(joins, 1)):
            joined = document.join_rows(row)
            if joined is None:
                break
            target = joined
        if target is not None:
            buffer.set_cursor(*target)
    return True


def join_lines(context: "ModeContext", action: Action) -> ActionOutcome:
    joined = join_rows(context.buffer, context.buffer.cursor.row, max(action.repeat, 2) - 1)
    return ActionOutcome(applied=joined)


def _register_rows(text: str) -> list[str]:
    body = text[:-1] if text.endswith("\n") else text
    return body.split("\n")


def _whole_rows(value: RegisterValue) -> Optional[list[str]]:
    """Rows pasted on their own, or ``None`` when the text splices into a row.

    Characterwise text opening with a line break never splits the target row.
    """

    if value.linewise:
        return _register_rows(value.text)
    if value.text.startswith("\n"):
        return _register_rows(value.text[1:])
    return None


def paste(buffer: Buffer, action: Action, *, after: bool) -> bool:
    value = buffer.register.read()
    if value.is_empty:
        return False
    document = buffer.document
    row, col = buffer.cursor
    rows = _whole_rows(value)
    with buffer.transaction("paste"):
        if rows is not None:
            rows = rows * action.repeat
            target = row + 1 if after else row
            document.insert_rows(target, rows)
            buffer.set_cursor(target, first_non_blank(document.get_line(target)))
        else:
            text = value.text * action.repeat
            if after and document.row_length(row) > 0:
                col = min(col + 1, document.row_length(row))
            end = document.insert_text(Cursor(row, col), text)
            if "\n" in text:
                buffer.set_cursor(row, col)
            else:
                buffer.set_cursor(end.row, max(end.col - 1, 0))
    return True


def paste_after(context: "ModeContext", action: Action) -> ActionOutcome:
    return ActionOutcome(applied=paste(context.buffer, action, after=True))


def paste_before(context: "ModeContext", action: Action) -> ActionOutcome:
    return ActionOutcome(applied=paste(context.buffer, action, after=False))


def replace_with_register(buffer: Buffer, rng: OperatorRange) -> bool:
    """Swap ``rng`` for the register contents; the register keeps its value."""

    value = buffer.register.read()
    if value.is_empty:
        return False
    document = buffer.document
    rows = _whole_rows(value)
    with buffer.transaction("replace"):
        if rng.linewise:
            if rows is None:
                rows = _register_rows(value.text)
            whole = rng.first_row == 0 and rng.last_row >= document.line_count - 1
            document.delete_rows(rng.first_row, rng.last_row)
            document.insert_rows(rng.first_row, rows)
            if whole:
                document.delete_rows(len(rows), len(rows))
            buffer.set_cursor(rng.first_row, first_non_blank(document.get_line(rng.first_row)))
        elif rows is not None:
            document.delete_range(rng.start, rng.end)
            document.split_row(rng.start)
            document.insert_rows(rng.start.row + 1, rows)
            buffer.set_cursor(rng.start.row + 1, 0)
        else:
            document.delete_range(rng.start, rng.end)
            end = document.insert_text(rng.start, value.text)
            buffer.set_cursor(end.row, max(end.col - 1, 0))
    return True


__all__ = [
    "change",
    "change_range",
    "change_to_eol",
    "delete",
    "delete_char",
    "delete_range",
    "delete_to_eol",
    "join_lines",
    "join_rows",
    "paste",
    "paste_after",
    "paste_before",
    "replace_with_register",
    "write_register",
    "yank",
]
