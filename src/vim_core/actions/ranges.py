"""Resolve the text an action operates on: motion targets, text objects, selections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from vim_core.buffer.state import CharSelection, Cursor, LineSelection
from vim_core.motions import (
    MotionContext,
    MotionResult,
    MotionType,
    get_motion,
    resolve_text_object,
)

from .models import Action

if TYPE_CHECKING:
    from vim_core.buffer import Buffer
    from vim_core.modes.base_mode import ModeContext


@dataclass(frozen=True, slots=True)
class OperatorRange:
    """Charwise ``[start, end)`` or, when ``linewise``, rows ``start.row..end.row``."""

    start: Cursor
    end: Cursor
    linewise: bool = False

    @property
    def first_row(self) -> int:
        return self.start.row

    @property
    def last_row(self) -> int:
        return self.end.row


def compute_motion(
    context: "ModeContext",
    name: Optional[str],
    count: Optional[int],
    *,
    allow_append: bool = False,
) -> Optional[MotionResult]:
    func = get_motion(name) if name else None
    if func is None:
        return None
    buffer = context.buffer
    cursor = buffer.cursor
    sticky = buffer.state.sticky_col
    motion_ctx = MotionContext(
        sticky_col=sticky if sticky is not None else cursor.col,
        viewport_height=context.viewport_height,
        allow_append=allow_append,
        explicit_count=count is not None,
    )
    return func(buffer.lines(), cursor, count if count is not None else 1, motion_ctx)


def line_range(buffer: "Buffer", first: int, last: int) -> OperatorRange:
    document = buffer.document
    first, last = sorted((document.clamp_row(first), document.clamp_row(last)))
    return OperatorRange(Cursor(first, 0), Cursor(last, document.row_length(last)), linewise=True)


def operator_range(context: "ModeContext", action: Action) -> Optional[OperatorRange]:
    """Range covered by an operator action, or ``None`` when it cannot apply."""

    buffer = context.buffer
    lines = buffer.lines()
    cursor = buffer.cursor

    if action.text_object is not None:
        found = resolve_text_object(
            lines, cursor, action.text_object.delimiter, action.text_object.scope
        )
        if found is None:
            return None
        return OperatorRange(found.start, found.end, found.linewise)

    if action.motion is None:
        return line_range(buffer, cursor.row, cursor.row + action.repeat - 1)

    motion = action.motion
    if action.name == "change" and motion == "word_forward":
        text = lines[cursor.row]
        if cursor.col < len(text) and not text[cursor.col].isspace():
            motion = "word_end"

    result = compute_motion(context, motion, action.count, allow_append=True)
    if result is None or result.failed:
        return None
    start, end = sorted((cursor, result.position))
    if result.type is MotionType.LINEWISE:
        return line_range(buffer, start.row, end.row)
    if result.type is MotionType.INCLUSIVE:
        end = Cursor(end.row, min(end.col + 1, len(lines[end.row])))
    elif motion == "word_forward" and end.row > start.row:
        end = Cursor(end.row - 1, len(lines[end.row - 1]))
    return OperatorRange(start, end)


def selection_range(buffer: "Buffer") -> Optional[OperatorRange]:
    """Range covered by the visual selection; charwise selections are inclusive."""

    selection = buffer.state.selection
    if isinstance(selection, LineSelection):
        return line_range(buffer, selection.start_row, selection.end_row)
    if not isinstance(selection, CharSelection):
        return None
    document = buffer.document
    start, end = selection.ordered()
    start = document.clamp(*start)
    end = document.clamp(*end)
    length = document.row_length(end.row)
    if end.col < length:
        end = Cursor(end.row, end.col + 1)
    elif end.row < document.line_count - 1:
        end = Cursor(end.row + 1, 0)
    else:
        end = Cursor(end.row, length)
    return OperatorRange(start, end)


def range_text(buffer: "Buffer", rng: OperatorRange) -> str:
    """Register text for ``rng``; linewise text ends with a newline."""

    if rng.linewise:
        rows = [buffer.document.get_line(row) for row in range(rng.first_row, rng.last_row + 1)]
        return "\n".join(rows) + "\n"
    return buffer.get_text_range(rng.start, rng.end)


__all__ = [
    "OperatorRange",
    "compute_motion",
    "line_range",
    "operator_range",
    "range_text",
    "selection_range",
]
