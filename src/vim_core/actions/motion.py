"""Cursor movement through the motion calculator."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vim_core.buffer import Cursor
from vim_core.config import VISUAL_MODES, Mode

from .models import Action, ActionOutcome
from .ranges import compute_motion
from .visual import sync_selection

if TYPE_CHECKING:
    from vim_core.modes.base_mode import ModeContext


def move(context: "ModeContext", action: Action) -> ActionOutcome:
    """Apply ``action.motion`` to the cursor, extending any visual selection.

    Insert mode may rest after the last character, so ``END`` lands there.
    Vertical motions keep the remembered column.
    """

    in_insert = context.mode == Mode.INSERT.value
    result = compute_motion(context, action.motion, action.count, allow_append=in_insert)
    if result is None:
        return ActionOutcome(applied=False, status="unknown_motion", message=action.motion)

    buffer = context.buffer
    position = result.position
    if in_insert and action.motion == "line_end":
        position = Cursor(position.row, buffer.document.row_length(position.row))

    if result.keep_sticky:
        sticky = buffer.state.sticky_col
        if sticky is None:
            sticky = buffer.cursor.col
        buffer.set_cursor(*position, keep_sticky=True)
        buffer.state.sticky_col = sticky
    else:
        buffer.set_cursor(*position)

    if context.mode in VISUAL_MODES:
        sync_selection(context)
    return ActionOutcome(applied=not result.failed, status="ok" if not result.failed else "noop")


__all__ = ["move"]
