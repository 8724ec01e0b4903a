"""Search-mode actions and ``n``/``N`` match cycling."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from vim_core.buffer import Cursor, MatchRange
from vim_core.config import Mode

from .models import Action, ActionOutcome

if TYPE_CHECKING:
    from vim_core.modes.base_mode import ModeContext


def _jump(context: "ModeContext", match: Optional[MatchRange]) -> bool:
    if match is None:
        return False
    context.buffer.set_cursor(match.row, match.start)
    return True


def _preview(context: "ModeContext") -> None:
    """Show the match ``ENTER`` would pick, or return to the search origin."""

    search = context.search
    if not _jump(context, search.select_first()):
        context.buffer.set_cursor(*search.origin)


def search_start(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    context.search.begin(context.buffer.cursor)
    return ActionOutcome(switch_to=Mode.SEARCH.value, message="search")


def search_input(context: "ModeContext", action: Action) -> ActionOutcome:
    if not action.text:
        return ActionOutcome(applied=False, status="noop")
    buffer = context.buffer
    context.search.push_char(action.text, buffer.lines(), buffer.revision)
    _preview(context)
    return ActionOutcome()


def search_backspace(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    buffer = context.buffer
    context.search.pop_char(buffer.lines(), buffer.revision)
    _preview(context)
    return ActionOutcome()


def search_submit(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    search = context.search
    if not search.pattern:
        search.clear()
        context.buffer.set_cursor(*search.origin)
        return ActionOutcome(applied=False, switch_to=Mode.NORMAL.value, status="empty_pattern")
    found = _jump(context, search.select_first())
    if not found:
        context.buffer.set_cursor(*search.origin)
    return ActionOutcome(
        applied=found,
        switch_to=Mode.NORMAL.value,
        status="ok" if found else "not_found",
        message=search.pattern,
    )


def search_cancel(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    search = context.search
    search.clear()
    context.buffer.set_cursor(*search.origin)
    return ActionOutcome(switch_to=Mode.NORMAL.value, status="cancelled")


def _cycle(context: "ModeContext", action: Action, *, forward: bool) -> ActionOutcome:
    search = context.search
    buffer = context.buffer
    if not search.active:
        return ActionOutcome(applied=False, status="no_pattern")
    if search.revision != buffer.revision:
        search.refresh(buffer.lines(), buffer.revision)
    remaining = action.repeat
    if search.current() is None:
        # no selected match yet: start relative to the cursor
        row, col = buffer.cursor
        search.origin = Cursor(row, col + 1) if forward else Cursor(row, col)
        search.select_first()
        if forward:
            remaining -= 1
    match = search.current()
    for _ in range(remaining):
        match = search.next() if forward else search.previous()
    if not _jump(context, match):
        return ActionOutcome(applied=False, status="not_found")
    return ActionOutcome()


def search_next(context: "ModeContext", action: Action) -> ActionOutcome:
    return _cycle(context, action, forward=True)


def search_previous(context: "ModeContext", action: Action) -> ActionOutcome:
    return _cycle(context, action, forward=False)


__all__ = [
    "search_backspace",
    "search_cancel",
    "search_input",
    "search_next",
    "search_previous",
    "search_start",
    "search_submit",
]
