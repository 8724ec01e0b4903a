"""Name -> handler dispatch for actions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Mapping, Optional

from vim_core.runtime import telemetry

from . import core, edit, insert, search, visual
from .models import Action, ActionOutcome
from .motion import move

if TYPE_CHECKING:
    from vim_core.modes.base_mode import ModeContext

ActionHandler = Callable[["ModeContext", Action], ActionOutcome]


_ACTION_HANDLERS: Dict[str, ActionHandler] = {
    "move": move,
    "delete": edit.delete,
    "change": edit.change,
    "yank": edit.yank,
    "delete_char": edit.delete_char,
    "delete_to_eol": edit.delete_to_eol,
    "change_to_eol": edit.change_to_eol,
    "join_lines": edit.join_lines,
    "paste_after": edit.paste_after,
    "paste_before": edit.paste_before,
    "insert_before": core.insert_before,
    "append": core.append,
    "insert_line_start": core.insert_line_start,
    "append_line_end": core.append_line_end,
    "open_below": core.open_below,
    "open_above": core.open_above,
    "cancel": core.cancel,
    "undo": core.undo,
    "redo": core.redo,
    "visual_toggle": visual.visual_toggle,
    "exit_visual": visual.exit_visual,
    "visual_swap_anchor": visual.visual_swap_anchor,
    "visual_delete": visual.visual_delete,
    "visual_change": visual.visual_change,
    "visual_yank": visual.visual_yank,
    "visual_paste": visual.visual_paste,
    "visual_join": visual.visual_join,
    "visual_select_object": visual.visual_select_object,
    "insert_text": insert.insert_text,
    "insert_newline": insert.insert_newline,
    "insert_backspace": insert.insert_backspace,
    "insert_delete": insert.insert_delete,
    "insert_delete_to_line_start": insert.insert_delete_to_line_start,
    "exit_insert": insert.exit_insert,
    "search_start": search.search_start,
    "search_input": search.search_input,
    "search_backspace": search.search_backspace,
    "search_submit": search.search_submit,
    "search_cancel": search.search_cancel,
    "search_next": search.search_next,
    "search_previous": search.search_previous,
}


class ActionExecutor:
    """Applies actions to the buffer, cursor, register and search state."""

    def __init__(
        self,
        context: "ModeContext",
        *,
        handlers: Optional[Mapping[str, ActionHandler]] = None,
    ) -> None:
        self.context = context
        self._handlers: Dict[str, ActionHandler] = dict(_ACTION_HANDLERS)
        if handlers:
            self._handlers.update(handlers)

    def register(self, name: str, handler: ActionHandler, *, replace: bool = False) -> None:
        if not replace and name in self._handlers:
            raise ValueError(f"Action handler '{name}' already registered")
        self._handlers[name] = handler

    def handles(self, name: str) -> bool:
        return name in self._handlers

    def execute(self, action: Action) -> ActionOutcome:
        handler = self._handlers.get(action.name)
        if handler is None:
            raise KeyError(f"No handler registered for action '{action.name}'")
        with telemetry.span(
            f"action::{action.name}",
            component="actions",
            metadata={"mode": self.context.mode, "count": action.repeat},
        ) as handle:
            outcome = handler(self.context, action)
            handle.add_metadata("applied", outcome.applied)
            if outcome.switch_to:
                handle.add_metadata("switch_to", outcome.switch_to)
        return outcome


__all__ = ["ActionExecutor", "ActionHandler"]
