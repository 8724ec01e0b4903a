"""Actions dedicated to Visual mode selection management."""

from __future__ import annotations

from typing import TYPE_CHECKING, MutableMapping, cast

from vim_core.buffer import CharSelection, Cursor, LineSelection
from vim_core.config import VISUAL_MODES, Mode
from vim_core.motions import resolve_text_object

from .edit import change_range, delete_range, join_rows, replace_with_register, write_register
from .models import Action, ActionOutcome
from .ranges import selection_range

if TYPE_CHECKING:
    from vim_core.modes.base_mode import ModeContext


def visual_state(context: "ModeContext") -> MutableMapping[str, Cursor]:
    state = cast(
        MutableMapping[str, Cursor], context.extras.setdefault("visual_state", {})
    )
    if "anchor" not in state:
        state["anchor"] = context.buffer.state.cursor
    return state


def sync_selection(context: "ModeContext", mode: str | None = None) -> None:
    """Stretch the selection from the anchor to the cursor for ``mode``."""

    mode = mode or context.mode
    buffer = context.buffer
    anchor = visual_state(context)["anchor"]
    cursor = buffer.state.cursor
    if mode == Mode.VISUAL_LINE.value:
        buffer.state.set_selection(LineSelection(anchor.row, cursor.row))
    else:
        buffer.state.set_selection(CharSelection(anchor, cursor))
    context.bus.emit("visual.selection", {"anchor": anchor, "cursor": cursor})


def begin_selection(context: "ModeContext", anchor: Cursor) -> None:
    visual_state(context)["anchor"] = anchor


def end_selection(context: "ModeContext") -> None:
    state = context.extras.get("visual_state")
    if isinstance(state, dict):
        state.pop("anchor", None)
    context.buffer.state.clear_selection()


def visual_toggle(context: "ModeContext", action: Action) -> ActionOutcome:
    """``v``/``V``: enter a visual kind, switch kinds, or leave when already active."""

    target = action.target_mode or Mode.VISUAL.value
    if context.mode == target:
        return ActionOutcome(switch_to=Mode.NORMAL.value, message="exit_visual")
    return ActionOutcome(switch_to=target, message=f"enter_{target}")


def exit_visual(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    return ActionOutcome(switch_to=Mode.NORMAL.value, message="exit_visual")


def visual_swap_anchor(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    state = visual_state(context)
    anchor = state["anchor"]
    state["anchor"] = context.buffer.state.cursor
    context.buffer.set_cursor(*anchor)
    sync_selection(context)
    return ActionOutcome(message="swap_anchor")


def visual_delete(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    rng = selection_range(context.buffer)
    applied = rng is not None and delete_range(context.buffer, rng, label="visual_delete")
    return ActionOutcome(applied=applied, switch_to=Mode.NORMAL.value)


def visual_change(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    rng = selection_range(context.buffer)
    if rng is None:
        return ActionOutcome(applied=False, switch_to=Mode.NORMAL.value)
    change_range(context.buffer, rng)
    return ActionOutcome(switch_to=Mode.INSERT.value)


def visual_yank(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    buffer = context.buffer
    rng = selection_range(buffer)
    if rng is None:
        return ActionOutcome(applied=False, switch_to=Mode.NORMAL.value)
    write_register(buffer, rng)
    buffer.set_cursor(*min(visual_state(context)["anchor"], buffer.cursor))
    return ActionOutcome(switch_to=Mode.NORMAL.value, message="yank")


def visual_paste(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    rng = selection_range(context.buffer)
    applied = rng is not None and replace_with_register(context.buffer, rng)
    return ActionOutcome(applied=applied, switch_to=Mode.NORMAL.value)


def visual_join(context: "ModeContext", action: Action) -> ActionOutcome:
    del action
    rng = selection_range(context.buffer)
    if rng is None:
        return ActionOutcome(applied=False, switch_to=Mode.NORMAL.value)
    joined = join_rows(context.buffer, rng.first_row, rng.last_row - rng.first_row)
    return ActionOutcome(applied=joined, switch_to=Mode.NORMAL.value)


def visual_select_object(context: "ModeContext", action: Action) -> ActionOutcome:
    """``vi(``, ``va"``: reshape the selection to cover a text object."""

    if action.text_object is None or context.mode not in VISUAL_MODES:
        return ActionOutcome(applied=False, status="no_range")
    buffer = context.buffer
    lines = buffer.lines()
    found = resolve_text_object(
        lines, buffer.cursor, action.text_object.delimiter, action.text_object.scope
    )
    if found is None or found.start == found.end:
        return ActionOutcome(applied=False, status="no_range")
    if found.linewise:
        anchor = Cursor(found.start.row, 0)
        active = Cursor(found.end.row, max(len(lines[found.end.row]) - 1, 0))
    elif found.end.col > 0:
        anchor, active = found.start, Cursor(found.end.row, found.end.col - 1)
    else:
        anchor = found.start
        active = Cursor(found.end.row - 1, len(lines[found.end.row - 1]))
    begin_selection(context, anchor)
    buffer.state.set_cursor(*active)
    sync_selection(context)
    return ActionOutcome(message="select_object")


__all__ = [
    "begin_selection",
    "end_selection",
    "exit_visual",
    "sync_selection",
    "visual_change",
    "visual_delete",
    "visual_join",
    "visual_paste",
    "visual_select_object",
    "visual_state",
    "visual_swap_anchor",
    "visual_toggle",
    "visual_yank",
]
