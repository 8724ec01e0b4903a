"""Built-in keymaps that seed each mode with Vim's default bindings."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from vim_core.actions.builders import (
    command_action,
    motion_action,
    operator_action,
    text_object_action,
)

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

NORMAL = "normal"
INSERT = "insert"
VISUAL = "visual"
VISUAL_LINE = "visual_line"
SEARCH = "search"

# motion name -> (description, key sequences)
MOTION_KEYS: Mapping[str, tuple[str, tuple[tuple[str, ...], ...]]] = {
    "left": ("Move left", (("h",), ("LEFT",))),
    "right": ("Move right", (("l",), ("RIGHT",))),
    "up": ("Move up", (("k",), ("UP",))),
    "down": ("Move down", (("j",), ("DOWN",))),
    "line_start": ("Start of line", (("0",), ("HOME",))),
    "first_non_blank": ("First non-blank character", (("^",), ("_",))),
    "line_end": ("End of line", (("$",), ("END",))),
    "document_start": ("First line", (("g", "g"),)),
    "document_end": ("Last line", (("G",),)),
    "word_forward": ("Next word start", (("w",),)),
    "word_end": ("Word end", (("e",),)),
    "word_backward": ("Previous word start", (("b",),)),
    "match_bracket": ("Matching bracket", (("%",),)),
    "half_page_down": ("Half page down", (("ctrl+d",),)),
    "half_page_up": ("Half page up", (("ctrl+u",),)),
}

INSERT_MOTIONS = ("left", "right", "up", "down", "line_start", "line_end")


def _command(action_id: str, name: str, description: str, **kwargs: str) -> ActionRef:
    return ActionRef(
        id=action_id,
        handler=command_action(name, **kwargs),
        description=description,
        metadata={"kind": "command"},
    )


DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    *(
        ActionRef(
            id=f"motion.{motion}",
            handler=motion_action(motion),
            description=description,
            metadata={"kind": "motion"},
        )
        for motion, (description, _) in MOTION_KEYS.items()
    ),
    ActionRef(
        id="operator.delete",
        handler=operator_action("delete"),
        description="Delete over a motion or text object",
        metadata={"kind": "operator"},
    ),
    ActionRef(
        id="operator.change",
        handler=operator_action("change"),
        description="Change over a motion or text object",
        metadata={"kind": "operator"},
    ),
    ActionRef(
        id="operator.yank",
        handler=operator_action("yank"),
        description="Yank over a motion or text object",
        metadata={"kind": "operator"},
    ),
    ActionRef(
        id="text_object.inner",
        handler=text_object_action("visual_select_object"),
        description="Select inside delimiters",
        metadata={"kind": "text_object", "scope": "i"},
    ),
    ActionRef(
        id="text_object.around",
        handler=text_object_action("visual_select_object"),
        description="Select including delimiters",
        metadata={"kind": "text_object", "scope": "a"},
    ),
    _command("core.insert_before", "insert_before", "Insert before the cursor"),
    _command("core.append", "append", "Append after the cursor"),
    _command("core.insert_line_start", "insert_line_start", "Insert at first non-blank"),
    _command("core.append_line_end", "append_line_end", "Append at end of line"),
    _command("core.open_below", "open_below", "Open a line below"),
    _command("core.open_above", "open_above", "Open a line above"),
    _command("core.cancel", "cancel", "Cancel the pending command"),
    _command("edit.delete_char", "delete_char", "Delete character under cursor"),
    _command("edit.delete_to_eol", "delete_to_eol", "Delete to end of line"),
    _command("edit.change_to_eol", "change_to_eol", "Change to end of line"),
    _command("edit.join_lines", "join_lines", "Join lines"),
    _command("edit.paste_after", "paste_after", "Paste after the cursor"),
    _command("edit.paste_before", "paste_before", "Paste before the cursor"),
    _command("history.undo", "undo", "Undo"),
    _command("history.redo", "redo", "Redo"),
    _command("visual.toggle_char", "visual_toggle", "Character visual mode", target_mode=VISUAL),
    _command("visual.toggle_line", "visual_toggle", "Line visual mode", target_mode=VISUAL_LINE),
    _command("visual.exit", "exit_visual", "Leave visual mode"),
    _command("visual.swap_anchor", "visual_swap_anchor", "Swap selection anchor"),
    _command("visual.delete", "visual_delete", "Delete the selection"),
    _command("visual.change", "visual_change", "Change the selection"),
    _command("visual.yank", "visual_yank", "Yank the selection"),
    _command("visual.paste", "visual_paste", "Replace the selection with the register"),
    _command("visual.join", "visual_join", "Join the selected lines"),
    _command("insert.exit", "exit_insert", "Leave insert mode"),
    _command("insert.newline", "insert_newline", "Split the line"),
    _command("insert.backspace", "insert_backspace", "Delete backwards"),
    _command("insert.delete", "insert_delete", "Delete forwards"),
    _command(
        "insert.delete_to_line_start",
        "insert_delete_to_line_start",
        "Delete back to the first non-blank",
    ),
    _command("insert.tab", "insert_text", "Insert a tab", text="\t"),
    _command("search.start", "search_start", "Search forward"),
    _command("search.submit", "search_submit", "Jump to the first match"),
    _command("search.cancel", "search_cancel", "Abandon the search"),
    _command("search.backspace", "search_backspace", "Delete the last pattern character"),
    _command("search.next", "search_next", "Next match"),
    _command("search.previous", "search_previous", "Previous match"),
)


def _bind(mode: str, keys: Sequence[str], action_id: str, description: str = "") -> Binding:
    return Binding(
        id=f"{mode}.{action_id}[{' '.join(keys)}]",
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
        description=description,
    )


def _motion_bindings(
    mode: str, motions: Iterable[str], *, named_only: bool = False
) -> tuple[Binding, ...]:
    """Bind each motion's keys; ``named_only`` skips keys that type text."""

    return tuple(
        _bind(mode, keys, f"motion.{motion}", MOTION_KEYS[motion][0])
        for motion in motions
        for keys in MOTION_KEYS[motion][1]
        if not (named_only and len(keys[0]) == 1)
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *_motion_bindings(NORMAL, MOTION_KEYS),
    _bind(NORMAL, ("d",), "operator.delete"),
    _bind(NORMAL, ("c",), "operator.change"),
    _bind(NORMAL, ("y",), "operator.yank"),
    _bind(NORMAL, ("i",), "core.insert_before"),
    _bind(NORMAL, ("a",), "core.append"),
    _bind(NORMAL, ("I",), "core.insert_line_start"),
    _bind(NORMAL, ("A",), "core.append_line_end"),
    _bind(NORMAL, ("o",), "core.open_below"),
    _bind(NORMAL, ("O",), "core.open_above"),
    _bind(NORMAL, ("ESC",), "core.cancel"),
    _bind(NORMAL, ("x",), "edit.delete_char"),
    _bind(NORMAL, ("DELETE",), "edit.delete_char"),
    _bind(NORMAL, ("D",), "edit.delete_to_eol"),
    _bind(NORMAL, ("C",), "edit.change_to_eol"),
    _bind(NORMAL, ("J",), "edit.join_lines"),
    _bind(NORMAL, ("p",), "edit.paste_after"),
    _bind(NORMAL, ("P",), "edit.paste_before"),
    _bind(NORMAL, ("u",), "history.undo"),
    _bind(NORMAL, ("ctrl+r",), "history.redo"),
    _bind(NORMAL, ("v",), "visual.toggle_char"),
    _bind(NORMAL, ("V",), "visual.toggle_line"),
    _bind(NORMAL, ("/",), "search.start"),
    _bind(NORMAL, ("n",), "search.next"),
    _bind(NORMAL, ("N",), "search.previous"),
    *_motion_bindings(VISUAL, MOTION_KEYS),
    _bind(VISUAL, ("ESC",), "visual.exit"),
    _bind(VISUAL, ("v",), "visual.toggle_char"),
    _bind(VISUAL, ("V",), "visual.toggle_line"),
    _bind(VISUAL, ("o",), "visual.swap_anchor"),
    _bind(VISUAL, ("d",), "visual.delete"),
    _bind(VISUAL, ("x",), "visual.delete"),
    _bind(VISUAL, ("DELETE",), "visual.delete"),
    _bind(VISUAL, ("c",), "visual.change"),
    _bind(VISUAL, ("y",), "visual.yank"),
    _bind(VISUAL, ("p",), "visual.paste"),
    _bind(VISUAL, ("P",), "visual.paste"),
    _bind(VISUAL, ("J",), "visual.join"),
    _bind(VISUAL, ("i",), "text_object.inner"),
    _bind(VISUAL, ("a",), "text_object.around"),
    *_motion_bindings(INSERT, INSERT_MOTIONS, named_only=True),
    _bind(INSERT, ("ESC",), "insert.exit"),
    _bind(INSERT, ("ENTER",), "insert.newline"),
    _bind(INSERT, ("BACKSPACE",), "insert.backspace"),
    _bind(INSERT, ("DELETE",), "insert.delete"),
    _bind(INSERT, ("ctrl+u",), "insert.delete_to_line_start"),
    _bind(INSERT, ("TAB",), "insert.tab"),
    _bind(SEARCH, ("ESC",), "search.cancel"),
    _bind(SEARCH, ("ENTER",), "search.submit"),
    _bind(SEARCH, ("BACKSPACE",), "search.backspace"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode.

    Line-visual mode shares the character-visual table.
    """

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not _selected(binding.action_id, allowed_actions):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)

    registry.copy_bindings(VISUAL, VISUAL_LINE)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "MOTION_KEYS",
    "load_default_keymaps",
]
