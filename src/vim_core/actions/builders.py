"""Handler factories used by keymap bindings.

A binding's handler receives an ``Invocation`` and returns the ``Action`` to
execute; it never touches the buffer itself.
"""

from __future__ import annotations

from typing import Callable, Optional

from .models import Action, Invocation

ActionFactory = Callable[[Invocation], Action]


def motion_action(motion: str) -> ActionFactory:
    def build(invocation: Invocation) -> Action:
        return Action(name="move", count=invocation.count, motion=motion)

    build.__name__ = f"motion_{motion}"
    return build


def operator_action(operator: str) -> ActionFactory:
    """Operator over a motion, a text object or (doubled key) whole lines."""

    def build(invocation: Invocation) -> Action:
        return Action(
            name=operator,
            count=invocation.count,
            motion=invocation.motion,
            text_object=invocation.text_object,
            linewise=invocation.motion is None and invocation.text_object is None,
        )

    build.__name__ = f"operator_{operator}"
    return build


def command_action(
    name: str, *, text: Optional[str] = None, target_mode: Optional[str] = None
) -> ActionFactory:
    def build(invocation: Invocation) -> Action:
        return Action(
            name=name,
            count=invocation.count,
            text=text if text is not None else invocation.text,
            target_mode=target_mode,
        )

    build.__name__ = name
    return build


def text_object_action(name: str) -> ActionFactory:
    def build(invocation: Invocation) -> Action:
        return Action(name=name, count=invocation.count, text_object=invocation.text_object)

    build.__name__ = name
    return build


__all__ = [
    "ActionFactory",
    "command_action",
    "motion_action",
    "operator_action",
    "text_object_action",
]
