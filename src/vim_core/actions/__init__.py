"""Action values, keymap handler factories and their executors."""

from .builders import command_action, motion_action, operator_action, text_object_action
from .models import Action, ActionOutcome, Invocation, TextObject

__all__ = [
    "Action",
    "ActionOutcome",
    "Invocation",
    "TextObject",
    "command_action",
    "motion_action",
    "operator_action",
    "text_object_action",
]
