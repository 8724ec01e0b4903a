"""Plain-value actions produced by the interpreter and consumed by handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from vim_core.motions.text_objects import TextObjectScope


@dataclass(frozen=True, slots=True)
class TextObject:
    delimiter: str
    scope: TextObjectScope


@dataclass(frozen=True, slots=True)
class Action:
    """One complete command, e.g. ``delete`` over the ``word_forward`` motion.

    ``count`` stays ``None`` when the user typed no count; motions such as
    ``G`` treat an explicit count differently from the implicit one.
    """

    name: str
    count: Optional[int] = None
    motion: Optional[str] = None
    text_object: Optional[TextObject] = None
    linewise: bool = False
    text: Optional[str] = None
    target_mode: Optional[str] = None

    @property
    def repeat(self) -> int:
        return self.count if self.count is not None else 1


@dataclass(frozen=True, slots=True)
class Invocation:
    """Arguments handed to a binding's handler when its keys complete."""

    count: Optional[int] = None
    keys: tuple[str, ...] = ()
    mode: str = "normal"
    motion: Optional[str] = None
    text_object: Optional[TextObject] = None
    text: Optional[str] = None


@dataclass(slots=True)
class ActionOutcome:
    applied: bool = True
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


__all__ = ["Action", "ActionOutcome", "Invocation", "TextObject"]
