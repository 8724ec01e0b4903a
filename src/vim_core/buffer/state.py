"""Cursor, selection, and change tracking state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple, Union


class Cursor(NamedTuple):
    """(row, column) pair; column is a character index."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class CharSelection:
    """Character range between the anchor and the active end, both inclusive."""

    anchor: Cursor
    active: Cursor

    def ordered(self) -> Tuple[Cursor, Cursor]:
        if self.anchor <= self.active:
            return self.anchor, self.active
        return self.active, self.anchor


@dataclass(frozen=True, slots=True)
class LineSelection:
    """Whole-row range between the anchor row and the active row."""

    anchor_row: int
    active_row: int

    @property
    def start_row(self) -> int:
        return min(self.anchor_row, self.active_row)

    @property
    def end_row(self) -> int:
        return max(self.anchor_row, self.active_row)


Selection = Union[CharSelection, LineSelection]


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + selection info tied to a TextBuffer revision."""

    cursor: Cursor = Cursor(0, 0)
    sticky_col: Optional[int] = None
    selection: Optional[Selection] = None

    def set_cursor(self, row: int, col: int, *, keep_sticky: bool = False) -> None:
        self.cursor = Cursor(row, col)
        if not keep_sticky:
            self.sticky_col = None

    def clear_selection(self) -> None:
        self.selection = None

    def set_selection(self, selection: Optional[Selection]) -> None:
        self.selection = selection


__all__ = [
    "BufferState",
    "CharSelection",
    "Cursor",
    "LineSelection",
    "Selection",
]
