"""Undo/redo stacks of minimal row-slice deltas."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Sequence

from .document import Row
from .state import Cursor


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """Reversible delta: rows ``start_row`` onwards went from ``before`` to ``after``."""

    label: str
    start_row: int
    before: tuple[Row, ...]
    after: tuple[Row, ...]
    cursor_before: Cursor
    cursor_after: Cursor


def diff_rows(
    before: Sequence[Row], after: Sequence[Row]
) -> Optional[tuple[int, tuple[Row, ...], tuple[Row, ...]]]:
    """Return ``(start, old_slice, new_slice)`` for the changed rows, or ``None``."""

    limit = min(len(before), len(after))
    prefix = 0
    while prefix < limit and (
        before[prefix] is after[prefix] or before[prefix] == after[prefix]
    ):
        prefix += 1
    if prefix == len(before) == len(after):
        return None
    suffix = 0
    while (
        suffix < limit - prefix
        and (
            before[-1 - suffix] is after[-1 - suffix]
            or before[-1 - suffix] == after[-1 - suffix]
        )
    ):
        suffix += 1
    return (
        prefix,
        tuple(before[prefix : len(before) - suffix]),
        tuple(after[prefix : len(after) - suffix]),
    )


class UndoTimeline:
    """Linear undo/redo stacks bounded by ``limit`` entries."""

    def __init__(self, *, limit: int = 100) -> None:
        self.limit = limit
        self._undo: Deque[UndoEntry] = deque(maxlen=limit)
        self._redo: List[UndoEntry] = []

    def push(self, entry: UndoEntry) -> None:
        self._undo.append(entry)
        self._redo.clear()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self) -> Optional[UndoEntry]:
        if not self._undo:
            return None
        entry = self._undo.pop()
        self._redo.append(entry)
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self._redo:
            return None
        entry = self._redo.pop()
        self._undo.append(entry)
        return entry

    @property
    def depth(self) -> tuple[int, int]:
        return len(self._undo), len(self._redo)


__all__ = ["UndoEntry", "UndoTimeline", "diff_rows"]
