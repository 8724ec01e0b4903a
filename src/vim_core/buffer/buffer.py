"""High-level buffer façade combining document, state, register, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from vim_core.runtime import telemetry

from .document import LinesView, Row, TextBuffer
from .registers import InternalRegister, Register
from .state import BufferState, Cursor
from .undo import UndoEntry, UndoTimeline, diff_rows


@dataclass(slots=True)
class _UndoGroup:
    label: str
    rows: tuple[Row, ...]
    cursor: Cursor


class Buffer:
    """Owns the text, cursor state, register and history of one session."""

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[TextBuffer] = None,
        state: Optional[BufferState] = None,
        register: Optional[Register] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or TextBuffer()
        self.state = state or BufferState()
        self.register: Register = register or InternalRegister()
        self.undo_timeline = undo or UndoTimeline()
        self._group: Optional[_UndoGroup] = None

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        tab_width: int = 4,
        undo_limit: int = 100,
        register: Optional[Register] = None,
    ) -> "Buffer":
        return cls(
            name=name,
            document=TextBuffer.from_text(text, tab_width=tab_width),
            register=register,
            undo=UndoTimeline(limit=undo_limit),
        )

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def revision(self) -> int:
        return self.document.revision

    def lines(self) -> LinesView:
        return self.document.lines()

    def text(self) -> str:
        return self.document.text()

    def set_cursor(self, row: int, col: int, *, keep_sticky: bool = False) -> Cursor:
        target = self.document.clamp(row, col)
        self.state.set_cursor(*target, keep_sticky=keep_sticky)
        return target

    def transaction(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def get_text_range(self, start: Cursor, end: Cursor) -> str:
        return self.document.text_range(start, end)

    # -- history -------------------------------------------------------

    @property
    def in_undo_group(self) -> bool:
        return self._group is not None

    def begin_undo_group(self, label: str) -> None:
        """Coalesce every following transaction into one undo step.

        Opening a group while one is already open keeps the outer group.
        """

        if self._group is not None:
            return
        self._group = _UndoGroup(
            label=label, rows=self.document.snapshot(), cursor=self.state.cursor
        )

    def end_undo_group(self) -> None:
        group, self._group = self._group, None
        if group is None:
            return
        self._record(group.label, group.rows, group.cursor)

    def undo(self) -> bool:
        self.end_undo_group()
        with telemetry.span(
            "buffer::undo", component="history", metadata={"buffer": self.name}
        ) as handle:
            entry = self.undo_timeline.undo()
            if entry is None:
                handle.add_metadata("status", "empty")
                return False
            handle.add_metadata("label", entry.label)
            self.document.replace_rows(
                entry.start_row, entry.start_row + len(entry.after), entry.before
            )
            self.set_cursor(*entry.cursor_before)
            return True

    def redo(self) -> bool:
        self.end_undo_group()
        with telemetry.span(
            "buffer::redo", component="history", metadata={"buffer": self.name}
        ) as handle:
            entry = self.undo_timeline.redo()
            if entry is None:
                handle.add_metadata("status", "empty")
                return False
            handle.add_metadata("label", entry.label)
            self.document.replace_rows(
                entry.start_row, entry.start_row + len(entry.before), entry.after
            )
            self.set_cursor(*entry.cursor_after)
            return True

    def _record(self, label: str, before: tuple[Row, ...], cursor_before: Cursor) -> bool:
        delta = diff_rows(before, self.document.snapshot())
        if delta is None:
            return False
        start_row, old_rows, new_rows = delta
        self.undo_timeline.push(
            UndoEntry(
                label=label,
                start_row=start_row,
                before=old_rows,
                after=new_rows,
                cursor_before=cursor_before,
                cursor_after=self.state.cursor,
            )
        )
        return True


class Transaction(AbstractContextManager["Transaction"]):
    """Groups buffer mutations into one undo entry, rolled back on error."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.changed = False
        self._span_cm: Optional[ContextManager[object]] = None
        self._rows: tuple[Row, ...] = ()
        self._cursor: Cursor = buffer.state.cursor

    def __enter__(self) -> "Transaction":
        self._rows = self.buffer.document.snapshot()
        self._cursor = self.buffer.state.cursor
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is not None:
                self._rollback()
            elif not self.buffer.in_undo_group:
                self.changed = self.buffer._record(self.label, self._rows, self._cursor)
            else:
                self.changed = self.buffer.document.snapshot() != self._rows
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False

    def _rollback(self) -> None:
        document = self.buffer.document
        document.replace_rows(0, document.line_count, self._rows)
        self.buffer.state.set_cursor(*self._cursor)


__all__ = ["Buffer", "Transaction"]
