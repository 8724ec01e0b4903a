"""Core document data structures for vim_core buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, overload

import wcwidth as _wcwidth

from .state import Cursor


def char_width(ch: str, *, tab_width: int = 4) -> int:
    """Terminal cells occupied by ``ch``; control characters count as one."""

    if ch == "\t":
        return tab_width
    width = _wcwidth.wcwidth(ch)
    if width < 0:
        return 1
    return width


@dataclass(frozen=True, slots=True)
class Row:
    """One line of text plus the cached display width of each character.

    Rows are immutable values, so the buffer and the undo history can share
    them without copying.
    """

    text: str = ""
    widths: tuple[int, ...] = ()

    @classmethod
    def from_text(cls, text: str, *, tab_width: int = 4) -> "Row":
        return cls(
            text=text,
            widths=tuple(char_width(ch, tab_width=tab_width) for ch in text),
        )

    def __len__(self) -> int:
        return len(self.text)

    @property
    def display_width(self) -> int:
        return sum(self.widths)

    def cells(self) -> tuple[tuple[str, int], ...]:
        return tuple(zip(self.text, self.widths))


class LinesView(Sequence[str]):
    """Read-only ``Sequence[str]`` over the buffer rows, used by motions."""

    __slots__ = ("_rows",)

    def __init__(self, rows: Sequence[Row]) -> None:
        self._rows = rows

    def __len__(self) -> int:
        return len(self._rows)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[str]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(row.text for row in self._rows[index])
        return self._rows[index].text

    def __iter__(self) -> Iterator[str]:
        return (row.text for row in self._rows)


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


class TextBuffer:
    """Jagged list-of-rows text storage.

    Every operation is total: rows and columns are clamped to the nearest
    valid position instead of raising. At least one row always exists and
    ``revision`` increases on every mutation.
    """

    def __init__(self, rows: Iterable[Row] | None = None, *, tab_width: int = 4) -> None:
        self._rows: List[Row] = list(rows or ())
        if not self._rows:
            self._rows.append(Row())
        self.tab_width = tab_width
        self.revision = 0

    @classmethod
    def from_text(cls, text: str, *, tab_width: int = 4) -> "TextBuffer":
        lines = _normalize_newlines(text).split("\n")
        return cls(
            (Row.from_text(line, tab_width=tab_width) for line in lines),
            tab_width=tab_width,
        )

    def _row(self, text: str) -> Row:
        return Row.from_text(text, tab_width=self.tab_width)

    def _touch(self) -> None:
        self.revision += 1

    # -- queries -------------------------------------------------------

    @property
    def line_count(self) -> int:
        return len(self._rows)

    def row_count(self) -> int:
        return len(self._rows)

    def get_row(self, index: int) -> Row:
        return self._rows[self.clamp_row(index)]

    def get_line(self, index: int) -> str:
        return self._rows[self.clamp_row(index)].text

    def row_length(self, index: int) -> int:
        return len(self._rows[self.clamp_row(index)])

    def lines(self) -> LinesView:
        return LinesView(self._rows)

    def snapshot(self) -> tuple[Row, ...]:
        """Return the current rows without exposing internal mutability."""

        return tuple(self._rows)

    def text(self) -> str:
        return "\n".join(row.text for row in self._rows)

    def is_empty(self) -> bool:
        return len(self._rows) == 1 and not self._rows[0].text

    def clamp_row(self, row: int) -> int:
        return max(0, min(row, len(self._rows) - 1))

    def clamp(self, row: int, col: int) -> Cursor:
        row = self.clamp_row(row)
        return Cursor(row, max(0, min(col, len(self._rows[row]))))

    def text_range(self, start: Cursor, end: Cursor) -> str:
        """Text between two positions, ``end`` exclusive, row breaks as ``\\n``."""

        start, end = self._ordered(start, end)
        if start.row == end.row:
            return self._rows[start.row].text[start.col : end.col]
        parts = [self._rows[start.row].text[start.col :]]
        parts.extend(row.text for row in self._rows[start.row + 1 : end.row])
        parts.append(self._rows[end.row].text[: end.col])
        return "\n".join(parts)

    # -- mutations -----------------------------------------------------

    def insert_char(self, pos: Cursor, ch: str) -> Cursor:
        if ch in ("\n", "\r"):
            return self.split_row(pos)
        return self.insert_text(pos, ch)

    def insert_text(self, pos: Cursor, text: str) -> Cursor:
        """Insert ``text`` at ``pos``; returns the position just after it."""

        row, col = self.clamp(*pos)
        if not text:
            return Cursor(row, col)
        current = self._rows[row].text
        head, tail = current[:col], current[col:]
        parts = _normalize_newlines(text).split("\n")
        if len(parts) == 1:
            self._rows[row] = self._row(head + parts[0] + tail)
            self._touch()
            return Cursor(row, col + len(parts[0]))
        new_rows = [self._row(head + parts[0])]
        new_rows.extend(self._row(part) for part in parts[1:-1])
        new_rows.append(self._row(parts[-1] + tail))
        self._rows[row : row + 1] = new_rows
        self._touch()
        return Cursor(row + len(parts) - 1, len(parts[-1]))

    def split_row(self, pos: Cursor) -> Cursor:
        row, col = self.clamp(*pos)
        current = self._rows[row].text
        self._rows[row : row + 1] = [self._row(current[:col]), self._row(current[col:])]
        self._touch()
        return Cursor(row + 1, 0)

    def delete_range(self, start: Cursor, end: Cursor) -> str:
        """Remove ``[start, end)`` and return the removed text."""

        start, end = self._ordered(start, end)
        if start == end:
            return ""
        removed = self.text_range(start, end)
        head = self._rows[start.row].text[: start.col]
        tail = self._rows[end.row].text[end.col :]
        self._rows[start.row : end.row + 1] = [self._row(head + tail)]
        self._touch()
        return removed

    def join_rows(self, row: int) -> Cursor | None:
        """Join ``row`` with the next row (``J``); ``None`` when there is none."""

        row = self.clamp_row(row)
        if row >= len(self._rows) - 1:
            return None
        left = self._rows[row].text
        right = self._rows[row + 1].text.lstrip(" \t")
        if left and right:
            joined, col = f"{left} {right}", len(left)
        elif left:
            joined, col = left, len(left)
        else:
            joined, col = right, 0
        self._rows[row : row + 2] = [self._row(joined)]
        self._touch()
        return Cursor(row, col)

    def insert_rows(self, row: int, contents: Iterable[str]) -> int:
        """Insert whole rows before ``row`` (``row == line_count`` appends)."""

        row = max(0, min(row, len(self._rows)))
        new_rows = [
            self._row(line)
            for content in contents
            for line in _normalize_newlines(content).split("\n")
        ]
        if not new_rows:
            return 0
        self._rows[row:row] = new_rows
        self._touch()
        return len(new_rows)

    def delete_rows(self, start: int, end: int) -> List[str]:
        """Remove rows ``start..end`` inclusive, always leaving one row behind."""

        start, end = sorted((self.clamp_row(start), self.clamp_row(end)))
        removed = [row.text for row in self._rows[start : end + 1]]
        del self._rows[start : end + 1]
        if not self._rows:
            self._rows.append(Row())
        self._touch()
        return removed

    def replace_rows(self, start: int, stop: int, rows: Sequence[Row]) -> None:
        """Splice prepared rows over ``[start, stop)``; used by undo/redo."""

        self._rows[start:stop] = list(rows)
        if not self._rows:
            self._rows.append(Row())
        self._touch()

    def _ordered(self, start: Cursor, end: Cursor) -> tuple[Cursor, Cursor]:
        start = self.clamp(*start)
        end = self.clamp(*end)
        if end < start:
            start, end = end, start
        return start, end


__all__ = ["LinesView", "Row", "TextBuffer", "char_width"]
