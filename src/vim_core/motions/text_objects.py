"""Text object resolution for ``i``/``a`` selections (``ciw``, ``da(``, ``vi"``)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from vim_core.buffer.state import Cursor

from .motions import (
    BRACKET_PAIRS,
    CharClass,
    char_at,
    char_class,
    find_matching_bracket,
    step_backward,
)


class TextObjectScope(str, Enum):
    INNER = "i"
    AROUND = "a"


# key typed after i/a -> canonical delimiter
TEXT_OBJECT_DELIMITERS = {
    '"': '"',
    "'": "'",
    "(": "(",
    ")": "(",
    "b": "(",
    "[": "[",
    "]": "[",
    "{": "{",
    "}": "{",
    "B": "{",
    "w": "w",
}


@dataclass(frozen=True, slots=True)
class TextObjectRange:
    """Resolved range; ``end`` is exclusive unless ``linewise`` covers rows."""

    start: Cursor
    end: Cursor
    linewise: bool = False


def resolve_text_object(
    lines: Sequence[str],
    cursor: Cursor,
    delimiter: str,
    scope: TextObjectScope | str,
) -> Optional[TextObjectRange]:
    """Return the range of the text object under ``cursor`` or ``None``."""

    canonical = TEXT_OBJECT_DELIMITERS.get(delimiter)
    if canonical is None:
        return None
    scope = TextObjectScope(scope)
    row = max(0, min(cursor.row, len(lines) - 1))
    text = lines[row]
    col = max(0, min(cursor.col, len(text) - 1))
    cursor = Cursor(row, col)
    if canonical == "w":
        return _word_object(text, cursor, scope)
    if canonical in BRACKET_PAIRS:
        return _bracket_object(lines, cursor, canonical, scope)
    return _quote_object(text, cursor, canonical, scope)


def _word_object(text: str, cursor: Cursor, scope: TextObjectScope) -> Optional[TextObjectRange]:
    if not text:
        return None
    row, col = cursor
    start, end = _run_bounds(text, col)
    if scope is TextObjectScope.AROUND:
        if char_class(text[col]) is CharClass.WHITESPACE:
            if end < len(text):
                _, end = _run_bounds(text, end)
        elif end < len(text) and text[end].isspace():
            _, end = _run_bounds(text, end)
        elif start > 0 and text[start - 1].isspace():
            start, _ = _run_bounds(text, start - 1)
    return TextObjectRange(Cursor(row, start), Cursor(row, end))


def _run_bounds(text: str, col: int) -> tuple[int, int]:
    cls = char_class(text[col])
    start = col
    while start > 0 and char_class(text[start - 1]) is cls:
        start -= 1
    end = col + 1
    while end < len(text) and char_class(text[end]) is cls:
        end += 1
    return start, end


def _quote_object(
    text: str, cursor: Cursor, quote: str, scope: TextObjectScope
) -> Optional[TextObjectRange]:
    positions = [
        index
        for index, ch in enumerate(text)
        if ch == quote and (index == 0 or text[index - 1] != "\\")
    ]
    pairs = list(zip(positions[0::2], positions[1::2]))
    row, col = cursor
    chosen = next((pair for pair in pairs if pair[0] <= col <= pair[1]), None)
    if chosen is None:
        chosen = next((pair for pair in pairs if pair[0] > col), None)
    if chosen is None:
        return None
    open_col, close_col = chosen
    if scope is TextObjectScope.INNER:
        return TextObjectRange(Cursor(row, open_col + 1), Cursor(row, close_col))
    return TextObjectRange(Cursor(row, open_col), Cursor(row, close_col + 1))


def _enclosing_open(lines: Sequence[str], cursor: Cursor, open_ch: str) -> Optional[Cursor]:
    close_ch = BRACKET_PAIRS[open_ch]
    here = char_at(lines, cursor)
    if here == open_ch:
        return cursor
    if here == close_ch:
        return find_matching_bracket(lines, cursor)
    depth = 0
    pos = step_backward(lines, cursor)
    while pos is not None:
        ch = char_at(lines, pos)
        if ch == close_ch:
            depth += 1
        elif ch == open_ch:
            if depth == 0:
                return pos
            depth -= 1
        pos = step_backward(lines, pos)
    return None


def _bracket_object(
    lines: Sequence[str], cursor: Cursor, open_ch: str, scope: TextObjectScope
) -> Optional[TextObjectRange]:
    opening = _enclosing_open(lines, cursor, open_ch)
    closing = find_matching_bracket(lines, opening) if opening is not None else None
    if closing is None:
        text = lines[cursor.row]
        forward = text.find(open_ch, cursor.col)
        if forward < 0:
            return None
        opening = Cursor(cursor.row, forward)
        closing = find_matching_bracket(lines, opening)
        if closing is None:
            return None
    if scope is TextObjectScope.AROUND:
        return TextObjectRange(opening, Cursor(closing.row, closing.col + 1))
    opens_row = opening.col == len(lines[opening.row]) - 1
    closes_row = not lines[closing.row][: closing.col].strip()
    inner_start = Cursor(opening.row, opening.col + 1)
    if opens_row and closes_row and closing.row > opening.row:
        if closing.row - opening.row == 1:
            return TextObjectRange(inner_start, inner_start)
        return TextObjectRange(
            Cursor(opening.row + 1, 0),
            Cursor(closing.row - 1, len(lines[closing.row - 1])),
            linewise=True,
        )
    return TextObjectRange(inner_start, closing)


__all__ = [
    "TEXT_OBJECT_DELIMITERS",
    "TextObjectRange",
    "TextObjectScope",
    "resolve_text_object",
]
