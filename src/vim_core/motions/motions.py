"""Vim motion functions.

Motions compute cursor destinations without modifying text. They serve both
plain navigation and operator targets (``dw``, ``y$``, ``c%``). Each motion is
a pure function of the rows, the cursor, a count and a ``MotionContext``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence

from vim_core.buffer.state import Cursor
from vim_core.buffer.validation import first_non_blank, last_column


class MotionType(str, Enum):
    EXCLUSIVE = "exclusive"
    INCLUSIVE = "inclusive"
    LINEWISE = "linewise"


@dataclass(frozen=True, slots=True)
class MotionContext:
    sticky_col: Optional[int] = None
    viewport_height: int = 24
    allow_append: bool = False
    explicit_count: bool = False


@dataclass(frozen=True, slots=True)
class MotionResult:
    """Result of a motion computation."""

    position: Cursor
    type: MotionType = MotionType.EXCLUSIVE
    failed: bool = False
    keep_sticky: bool = False


Lines = Sequence[str]
MotionFunc = Callable[[Lines, Cursor, int, MotionContext], MotionResult]


class CharClass(int, Enum):
    WHITESPACE = 0
    WORD = 1
    PUNCTUATION = 2


def char_class(ch: str) -> CharClass:
    if not ch or ch.isspace():
        return CharClass.WHITESPACE
    if ch.isalnum() or ch == "_":
        return CharClass.WORD
    return CharClass.PUNCTUATION


# -- character stream helpers ------------------------------------------
#
# Rows are walked as one stream in which every row except the last ends in a
# virtual "\n" at column len(row). An empty last row still exposes column 0.


def char_at(lines: Lines, pos: Cursor) -> str:
    text = lines[pos.row]
    return text[pos.col] if pos.col < len(text) else "\n"


def step_forward(lines: Lines, pos: Cursor) -> Optional[Cursor]:
    text = lines[pos.row]
    last_row = len(lines) - 1
    limit = len(text) if pos.row < last_row else max(len(text) - 1, 0)
    if pos.col < limit:
        return Cursor(pos.row, pos.col + 1)
    if pos.row < last_row:
        return Cursor(pos.row + 1, 0)
    return None


def step_backward(lines: Lines, pos: Cursor) -> Optional[Cursor]:
    if pos.col > 0:
        return Cursor(pos.row, min(pos.col, len(lines[pos.row])) - 1)
    if pos.row > 0:
        return Cursor(pos.row - 1, len(lines[pos.row - 1]))
    return None


def _is_empty_row_stop(lines: Lines, pos: Cursor) -> bool:
    return not lines[pos.row] and pos.col == 0


def _clamp(lines: Lines, row: int, col: int, allow_append: bool) -> Cursor:
    row = max(0, min(row, len(lines) - 1))
    return Cursor(row, max(0, min(col, last_column(lines, row, allow_append=allow_append))))


# -- h / j / k / l -----------------------------------------------------


def motion_left(lines: Lines, cursor: Cursor, count: int, ctx: MotionContext) -> MotionResult:
    """Move cursor left (h motion)."""
    col = min(cursor.col, last_column(lines, cursor.row, allow_append=ctx.allow_append))
    target = Cursor(cursor.row, max(0, col - count))
    return MotionResult(position=target, failed=target.col == col == 0)


def motion_right(lines: Lines, cursor: Cursor, count: int, ctx: MotionContext) -> MotionResult:
    """Move cursor right (l motion)."""
    limit = last_column(lines, cursor.row, allow_append=ctx.allow_append)
    target = Cursor(cursor.row, max(0, min(cursor.col + count, limit)))
    return MotionResult(position=target, failed=target == cursor)


def _vertical(lines: Lines, cursor: Cursor, delta: int, ctx: MotionContext) -> MotionResult:
    row = max(0, min(cursor.row + delta, len(lines) - 1))
    wanted = ctx.sticky_col if ctx.sticky_col is not None else cursor.col
    target = _clamp(lines, row, wanted, ctx.allow_append)
    return MotionResult(
        position=target,
        type=MotionType.LINEWISE,
        failed=row == cursor.row,
        keep_sticky=True,
    )


def motion_up(lines: Lines, cursor: Cursor, count: int, ctx: MotionContext) -> MotionResult:
    """Move cursor up (k motion), honouring the sticky column."""
    return _vertical(lines, cursor, -count, ctx)


def motion_down(lines: Lines, cursor: Cursor, count: int, ctx: MotionContext) -> MotionResult:
    """Move cursor down (j motion), honouring the sticky column."""
    return _vertical(lines, cursor, count, ctx)


# -- line positions ------------------------------------------------------


def motion_line_start(lines: Lines, cursor: Cursor, count: int, ctx: MotionContext) -> MotionResult:
    """Move to start of line (0 motion)."""
    return MotionResult(position=Cursor(cursor.row, 0))


def motion_first_non_blank(
    lines: Lines, cursor: Cursor, count: int, ctx: MotionContext
) -> MotionResult:
    """Move to first non-blank character (^ and _ motions)."""
    return MotionResult(position=Cursor(cursor.row, first_non_blank(lines[cursor.row])))


def motion_line_end(lines: Lines, cursor: Cursor, count: int, ctx: MotionContext) -> MotionResult:
    """Move to end of line ($ motion); a count moves ``count - 1`` rows down."""
    row = max(0, min(cursor.row + count - 1, len(lines) - 1))
    col = max(len(lines[row]) - 1, 0)
    return MotionResult(position=Cursor(row, col), type=MotionType.INCLUSIVE)


def motion_document_start(
    lines: Lines, cursor: Cursor, count: int, ctx: MotionContext
) -> MotionResult:
    """Move to the first row (gg), or to row ``count`` when one is given."""
    row = count - 1 if ctx.explicit_count else 0
    row = max(0, min(row, len(lines) - 1))
    return MotionResult(
        position=Cursor(row, first_non_blank(lines[row])), type=MotionType.LINEWISE
    )


def motion_document_end(
    lines: Lines, cursor: Cursor, count: int, ctx: MotionContext
) -> MotionResult:
    """Move to the last row (G), or to row ``count`` when one is given."""
    row = count - 1 if ctx.explicit_count else len(lines) - 1
    row = max(0, min(row, len(lines) - 1))
    return MotionResult(
        position=Cursor(row, first_non_blank(lines[row])), type=MotionType.LINEWISE
    )


def _half_page(lines: Lines, cursor: Cursor, count: int, ctx: MotionContext, sign: int) -> MotionResult:
    step = max(1, ctx.viewport_height // 2) * count
    row = max(0, min(cursor.row + sign * step, len(lines) - 1))
    return MotionResult(
        position=Cursor(row, first_non_blank(lines[row])),
        type=MotionType.LINEWISE,
        failed=row == cursor.row,
    )


def motion_half_page_down(
    lines: Lines, cursor: Cursor, count: int, ctx: MotionContext
) -> MotionResult:
    """Scroll half a viewport down (ctrl+d)."""
    return _half_page(lines, cursor, count, ctx, 1)


def motion_half_page_up(
    lines: Lines, cursor: Cursor, count: int, ctx: MotionContext
) -> MotionResult:
    """Scroll half a viewport up (ctrl+u)."""
    return _half_page(lines, cursor, count, ctx, -1)


# -- word motions ------------------------------------------------------


def _word_forward_once(lines: Lines, start: Cursor) -> Optional[Cursor]:
    pos: Optional[Cursor] = start
    cls = char_class(char_at(lines, start))
    if cls is not CharClass.WHITESPACE:
        while pos is not None and char_at(lines, pos) != "\n" and char_class(
            char_at(lines, pos)
        ) is cls:
            pos = step_forward(lines, pos)
    while pos is not None:
        if pos != start and _is_empty_row_stop(lines, pos):
            return pos
        if char_class(char_at(lines, pos)) is not CharClass.WHITESPACE:
            return pos
        pos = step_forward(lines, pos)
    return None


def motion_word_forward(
    lines: Lines, cursor: Cursor, count: int, ctx: MotionContext
) -> MotionResult:
    """Move to the start of the next word (w motion).

    Running off the end of the buffer lands after the last character, which
    normal mode clamps back onto it, so ``w`` at the end is a no-op.
    """
    pos = _clamp(lines, cursor.row, cursor.col, True)
    for _ in range(count):
        nxt = _word_forward_once(lines, pos)
        if nxt is None:
            last = len(lines) - 1
            pos = Cursor(last, len(lines[last]))
            break
        pos = nxt
    return MotionResult(position=pos, failed=pos == cursor)


def _word_end_once(lines: Lines, start: Cursor) -> Optional[Cursor]:
    pos = step_forward(lines, start)
    while pos is not None and char_class(char_at(lines, pos)) is CharClass.WHITESPACE:
        pos = step_forward(lines, pos)
    if pos is None:
        return None
    cls = char_class(char_at(lines, pos))
    while True:
        nxt = step_forward(lines, pos)
        if nxt is None or char_at(lines, nxt) == "\n" or char_class(char_at(lines, nxt)) is not cls:
            return pos
        pos = nxt


def motion_word_end(lines: Lines, cursor: Cursor, count: int, ctx: MotionContext) -> MotionResult:
    """Move to the end of the current or next word (e motion)."""
    pos = _clamp(lines, cursor.row, cursor.col, False)
    for _ in range(count):
        nxt = _word_end_once(lines, pos)
        if nxt is None:
            break
        pos = nxt
    return MotionResult(position=pos, type=MotionType.INCLUSIVE, failed=pos == cursor)


def _word_backward_once(lines: Lines, start: Cursor) -> Optional[Cursor]:
    pos = step_backward(lines, start)
    if pos is None:
        return None
    while char_class(char_at(lines, pos)) is CharClass.WHITESPACE:
        if _is_empty_row_stop(lines, pos):
            return pos
        prev = step_backward(lines, pos)
        if prev is None:
            return pos
        pos = prev
    cls = char_class(char_at(lines, pos))
    while True:
        prev = step_backward(lines, pos)
        if prev is None or char_at(lines, prev) == "\n" or char_class(char_at(lines, prev)) is not cls:
            return pos
        pos = prev


def motion_word_backward(
    lines: Lines, cursor: Cursor, count: int, ctx: MotionContext
) -> MotionResult:
    """Move to the start of the current or previous word (b motion)."""
    pos = _clamp(lines, cursor.row, cursor.col, ctx.allow_append)
    for _ in range(count):
        prev = _word_backward_once(lines, pos)
        if prev is None:
            break
        pos = prev
    return MotionResult(position=pos, failed=pos == cursor)


# -- bracket matching ----------------------------------------------------

BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
_CLOSING = {close: open_ for open_, close in BRACKET_PAIRS.items()}


def find_matching_bracket(lines: Lines, pos: Cursor) -> Optional[Cursor]:
    """Partner of the bracket at ``pos``, tracking depth of that pair type only."""

    ch = char_at(lines, pos)
    if ch in BRACKET_PAIRS:
        same, other, step = ch, BRACKET_PAIRS[ch], step_forward
    elif ch in _CLOSING:
        same, other, step = ch, _CLOSING[ch], step_backward
    else:
        return None
    depth = 0
    current: Optional[Cursor] = step(lines, pos)
    while current is not None:
        found = char_at(lines, current)
        if found == same:
            depth += 1
        elif found == other:
            if depth == 0:
                return current
            depth -= 1
        current = step(lines, current)
    return None


def motion_match_bracket(
    lines: Lines, cursor: Cursor, count: int, ctx: MotionContext
) -> MotionResult:
    """Jump to the matching bracket (% motion); no match leaves the cursor alone."""
    text = lines[cursor.row]
    for col in range(cursor.col, len(text)):
        if text[col] in BRACKET_PAIRS or text[col] in _CLOSING:
            target = find_matching_bracket(lines, Cursor(cursor.row, col))
            if target is None:
                break
            return MotionResult(position=target, type=MotionType.INCLUSIVE)
    return MotionResult(position=cursor, type=MotionType.INCLUSIVE, failed=True)


MOTIONS: Dict[str, MotionFunc] = {
    "left": motion_left,
    "right": motion_right,
    "up": motion_up,
    "down": motion_down,
    "line_start": motion_line_start,
    "first_non_blank": motion_first_non_blank,
    "line_end": motion_line_end,
    "document_start": motion_document_start,
    "document_end": motion_document_end,
    "half_page_down": motion_half_page_down,
    "half_page_up": motion_half_page_up,
    "word_forward": motion_word_forward,
    "word_end": motion_word_end,
    "word_backward": motion_word_backward,
    "match_bracket": motion_match_bracket,
}


def get_motion(name: str) -> MotionFunc | None:
    return MOTIONS.get(name)


__all__ = [
    "BRACKET_PAIRS",
    "CharClass",
    "MOTIONS",
    "MotionContext",
    "MotionFunc",
    "MotionResult",
    "MotionType",
    "char_at",
    "char_class",
    "find_matching_bracket",
    "get_motion",
    "step_backward",
    "step_forward",
]
