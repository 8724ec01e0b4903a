"""Boundary types exchanged with the host: snapshots and collaborator protocols."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from .state import Cursor, Selection


@dataclass(frozen=True, slots=True)
class MatchRange:
    """Search match on one row, ``end`` exclusive."""

    row: int
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class HighlightSpan:
    """Styled range produced by a syntax highlighter, ``end`` exclusive."""

    start: Cursor
    end: Cursor
    style: str


@dataclass(frozen=True, slots=True)
class EditorSnapshot:
    """Read-only state the renderer queries each frame."""

    rows: tuple[tuple[tuple[str, int], ...], ...]
    cursor: Cursor
    mode: str
    selection: Optional[Selection]
    search_highlights: tuple[MatchRange, ...]
    current_match: Optional[MatchRange]
    revision: int
    scroll_offset: int
    pending_keys: tuple[str, ...] = ()
    search_pattern: Optional[str] = None

    @property
    def text(self) -> str:
        return "\n".join("".join(ch for ch, _ in row) for row in self.rows)


class ClipboardService(Protocol):
    """Host clipboard capability; any call may raise when the OS refuses."""

    def read(self) -> str:
        ...

    def write(self, text: str) -> None:
        ...


class SyntaxHighlighter(Protocol):
    """Pure function turning buffer text into ordered highlight spans."""

    def __call__(self, text: str, language: str) -> Sequence[HighlightSpan]:
        ...


__all__ = [
    "ClipboardService",
    "EditorSnapshot",
    "HighlightSpan",
    "MatchRange",
    "SyntaxHighlighter",
]
