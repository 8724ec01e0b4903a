"""Literal, case-sensitive buffer search."""

from __future__ import annotations

from typing import List, Optional, Sequence

from vim_core.buffer.state import Cursor
from vim_core.buffer.sync import MatchRange
from vim_core.runtime import telemetry


def find_matches(lines: Sequence[str], pattern: str) -> List[MatchRange]:
    """Non-overlapping occurrences of ``pattern`` in row-major order."""

    if not pattern:
        return []
    matches: List[MatchRange] = []
    width = len(pattern)
    for row, text in enumerate(lines):
        start = text.find(pattern)
        while start >= 0:
            matches.append(MatchRange(row=row, start=start, end=start + width))
            start = text.find(pattern, start + width)
    return matches


class SearchEngine:
    """Holds the pattern, its matches and the selected match.

    The engine never moves the cursor; callers jump to ``current()``.
    """

    def __init__(self) -> None:
        self.pattern = ""
        self.matches: List[MatchRange] = []
        self.index: Optional[int] = None
        self.origin = Cursor(0, 0)
        self.revision: Optional[int] = None

    @property
    def active(self) -> bool:
        return bool(self.pattern)

    def begin(self, origin: Cursor) -> None:
        """Start a new search from ``origin`` with an empty pattern."""

        self.clear()
        self.origin = origin

    def set_pattern(self, pattern: str, lines: Sequence[str], revision: Optional[int] = None) -> None:
        self.pattern = pattern
        self.refresh(lines, revision)

    def push_char(self, text: str, lines: Sequence[str], revision: Optional[int] = None) -> None:
        self.set_pattern(self.pattern + text, lines, revision)

    def pop_char(self, lines: Sequence[str], revision: Optional[int] = None) -> None:
        self.set_pattern(self.pattern[:-1], lines, revision)

    def refresh(self, lines: Sequence[str], revision: Optional[int] = None) -> None:
        with telemetry.span(
            "search::refresh",
            component="search",
            metadata={"pattern": self.pattern},
        ) as handle:
            self.matches = find_matches(lines, self.pattern)
            self.revision = revision
            if self.index is not None and self.index >= len(self.matches):
                self.index = len(self.matches) - 1 if self.matches else None
            handle.add_metadata("matches", len(self.matches))

    def clear(self) -> None:
        self.pattern = ""
        self.matches = []
        self.index = None
        self.revision = None

    def select_first(self) -> Optional[MatchRange]:
        """Select the first match at or after ``origin``, wrapping to the top."""

        if not self.matches:
            self.index = None
            return None
        for index, match in enumerate(self.matches):
            if (match.row, match.start) >= tuple(self.origin):
                self.index = index
                return match
        self.index = 0
        return self.matches[0]

    def next(self) -> Optional[MatchRange]:
        if not self.matches:
            return None
        if self.index is None:
            return self.select_first()
        self.index = (self.index + 1) % len(self.matches)
        return self.matches[self.index]

    def previous(self) -> Optional[MatchRange]:
        if not self.matches:
            return None
        if self.index is None:
            return self.select_first()
        self.index = (self.index - 1) % len(self.matches)
        return self.matches[self.index]

    def current(self) -> Optional[MatchRange]:
        if self.index is None or self.index >= len(self.matches):
            return None
        return self.matches[self.index]

    def highlights(self) -> tuple[MatchRange, ...]:
        return tuple(self.matches)


__all__ = ["SearchEngine", "find_matches"]
