"""Clamping helpers shared across buffer services."""

from __future__ import annotations

from typing import Sequence


def first_non_blank(text: str) -> int:
    for index, ch in enumerate(text):
        if not ch.isspace():
            return index
    return max(len(text) - 1, 0)


def last_column(lines: Sequence[str], row: int, *, allow_append: bool) -> int:
    length = len(lines[row])
    return length if allow_append else max(length - 1, 0)


__all__ = [
    "first_non_blank",
    "last_column",
]
