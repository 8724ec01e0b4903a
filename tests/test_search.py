from __future__ import annotations

from vim_core.buffer import Cursor, MatchRange
from vim_core.search import SearchEngine, find_matches


def make_engine(lines: list[str], pattern: str, origin: tuple[int, int] = (0, 0)) -> SearchEngine:
    engine = SearchEngine()
    engine.begin(Cursor(*origin))
    engine.set_pattern(pattern, lines, revision=1)
    return engine


def test_find_matches_literal_and_case_sensitive() -> None:
    lines = ["a.b A.B a.b", "xa.b"]

    assert find_matches(lines, "a.b") == [
        MatchRange(0, 0, 3),
        MatchRange(0, 8, 11),
        MatchRange(1, 1, 4),
    ]
    assert find_matches(lines, "") == []


def test_find_matches_non_overlapping() -> None:
    assert find_matches(["aaaa"], "aa") == [MatchRange(0, 0, 2), MatchRange(0, 2, 4)]


def test_select_first_from_origin_wraps() -> None:
    lines = ["foo", "bar foo", "foo"]

    engine = make_engine(lines, "foo", origin=(1, 1))
    assert engine.select_first() == MatchRange(1, 4, 7)

    late = make_engine(lines, "foo", origin=(2, 1))
    assert late.select_first() == MatchRange(0, 0, 3)


def test_next_and_previous_wrap() -> None:
    engine = make_engine(["x x", "x"], "x")
    engine.select_first()

    assert engine.next() == MatchRange(0, 2, 3)
    assert engine.next() == MatchRange(1, 0, 1)
    assert engine.next() == MatchRange(0, 0, 1)
    assert engine.previous() == MatchRange(1, 0, 1)


def test_push_and_pop_refresh_matches() -> None:
    lines = ["cat car cab"]
    engine = SearchEngine()
    engine.begin(Cursor(0, 0))

    engine.push_char("c", lines)
    engine.push_char("a", lines)
    assert len(engine.highlights()) == 3
    engine.push_char("r", lines)
    assert engine.highlights() == (MatchRange(0, 4, 7),)
    engine.pop_char(lines)
    assert engine.pattern == "ca"
    assert len(engine.matches) == 3


def test_clear_drops_pattern_and_matches() -> None:
    engine = make_engine(["abc"], "b")
    engine.select_first()

    engine.clear()

    assert not engine.active
    assert engine.current() is None
    assert engine.next() is None


def test_refresh_keeps_index_in_range() -> None:
    engine = make_engine(["a a a"], "a")
    engine.select_first()
    engine.next()
    engine.next()

    engine.refresh(["a"], revision=2)

    assert engine.current() == MatchRange(0, 0, 1)
    assert engine.revision == 2
