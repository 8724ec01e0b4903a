from __future__ import annotations

import pytest

from vim_core.buffer import Buffer, Cursor, Row, UndoEntry, UndoTimeline, diff_rows


def make_buffer(text: str = "", **kwargs) -> Buffer:
    return Buffer.from_text(text, **kwargs)


def rows(*texts: str) -> tuple[Row, ...]:
    return tuple(Row.from_text(text) for text in texts)


def type_text(buffer: Buffer, text: str, at: Cursor | None = None) -> None:
    with buffer.transaction("insert_text"):
        end = buffer.document.insert_text(buffer.cursor if at is None else at, text)
        buffer.set_cursor(*end)


def test_diff_rows_returns_changed_slice_only() -> None:
    before = rows("a", "b", "c", "d")
    after = rows("a", "B", "x", "d")

    assert diff_rows(before, after) == (1, before[1:3], after[1:3])
    assert diff_rows(before, before) is None


def test_diff_rows_handles_duplicate_rows() -> None:
    before = rows("a", "a")
    after = rows("a")

    start, old, new = diff_rows(before, after)

    assert start == 1
    assert old == before[1:]
    assert new == ()


def test_transaction_records_one_entry() -> None:
    buffer = make_buffer("hello")

    with buffer.transaction("edit") as txn:
        buffer.document.insert_text(Cursor(0, 5), " world")
        buffer.document.insert_text(Cursor(0, 0), ">")

    assert txn.changed is True
    assert buffer.undo_timeline.depth == (1, 0)
    assert buffer.undo()
    assert buffer.text() == "hello"


def test_transaction_without_change_records_nothing() -> None:
    buffer = make_buffer("hello")

    with buffer.transaction("noop"):
        pass

    assert buffer.undo_timeline.depth == (0, 0)
    assert buffer.undo() is False


def test_transaction_rolls_back_on_error() -> None:
    buffer = make_buffer("hello")

    with pytest.raises(RuntimeError):
        with buffer.transaction("broken"):
            buffer.document.insert_text(Cursor(0, 0), "xx")
            raise RuntimeError("boom")

    assert buffer.text() == "hello"
    assert buffer.undo_timeline.depth == (0, 0)


def test_undo_redo_restore_cursor() -> None:
    buffer = make_buffer("abc")
    buffer.set_cursor(0, 1)
    with buffer.transaction("delete"):
        buffer.document.delete_range(Cursor(0, 1), Cursor(0, 2))
        buffer.set_cursor(0, 2)

    assert buffer.undo()
    assert buffer.text() == "abc"
    assert buffer.cursor == Cursor(0, 1)
    assert buffer.redo()
    assert buffer.text() == "ac"
    assert buffer.cursor == Cursor(0, 2)
    assert buffer.redo() is False


def test_new_edit_clears_redo() -> None:
    buffer = make_buffer("a")
    type_text(buffer, "b")
    buffer.undo()

    type_text(buffer, "c")

    assert buffer.redo() is False
    assert buffer.text() == "ca"


def test_undo_group_coalesces_transactions() -> None:
    buffer = make_buffer("")
    buffer.begin_undo_group("insert")
    buffer.begin_undo_group("nested")
    for ch in "abc":
        type_text(buffer, ch)
    buffer.end_undo_group()

    assert buffer.text() == "abc"
    assert buffer.undo_timeline.depth == (1, 0)
    assert buffer.undo_timeline._undo[-1].label == "insert"
    buffer.undo()
    assert buffer.text() == ""


def test_undo_closes_open_group() -> None:
    buffer = make_buffer("x")
    buffer.begin_undo_group("insert")
    type_text(buffer, "y")

    assert buffer.undo()
    assert buffer.text() == "x"
    assert not buffer.in_undo_group


def test_undo_limit_drops_oldest_entries() -> None:
    buffer = make_buffer("", undo_limit=3)
    for ch in "abcde":
        type_text(buffer, ch, at=Cursor(0, len(buffer.text())))

    steps = 0
    while buffer.undo():
        steps += 1

    assert steps == 3
    assert buffer.text() == "ab"


def test_timeline_push_and_pop() -> None:
    timeline = UndoTimeline(limit=2)
    entry = UndoEntry("x", 0, rows("a"), rows("b"), Cursor(0, 0), Cursor(0, 0))

    timeline.push(entry)

    assert timeline.can_undo()
    assert timeline.undo() is entry
    assert timeline.can_redo()
    assert timeline.redo() is entry


def test_edits_go_through_transactions_only() -> None:
    import vim_core.buffer as buffer_pkg
    from vim_core.buffer import buffer as buffer_module
    from vim_core.keymaps import KeySequence
    from vim_core.runtime.telemetry import SpanHandle

    assert buffer_module.__all__ == ["Buffer", "Transaction"]
    for name in ("BufferView", "BufferDelta"):
        assert not hasattr(buffer_pkg, name)
    for name in ("snapshot", "replace_range", "insert_text", "delete_range"):
        assert not hasattr(Buffer, name)
    assert not hasattr(make_buffer("x").state, "last_change_tick")
    assert not hasattr(KeySequence, "prepend")
    assert not hasattr(KeySequence, "append")
    assert not hasattr(SpanHandle, "cancel")
