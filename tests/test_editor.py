from __future__ import annotations

import pytest

from vim_core import Editor, EngineConfig, PointerEvent
from vim_core.buffer import (
    CharSelection,
    Cursor,
    Granularity,
    HighlightSpan,
    LineSelection,
    MatchRange,
)
from vim_core.modes import KeyInput


def make_editor(text: str = "", **kwargs) -> Editor:
    return Editor(text, **kwargs)


class FakeClipboard:
    def __init__(self, text: str = "") -> None:
        self.text = text

    def read(self) -> str:
        return self.text

    def write(self, text: str) -> None:
        self.text = text


# -- motions -------------------------------------------------------------


def test_percent_jumps_to_matching_bracket() -> None:
    editor = make_editor("(a(b)c)")

    editor.type_keys("%")

    assert editor.cursor == Cursor(0, 6)


def test_percent_without_partner_is_noop() -> None:
    editor = make_editor("(a")

    editor.type_keys("%")

    assert editor.cursor == Cursor(0, 0)
    assert editor.text() == "(a"


def test_counted_motion() -> None:
    editor = make_editor("a b c d e")

    editor.type_keys("3w")

    assert editor.cursor == Cursor(0, 6)


def test_cursor_settles_on_last_char_in_normal_mode() -> None:
    editor = make_editor("abc")

    editor.type_keys("$x")

    assert editor.text() == "ab"
    assert editor.cursor == Cursor(0, 1)


def test_unbound_key_is_not_consumed() -> None:
    editor = make_editor("abc")

    result = editor.handle_key("z")

    assert not result.consumed
    assert result.status == "miss"


# -- operators -----------------------------------------------------------


def test_delete_word_then_paste_restores_text() -> None:
    editor = make_editor("one two three")

    editor.type_keys("dw")
    assert editor.text() == "two three"
    assert editor.buffer.register.read().text == "one "

    editor.type_keys("P")
    assert editor.text() == "one two three"


def test_delete_line_then_paste_restores_text() -> None:
    editor = make_editor("a\nb\nc")

    editor.type_keys("jdd")
    assert editor.text() == "a\nc"
    assert editor.cursor == Cursor(1, 0)

    editor.type_keys("P")
    assert editor.text() == "a\nb\nc"


def test_delete_word_stops_at_end_of_row() -> None:
    editor = make_editor("foo\nbar")

    editor.type_keys("dw")

    assert editor.text() == "\nbar"


def test_counted_linewise_delete_and_paste() -> None:
    editor = make_editor("a\nb\nc")

    editor.type_keys("2dd")
    assert editor.text() == "c"
    assert editor.buffer.register.read().granularity is Granularity.LINE

    editor.type_keys("p")
    assert editor.text() == "c\na\nb"


def test_linewise_paste_never_splices_into_the_row() -> None:
    editor = make_editor("foo bar\nbaz")

    editor.type_keys("yyw")
    assert editor.cursor == Cursor(0, 4)
    editor.type_keys("p")

    assert editor.text() == "foo bar\nfoo bar\nbaz"
    assert editor.cursor == Cursor(1, 0)


def test_characterwise_text_opening_with_line_break_pastes_as_rows() -> None:
    editor = make_editor("abc\ndef")
    editor.buffer.register.write("\nfoo", Granularity.CHARACTER)

    editor.type_keys("lp")
    assert editor.text() == "abc\nfoo\ndef"
    assert editor.cursor == Cursor(1, 0)

    editor.type_keys("P")
    assert editor.text() == "abc\nfoo\nfoo\ndef"


def test_external_clipboard_line_break_prefix_never_splits_row() -> None:
    clipboard = FakeClipboard("\nfoo")
    editor = make_editor("abc", config=EngineConfig(clipboard="external"), clipboard=clipboard)

    editor.type_keys("p")

    assert editor.text() == "abc\nfoo"
    assert editor.cursor == Cursor(1, 0)


@pytest.mark.parametrize(
    ("text", "keys"),
    [
        ("abc", "$xp"),
        ("ab\ncd", "$xp"),
        ("abc def", "wd$p"),
        ("abc", "dlP"),
        ("abc", "$dlp"),
        ("(a(b)c) x", "d%P"),
        ("f(a(b)c)", "$d%p"),
    ],
)
def test_delete_then_paste_restores_text(text: str, keys: str) -> None:
    editor = make_editor(text)

    editor.type_keys(keys)

    assert editor.text() == text


def test_text_object_prefix_reprocesses_unrelated_key() -> None:
    editor = make_editor("abc\ndef")

    editor.type_keys("dix")
    assert editor.text() == "bc\ndef"
    assert editor.mode == "normal"

    editor.type_keys("dij")
    assert editor.text() == "bc\ndef"
    assert editor.cursor == Cursor(1, 0)


def test_change_inner_word_is_one_undo_step() -> None:
    editor = make_editor("one two three")

    editor.type_keys("wciw")
    assert editor.mode == "insert"
    assert editor.text() == "one  three"

    editor.type_keys("2<Esc>")
    assert editor.text() == "one 2 three"
    assert editor.mode == "normal"
    assert editor.cursor == Cursor(0, 4)

    editor.type_keys("u")
    assert editor.text() == "one two three"
    assert editor.cursor == Cursor(0, 4)


def test_change_word_keeps_following_space() -> None:
    editor = make_editor("foo bar")

    editor.type_keys("cwX<Esc>")

    assert editor.text() == "X bar"


def test_delete_text_object_in_brackets() -> None:
    editor = make_editor("call(a, b)")

    editor.type_keys("di(")

    assert editor.text() == "call()"
    assert editor.cursor == Cursor(0, 5)


def test_join_lines() -> None:
    editor = make_editor("foo\n  bar\nbaz")

    editor.type_keys("J")
    assert editor.text() == "foo bar\nbaz"
    assert editor.cursor == Cursor(0, 3)

    counted = make_editor("a\nb\nc\nd")
    counted.type_keys("3J")
    assert counted.text() == "a b c\nd"
    assert counted.cursor == Cursor(0, 3)


def test_empty_buffer_edits_keep_one_row() -> None:
    editor = make_editor("")

    editor.type_keys("x")
    editor.type_keys("dd")
    editor.type_keys("D")
    editor.type_keys("u")

    assert editor.text() == ""
    assert len(editor.snapshot().rows) == 1
    assert editor.cursor == Cursor(0, 0)


# -- history -------------------------------------------------------------


def test_undo_and_redo_walk_the_history() -> None:
    editor = make_editor("abc")

    editor.type_keys("xxx")
    assert editor.text() == ""

    editor.type_keys("u")
    assert editor.text() == "c"
    editor.type_keys("uu")
    assert editor.text() == "abc"

    editor.type_keys("<C-r><C-r><C-r>")
    assert editor.text() == ""


def test_counted_undo() -> None:
    editor = make_editor("abc")
    editor.type_keys("xx")

    editor.type_keys("2u")

    assert editor.text() == "abc"


def test_undo_restores_cursor() -> None:
    editor = make_editor("one two")

    editor.type_keys("wdw")
    assert editor.text() == "one "
    assert editor.cursor == Cursor(0, 3)

    editor.type_keys("u")
    assert editor.text() == "one two"
    assert editor.cursor == Cursor(0, 4)


def test_insert_session_is_one_undo_step() -> None:
    editor = make_editor("x")

    editor.type_keys("iab<CR>c<Esc>")
    assert editor.text() == "ab\ncx"
    assert editor.cursor == Cursor(1, 0)

    editor.type_keys("u")
    assert editor.text() == "x"


def test_open_below_and_append() -> None:
    editor = make_editor("a\nb")

    editor.type_keys("ox<Esc>")
    assert editor.text() == "a\nx\nb"
    editor.type_keys("Ay<Esc>")
    assert editor.text() == "a\nxy\nb"

    editor.type_keys("u")
    assert editor.text() == "a\nx\nb"
    editor.type_keys("u")
    assert editor.text() == "a\nb"


@pytest.mark.parametrize(
    ("text", "keys", "cursor"),
    [
        ("abc", "aX<Esc>u", Cursor(0, 0)),
        ("abc", "AX<Esc>u", Cursor(0, 0)),
        ("  abc", "$IX<Esc>u", Cursor(0, 4)),
    ],
)
def test_undo_of_insert_session_restores_cursor_before_entry_key(
    text: str, keys: str, cursor: Cursor
) -> None:
    editor = make_editor(text)

    editor.type_keys(keys)

    assert editor.text() == text
    assert editor.cursor == cursor


def test_insert_ctrl_u_deletes_back_to_first_non_blank() -> None:
    editor = make_editor("    foo bar")

    editor.type_keys("A<C-u>")
    assert editor.text() == "    "
    assert editor.cursor == Cursor(0, 4)

    editor.type_keys("<C-u>")
    assert editor.text() == ""
    assert editor.mode == "insert"

    editor.type_keys("<Esc>u")
    assert editor.text() == "    foo bar"


def test_insert_ctrl_u_inside_text_keeps_indent() -> None:
    editor = make_editor("  ab cd")

    editor.type_keys("wwi<C-u>x<Esc>")

    assert editor.text() == "  xcd"


def test_insert_ctrl_u_at_column_zero_is_noop() -> None:
    editor = make_editor("abc")

    results = editor.type_keys("i<C-u>")

    assert results[-1].status == "noop"
    assert editor.text() == "abc"


def test_insert_mode_types_motion_letters() -> None:
    editor = make_editor("")

    editor.type_keys("ihjkl0$<Esc>")

    assert editor.text() == "hjkl0$"


def test_insert_backspace_joins_rows() -> None:
    editor = make_editor("ab\ncd")

    editor.type_keys("ji<BS><Esc>")

    assert editor.text() == "abcd"


# -- visual --------------------------------------------------------------


def test_visual_line_delete_of_three_rows() -> None:
    editor = make_editor("a\nb\nc\nd\ne")

    editor.type_keys("jVjj")
    assert editor.buffer.state.selection == LineSelection(1, 3)
    editor.type_keys("d")

    assert editor.text() == "a\ne"
    assert editor.cursor == Cursor(1, 0)
    assert editor.mode == "normal"
    assert editor.buffer.state.selection is None


def test_visual_line_delete_through_last_row() -> None:
    editor = make_editor("a\nb\nc\nd")

    editor.type_keys("jVjjd")

    assert editor.text() == "a"
    assert editor.cursor == Cursor(0, 0)


def test_visual_yank_then_replace_selection() -> None:
    editor = make_editor("hello world")

    editor.type_keys("vey")
    assert editor.mode == "normal"
    assert editor.buffer.register.read().text == "hello"

    editor.type_keys("wvep")
    assert editor.text() == "hello hello"
    assert editor.buffer.register.read().text == "hello"


def test_switching_visual_kinds_keeps_anchor() -> None:
    editor = make_editor("ab\ncd")

    editor.type_keys("lvj")
    assert editor.buffer.state.selection == CharSelection(Cursor(0, 1), Cursor(1, 1))

    editor.type_keys("V")
    assert editor.mode == "visual_line"
    assert editor.buffer.state.selection == LineSelection(0, 1)

    editor.type_keys("V")
    assert editor.mode == "normal"
    assert editor.buffer.state.selection is None


def test_visual_inner_bracket_selection() -> None:
    editor = make_editor("f(abc)")

    editor.type_keys("vi(")
    assert editor.buffer.state.selection == CharSelection(Cursor(0, 2), Cursor(0, 4))

    editor.type_keys("d")
    assert editor.text() == "f()"


# -- search --------------------------------------------------------------


def test_search_submit_and_cycle() -> None:
    editor = make_editor("foo bar\nbaz bar")

    editor.type_keys("/b")
    assert editor.mode == "search"
    assert editor.cursor == Cursor(0, 4)
    editor.type_keys("ar<CR>")

    assert editor.mode == "normal"
    assert editor.cursor == Cursor(0, 4)
    editor.type_keys("n")
    assert editor.cursor == Cursor(1, 4)
    editor.type_keys("n")
    assert editor.cursor == Cursor(0, 4)
    editor.type_keys("N")
    assert editor.cursor == Cursor(1, 4)


def test_search_escape_restores_origin() -> None:
    editor = make_editor("foo bar")

    editor.type_keys("/bar")
    assert editor.cursor == Cursor(0, 4)
    assert editor.snapshot().search_pattern == "bar"
    editor.type_keys("<Esc>")

    assert editor.mode == "normal"
    assert editor.cursor == Cursor(0, 0)
    assert not editor.search.active


def test_search_without_match_keeps_cursor() -> None:
    editor = make_editor("foo bar")

    results = editor.type_keys("w/zzz<CR>")

    assert results[-1].status == "not_found"
    assert editor.cursor == Cursor(0, 4)


def test_snapshot_refreshes_stale_matches() -> None:
    editor = make_editor("ab ab")
    editor.type_keys("/ab<CR>")
    assert len(editor.snapshot().search_highlights) == 2

    editor.type_keys("x")

    snapshot = editor.snapshot()
    assert snapshot.search_highlights == (MatchRange(0, 2, 4),)


# -- host paste ----------------------------------------------------------


def test_host_paste_in_normal_mode_goes_after_cursor() -> None:
    editor = make_editor("abc")

    editor.handle_paste("xy")

    assert editor.text() == "axybc"
    assert editor.cursor == Cursor(0, 2)
    assert editor.buffer.register.read().text == "xy"


def test_host_paste_of_whole_lines_opens_rows() -> None:
    editor = make_editor("abc")

    editor.handle_paste("one\ntwo\n")

    assert editor.text() == "abc\none\ntwo"
    assert editor.cursor == Cursor(1, 0)
    assert editor.buffer.register.read().linewise


def test_host_paste_in_insert_mode_types_text() -> None:
    editor = make_editor("abc")
    editor.type_keys("i")

    editor.handle_paste("xy")
    assert editor.text() == "xyabc"
    assert editor.cursor == Cursor(0, 2)
    assert editor.mode == "insert"

    editor.type_keys("<Esc>u")
    assert editor.text() == "abc"


def test_host_paste_replaces_visual_selection() -> None:
    editor = make_editor("hello world")
    editor.type_keys("wve")

    editor.handle_paste("there")

    assert editor.text() == "hello there"
    assert editor.mode == "normal"
    assert editor.buffer.state.selection is None
    assert editor.buffer.register.read().text == "there"


def test_host_paste_ignored_while_searching() -> None:
    editor = make_editor("abc")
    editor.type_keys("/")

    assert editor.handle_paste("b") is None
    assert editor.text() == "abc"
    assert editor.mode == "search"
    assert editor.buffer.register.read().is_empty


def test_host_paste_writes_through_external_clipboard() -> None:
    clipboard = FakeClipboard()
    editor = make_editor("abc", config=EngineConfig(clipboard="external"), clipboard=clipboard)

    editor.handle_paste("z")

    assert clipboard.text == "z"
    assert editor.text() == "azbc"


# -- pointer and viewport ------------------------------------------------


def test_pointer_press_drag_release() -> None:
    editor = make_editor("hello\nworld")

    editor.handle_pointer(PointerEvent("press", 1, 2))
    assert editor.cursor == Cursor(1, 2)

    editor.handle_pointer(PointerEvent("drag", 0, 1))
    assert editor.mode == "visual"
    assert editor.buffer.state.selection == CharSelection(Cursor(1, 2), Cursor(0, 1))

    editor.handle_pointer(PointerEvent("release", 0, 3))
    assert editor.buffer.state.selection == CharSelection(Cursor(1, 2), Cursor(0, 3))

    editor.handle_pointer(PointerEvent("press", 1, 0))
    assert editor.mode == "normal"
    assert editor.buffer.state.selection is None


def test_pointer_press_clamps_to_row() -> None:
    editor = make_editor("hello")

    editor.handle_pointer(PointerEvent("press", 3, 99))

    assert editor.cursor == Cursor(0, 4)


def test_pointer_event_kind_validated() -> None:
    with pytest.raises(ValueError):
        PointerEvent("scroll", 0, 0)


def test_scroll_offset_follows_cursor() -> None:
    text = "\n".join(str(n) for n in range(50))
    editor = make_editor(text, config=EngineConfig(viewport_height=10))

    editor.type_keys("G")
    assert editor.snapshot().scroll_offset == 40

    editor.type_keys("gg")
    assert editor.scroll_offset == 0

    with pytest.raises(ValueError):
        editor.set_viewport(0)


# -- snapshot and highlight ----------------------------------------------


def test_snapshot_carries_cell_widths() -> None:
    editor = make_editor("a\tb\n日本")

    snapshot = editor.snapshot()

    assert snapshot.rows[0] == (("a", 1), ("\t", 4), ("b", 1))
    assert snapshot.rows[1] == (("日", 2), ("本", 2))
    assert snapshot.text == "a\tb\n日本"
    assert snapshot.mode == "normal"


def test_snapshot_reports_pending_keys() -> None:
    editor = make_editor("abc")

    editor.type_keys("2d")

    assert editor.snapshot().pending_keys == ("2", "d")
    editor.type_keys("<Esc>")
    assert editor.snapshot().pending_keys == ()


def test_highlight_delegates_to_highlighter() -> None:
    seen = []

    def highlighter(text: str, language: str):
        seen.append((text, language))
        return [HighlightSpan(Cursor(0, 0), Cursor(0, 3), "keyword")]

    editor = make_editor("def f(): pass", highlighter=highlighter)

    revision, spans = editor.highlight("python")

    assert revision == editor.buffer.revision
    assert spans == (HighlightSpan(Cursor(0, 0), Cursor(0, 3), "keyword"),)
    assert seen == [("def f(): pass", "python")]
    assert make_editor("x").highlight("python")[1] == ()


def test_handle_key_accepts_key_inputs_and_tokens() -> None:
    editor = make_editor("abc")
    editor.type_keys("x")

    editor.handle_key(KeyInput("u", text="u"))
    assert editor.text() == "abc"
    editor.handle_key("ctrl+r")
    assert editor.text() == "bc"
