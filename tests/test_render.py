"""Tests for frame building and the FrameWriter."""

from __future__ import annotations

from termmenus.render import (
    ASCII_NOTICE,
    NAVIGATE_HINT,
    SELECT_HINT,
    Anchor,
    FrameWriter,
    filter_rows,
    list_rows,
    numbered_rows,
)
from termmenus.theme import default_theme, plain_theme
from termmenus.utils import visible_width

from virtual_terminal import VirtualTerminal

HOME = "\x1b[5;1H"
CLEAR = "\x1b[0J"


# ---------------------------------------------------------------------------
# Row builders
# ---------------------------------------------------------------------------


class TestListRows:
    def test_prompt_marks_selected_row(self):
        assert list_rows(["a", "b", "c"], 1, ">", plain_theme()) == ["a", "> b", "c"]

    def test_empty_prompt(self):
        assert list_rows(["a", "b"], 0, "", plain_theme()) == ["a", "b"]

    def test_empty_list(self):
        assert list_rows([], 0, ">", plain_theme()) == []

    def test_styles(self):
        theme = default_theme()
        rows = list_rows(["a", "b"], 0, ">", theme)
        assert rows[0] == "> " + theme.selected_text("a")
        assert rows[1] == theme.dim_text("b")


class TestFilterRows:
    def test_layout_with_matches(self):
        rows = filter_rows("Search: ", "b", ["banana", "berry"], 1, ">", plain_theme())
        assert rows == [
            "Search: b",
            "",
            NAVIGATE_HINT,
            SELECT_HINT,
            "banana",
            "> berry",
        ]

    def test_no_hints_without_matches(self):
        rows = filter_rows("Search: ", "zz", [], 0, ">", plain_theme())
        assert rows == ["Search: zz"]

    def test_notice_uses_spacer_row(self):
        rows = filter_rows("? ", "", ["a"], 0, ">", plain_theme(), ASCII_NOTICE)
        assert rows[1] == ASCII_NOTICE
        assert rows[2] == NAVIGATE_HINT

    def test_notice_without_matches(self):
        rows = filter_rows("? ", "x", [], 0, ">", plain_theme(), ASCII_NOTICE)
        assert rows == ["? x", ASCII_NOTICE]

    def test_input_prompt_is_styled(self):
        theme = default_theme()
        rows = filter_rows("Search: ", "ab", [], 0, ">", theme)
        assert rows[0] == theme.input_prompt("Search: ") + "ab"


class TestNumberedRows:
    def test_layout(self):
        rows = numbered_rows("Choose", ["x", "y"], "q", plain_theme())
        assert rows == ["Choose", "1. x", "2. y", "q. Quit"]

    def test_without_title(self):
        assert numbered_rows("", ["x"], "esc", plain_theme()) == ["1. x", "esc. Quit"]

    def test_ordinals_are_styled(self):
        theme = default_theme()
        rows = numbered_rows("", ["x"], "q", theme)
        assert rows[0] == f"{theme.ordinal('1')}. x"
        assert rows[1] == f"{theme.ordinal('q')}. Quit"


# ---------------------------------------------------------------------------
# FrameWriter
# ---------------------------------------------------------------------------


def make_writer(**kwargs) -> tuple[FrameWriter, VirtualTerminal]:
    anchor = kwargs.pop("anchor", Anchor(5, 1))
    theme = kwargs.pop("theme", plain_theme())
    term = VirtualTerminal(**kwargs)
    return FrameWriter(term, anchor, theme), term


class TestFrameWriter:
    def test_draw_list(self):
        writer, term = make_writer()
        writer.draw_list("Title", ["a", "b"], 1, ">")
        assert term.frames == [HOME + CLEAR + "Title\r\na\r\n> b" + HOME]

    def test_draw_list_without_title(self):
        writer, term = make_writer()
        writer.draw_list("", ["a"], 0, ">")
        assert term.frames == [HOME + CLEAR + "> a" + HOME]

    def test_redraw_repaints_from_anchor(self):
        writer, term = make_writer()
        writer.draw_list("", ["a", "b"], 0, ">")
        writer.draw_list("", ["a", "b"], 1, ">")
        assert len(term.frames) == 2
        assert term.frames[1].startswith(HOME + CLEAR)
        assert term.frames[1].endswith("a\r\n> b" + HOME)

    def test_draw_filter_places_caret(self):
        writer, term = make_writer()
        writer.draw_filter("Search: ", "ab", 1, ["abc"], 0, ">")
        frame = term.frames[-1]
        assert frame.startswith(HOME + CLEAR + "Search: ab\r\n")
        # 8 columns of prompt plus 1 character before the caret
        assert frame.endswith(HOME + "\x1b[9C")

    def test_draw_filter_caret_at_start_of_empty_prompt(self):
        writer, term = make_writer()
        writer.draw_filter("", "", 0, [], 0, ">")
        assert term.frames[-1] == HOME + CLEAR + HOME

    def test_draw_numbered(self):
        writer, term = make_writer()
        writer.draw_numbered("Pick", ["x"], "q")
        assert term.frames == [HOME + CLEAR + "Pick\r\n1. x\r\nq. Quit" + HOME]

    def test_clear(self):
        writer, term = make_writer()
        writer.clear()
        assert term.frames == [HOME + CLEAR]

    def test_clear_filter_moves_below_anchor(self):
        writer, term = make_writer()
        writer.clear_filter()
        assert term.frames == [HOME + CLEAR + "\r\n"]

    def test_rows_truncated_to_width(self):
        writer, term = make_writer(columns=10, anchor=Anchor(5, 3))
        writer.draw_list("abcdefghijkl", ["abcdefghijkl"], 1, "")
        home = "\x1b[5;3H"
        # The first row starts at the anchor column, later rows at column 1
        assert term.frames == [home + CLEAR + "abcdefgh\r\nabcdefghij" + home]

    def test_clipped_styled_row_is_reset(self):
        writer, term = make_writer(columns=10, theme=default_theme())
        writer.draw_list("", ["abcdefghijklmnop"], 0, ">")
        frame = term.frames[-1]
        body = frame[len(HOME + CLEAR) : -len(HOME)]
        assert body.endswith("\x1b[0m")
        assert visible_width(body) == 10
