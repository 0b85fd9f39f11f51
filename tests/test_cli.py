"""Tests for the termmenus command line, with the tty replaced by a VirtualTerminal."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from termmenus import cli

from virtual_terminal import VirtualTerminal

KEY_DOWN = "\x1b[B"
KEY_ENTER = "\r"
KEY_ESCAPE = "\x1b"


@pytest.fixture
def run(tmp_path, monkeypatch):
    """Invoke the CLI with *keys* scripted on a virtual terminal."""
    monkeypatch.setenv("TERMMENUS_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("NO_COLOR", "1")

    def invoke(args, keys=(), input=None):
        term = VirtualTerminal(keys)
        monkeypatch.setattr(cli, "open_terminal", lambda stack: term)
        result = CliRunner().invoke(cli.main, args, input=input)
        return result, term

    return invoke


class TestPick:
    def test_prints_choice(self, run):
        result, _ = run(["pick", "a", "b", "c"], [KEY_DOWN, KEY_DOWN, KEY_ENTER])
        assert result.exit_code == cli.EXIT_SELECTED
        assert result.output == "c\n"

    def test_cancel(self, run):
        result, _ = run(["pick", "--quit", "q", "a", "b"], ["q"])
        assert result.exit_code == cli.EXIT_CANCELLED
        assert result.output == ""

    def test_title_and_prompt(self, run):
        result, term = run(["pick", "--title", "Fruit", "--prompt", "*", "a"], [KEY_ENTER])
        assert result.exit_code == 0
        assert "Fruit\r\n* a" in term.frames[0]

    def test_items_from_file(self, run):
        result, _ = run(["pick", "--file", "-"], [KEY_DOWN, KEY_ENTER], input="one\n\ntwo\n")
        assert result.exit_code == 0
        assert result.output == "two\n"

    def test_no_items(self, run):
        result, _ = run(["pick"])
        assert result.exit_code == 2
        assert "no items given" in result.output

    def test_terminal_failure(self, run):
        result, term = run(["pick", "a"], [])
        assert result.exit_code == 1
        assert "terminal I/O failed" in result.output
        assert term.raw_mode_exited == 1

    def test_undecodable_input(self, run, monkeypatch):
        def read_key(self):
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        monkeypatch.setattr(VirtualTerminal, "read_key", read_key)
        result, term = run(["pick", "a"])
        assert result.exit_code == 1
        assert "terminal I/O failed" in result.output
        assert term.raw_mode_exited == 1

    def test_log_level_option(self, run):
        result, _ = run(["--log-level", "debug", "pick", "a"], [KEY_ENTER])
        assert result.exit_code == 0


class TestFilter:
    def test_prefix_filter(self, run):
        result, _ = run(["filter", "Apple", "Banana", "Blueberry"], ["b", "l", KEY_ENTER])
        assert result.exit_code == 0
        assert result.output == "Blueberry\n"

    def test_no_match(self, run):
        result, _ = run(["filter", "Apple"], ["z", KEY_ENTER])
        assert result.exit_code == cli.EXIT_CANCELLED

    def test_escape_quits(self, run):
        result, _ = run(["filter", "--quit", "escape", "Apple"], [KEY_ESCAPE])
        assert result.exit_code == cli.EXIT_CANCELLED


class TestNumbered:
    def test_digit(self, run):
        result, term = run(["numbered", "a", "b", "c"], ["2"])
        assert result.exit_code == 0
        assert result.output == "b\n"
        assert "q. Quit" in term.frames[0]

    def test_quit(self, run):
        result, _ = run(["numbered", "a", "b"], ["q"])
        assert result.exit_code == cli.EXIT_CANCELLED

    def test_undefined_key(self, run):
        result, _ = run(["numbered", "a", "b"], ["x"])
        assert result.exit_code == cli.EXIT_UNDEFINED_KEY
        assert "unrecognised key: 'x'" in result.output

    def test_retry_after_undefined_key(self, run):
        result, term = run(["numbered", "--retry", "a", "b", "c"], ["7", "3"])
        assert result.exit_code == 0
        assert result.output == "c\n"
        assert any("Unrecognised key; press 1-3 or q" in frame for frame in term.frames)
