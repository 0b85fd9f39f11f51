"""LineEditor - the single-line ASCII input buffer behind filterable menus."""

from __future__ import annotations

from typing import Literal

from termmenus.keybindings import MenuKeybindingsManager, get_menu_keybindings
from termmenus.keys import is_ascii_char, key_char

EditResult = Literal["inserted", "deleted", "moved", "noop", "rejected", "unhandled"]


class LineEditor:
    """Text buffer plus caret, driven one key sequence at a time.

    Only printable ASCII is accepted; any other character is rejected
    without touching the buffer. Keys the editor does not own come back as
    ``"unhandled"`` so the caller can pass them on to the selection.
    """

    def __init__(self, keybindings: MenuKeybindingsManager | None = None) -> None:
        self._value: str = ""
        self._cursor: int = 0
        self._keybindings = keybindings

    @property
    def value(self) -> str:
        return self._value

    @property
    def cursor(self) -> int:
        return self._cursor

    def set_value(self, value: str) -> None:
        self._value = value
        self._cursor = min(self._cursor, len(value))

    def handle_input(self, data: str) -> EditResult:
        kb = self._keybindings or get_menu_keybindings()

        if kb.matches(data, "deleteCharBackward"):
            if self._cursor > 0:
                self._value = self._value[: self._cursor - 1] + self._value[self._cursor :]
                self._cursor -= 1
                return "deleted"
            return "noop"

        if kb.matches(data, "cursorLeft"):
            self._cursor = max(0, self._cursor - 1)
            return "moved"

        if kb.matches(data, "cursorRight"):
            self._cursor = min(len(self._value), self._cursor + 1)
            return "moved"

        char = key_char(data)
        if char is None:
            return "unhandled"
        if not is_ascii_char(char):
            return "rejected"

        self._value = self._value[: self._cursor] + char + self._value[self._cursor :]
        self._cursor += 1
        return "inserted"
