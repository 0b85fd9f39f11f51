"""Selection state machine shared by the list, filterable and numbered menus."""

from __future__ import annotations

from dataclasses import dataclass

from termmenus.keybindings import MenuKeybindingsManager, get_menu_keybindings
from termmenus.keys import KeyId, matches_key


@dataclass(frozen=True)
class Selected:
    index: int


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class UndefinedKey:
    key: str


MenuOutcome = Selected | Quit | UndefinedKey


def is_quit(
    data: str,
    quit_key: KeyId | None,
    keybindings: MenuKeybindingsManager | None = None,
) -> bool:
    """Return ``True`` for the interrupt key or the caller's quit key."""
    kb = keybindings or get_menu_keybindings()
    if kb.matches(data, "interrupt"):
        return True
    return quit_key is not None and matches_key(data, quit_key)


class SelectionState:
    """Highlighted index over a list of ``length`` items.

    Movement saturates at both ends and never wraps. The index always lies
    in ``[0, max(length - 1, 0)]``.
    """

    def __init__(
        self,
        length: int = 0,
        keybindings: MenuKeybindingsManager | None = None,
    ) -> None:
        self.index = 0
        self.length = length
        self._keybindings = keybindings

    def move_up(self) -> None:
        self.index = max(0, self.index - 1)

    def move_down(self) -> None:
        if self.index + 1 < self.length:
            self.index += 1

    def resize(self, new_length: int) -> None:
        """Adopt a regenerated list, keeping the numeric position if it still fits."""
        self.length = new_length
        self.index = min(self.index, max(new_length - 1, 0))

    def confirm(self) -> Selected | None:
        if self.index < self.length:
            return Selected(self.index)
        return None

    def handle_input(self, data: str, quit_key: KeyId | None = None) -> MenuOutcome | None:
        """Apply one key. Returns the terminal outcome, or ``None`` to keep looping.

        Confirming an empty list ends the interaction with :class:`Quit`, the
        "no selection" result.
        """
        kb = self._keybindings or get_menu_keybindings()

        if kb.matches(data, "selectConfirm"):
            return self.confirm() or Quit()
        if kb.matches(data, "selectUp"):
            self.move_up()
            return None
        if kb.matches(data, "selectDown"):
            self.move_down()
            return None
        if is_quit(data, quit_key, kb):
            return Quit()
        return None


def select_numbered(
    data: str,
    length: int,
    quit_key: KeyId,
    keybindings: MenuKeybindingsManager | None = None,
) -> MenuOutcome:
    """Resolve a single keystroke against a numbered menu of ``length`` items.

    Digit ``d`` with ``1 <= d <= length`` selects item ``d - 1``. Digit ``0``,
    digits past the end and any other key come back as :class:`UndefinedKey`.
    """
    if len(data) == 1 and "1" <= data <= "9":
        digit = int(data)
        if digit <= length:
            return Selected(digit - 1)
    if is_quit(data, quit_key, keybindings):
        return Quit()
    return UndefinedKey(data)
