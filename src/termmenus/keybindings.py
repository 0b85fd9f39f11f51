"""Menu keybindings manager."""

from __future__ import annotations

from typing import Literal

from termmenus.keys import KeyId, matches_key

MenuAction = Literal[
    # Selection
    "selectUp",
    "selectDown",
    "selectConfirm",
    "interrupt",
    # Line editing
    "cursorLeft",
    "cursorRight",
    "deleteCharBackward",
]

MENU_ACTIONS: tuple[MenuAction, ...] = (
    "selectUp",
    "selectDown",
    "selectConfirm",
    "interrupt",
    "cursorLeft",
    "cursorRight",
    "deleteCharBackward",
)

MenuKeybindingsConfig = dict[MenuAction, KeyId | list[KeyId]]

DEFAULT_MENU_KEYBINDINGS: dict[MenuAction, KeyId | list[KeyId]] = {
    "selectUp": "up",
    "selectDown": "down",
    "selectConfirm": "enter",
    "interrupt": "ctrl+c",
    "cursorLeft": "left",
    "cursorRight": "right",
    "deleteCharBackward": "backspace",
}


class MenuKeybindingsManager:
    """Resolves raw key sequences to menu actions.

    User overrides replace the default keys of an action outright; actions
    left out of the override keep their defaults.
    """

    def __init__(self, config: MenuKeybindingsConfig | None = None) -> None:
        self._bindings: dict[MenuAction, list[KeyId]] = {}
        self.set_config(config or {})

    def set_config(self, config: MenuKeybindingsConfig) -> None:
        """Rebuild the bindings from the defaults plus *config*."""
        merged = {**DEFAULT_MENU_KEYBINDINGS, **config}
        self._bindings = {
            action: [keys] if isinstance(keys, str) else list(keys)
            for action, keys in merged.items()
        }

    def matches(self, data: str, action: MenuAction) -> bool:
        """Whether *data* is one of the keys bound to *action*."""
        return any(matches_key(data, key) for key in self._bindings.get(action, ()))

    def get_keys(self, action: MenuAction) -> list[KeyId]:
        return list(self._bindings.get(action, []))


_global_menu_keybindings: MenuKeybindingsManager | None = None


def get_menu_keybindings() -> MenuKeybindingsManager:
    global _global_menu_keybindings
    if _global_menu_keybindings is None:
        _global_menu_keybindings = MenuKeybindingsManager()
    return _global_menu_keybindings


def set_menu_keybindings(manager: MenuKeybindingsManager) -> None:
    global _global_menu_keybindings
    _global_menu_keybindings = manager
