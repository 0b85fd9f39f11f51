"""termmenus: keyboard-driven selection menus for character-cell terminals."""

# Configuration
from termmenus.config import MenuConfig, load_config

# Keybindings
from termmenus.keybindings import (
    DEFAULT_MENU_KEYBINDINGS,
    MenuAction,
    MenuKeybindingsManager,
    get_menu_keybindings,
    set_menu_keybindings,
)

# Keyboard input handling
from termmenus.keys import Key, KeyId, matches_key, normalize_key_id, parse_key

# Line editing
from termmenus.line_editor import EditResult, LineEditor

# Menus
from termmenus.menus import Menus

# Rendering
from termmenus.render import Anchor, FrameWriter

# Selection state machine
from termmenus.selection import (
    MenuOutcome,
    Quit,
    Selected,
    SelectionState,
    UndefinedKey,
    select_numbered,
)

# Terminal interface and implementations
from termmenus.terminal import KeySourceClosed, ProcessTerminal, Terminal, ensure_minimum_size

# Theme
from termmenus.theme import MenuTheme, default_theme, plain_theme

# Utilities
from termmenus.utils import truncate_to_width, visible_width

__all__ = [
    # Configuration
    "MenuConfig",
    "load_config",
    # Keybindings
    "DEFAULT_MENU_KEYBINDINGS",
    "MenuAction",
    "MenuKeybindingsManager",
    "get_menu_keybindings",
    "set_menu_keybindings",
    # Keys
    "Key",
    "KeyId",
    "matches_key",
    "normalize_key_id",
    "parse_key",
    # Line editing
    "EditResult",
    "LineEditor",
    # Menus
    "Menus",
    # Rendering
    "Anchor",
    "FrameWriter",
    # Selection
    "MenuOutcome",
    "Quit",
    "Selected",
    "SelectionState",
    "UndefinedKey",
    "select_numbered",
    # Terminal
    "KeySourceClosed",
    "ProcessTerminal",
    "Terminal",
    "ensure_minimum_size",
    # Theme
    "MenuTheme",
    "default_theme",
    "plain_theme",
    # Utilities
    "truncate_to_width",
    "visible_width",
]
