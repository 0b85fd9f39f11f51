"""Configuration for termmenus. Reads keybindings from ~/.termmenus/keybindings.json."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from termmenus.keybindings import MENU_ACTIONS, MenuKeybindingsConfig, MenuKeybindingsManager
from termmenus.theme import MenuTheme, default_theme, plain_theme

logger = logging.getLogger(__name__)


@dataclass
class MenuConfig:
    keybindings: MenuKeybindingsManager = field(default_factory=MenuKeybindingsManager)
    theme: MenuTheme = field(default_factory=default_theme)


def _get_config_dir() -> Path:
    return Path(os.environ.get("TERMMENUS_CONFIG_DIR", Path.home() / ".termmenus"))


def _get_keybindings_path() -> Path:
    return _get_config_dir() / "keybindings.json"


def color_enabled() -> bool:
    return not (os.environ.get("NO_COLOR") or os.environ.get("TERMMENUS_NO_COLOR"))


def keybindings_from_dict(data: object) -> MenuKeybindingsConfig:
    """Validate a decoded keybindings document, dropping unusable entries."""
    if not isinstance(data, dict):
        raise ValueError("keybindings must be a JSON object")

    config: MenuKeybindingsConfig = {}
    for action, keys in data.items():
        if action not in MENU_ACTIONS:
            logger.warning("ignoring unknown menu action %r", action)
            continue
        if isinstance(keys, str):
            config[action] = keys
        elif isinstance(keys, list) and all(isinstance(k, str) for k in keys):
            config[action] = list(keys)
        else:
            logger.warning("ignoring keybinding for %r: expected a key or list of keys", action)
    return config


def load_keybindings_config() -> MenuKeybindingsConfig:
    path = _get_keybindings_path()
    if not path.exists():
        return {}
    try:
        return keybindings_from_dict(json.loads(path.read_text()))
    except (OSError, ValueError) as e:
        logger.warning("Error reading keybindings from %s: %s", path, e)
        return {}


def load_config() -> MenuConfig:
    return MenuConfig(
        keybindings=MenuKeybindingsManager(load_keybindings_config()),
        theme=default_theme() if color_enabled() else plain_theme(),
    )
