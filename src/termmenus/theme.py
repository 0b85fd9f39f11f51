"""Styling for menu rows, prompts and advisories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

# ── ANSI helpers ─────────────────────────────────────────────────────

_BLACK_ON_WHITE = "\x1b[30m\x1b[47m"
_FAINT = "\x1b[2m"
_MAGENTA = "\x1b[35m"
_GREEN = "\x1b[32m"
_YELLOW = "\x1b[33m"
_RESET = "\x1b[0m"


def _wrap(code: str) -> Callable[[str], str]:
    def style(text: str) -> str:
        return f"{code}{text}{_RESET}"

    return style


def _identity(text: str) -> str:
    return text


@dataclass
class MenuTheme:
    """Styling functions applied to each part of a menu frame."""

    selected_text: Callable[[str], str] = _identity
    dim_text: Callable[[str], str] = _identity
    input_prompt: Callable[[str], str] = _identity
    ordinal: Callable[[str], str] = _identity
    hint: Callable[[str], str] = _identity
    notice: Callable[[str], str] = _identity


def default_theme() -> MenuTheme:
    return MenuTheme(
        selected_text=_wrap(_BLACK_ON_WHITE),
        dim_text=_wrap(_FAINT),
        input_prompt=_wrap(_MAGENTA),
        ordinal=_wrap(_GREEN),
        hint=_identity,
        notice=_wrap(_YELLOW),
    )


def plain_theme() -> MenuTheme:
    """Theme with no ANSI styling, for NO_COLOR terminals and tests."""
    return MenuTheme()
