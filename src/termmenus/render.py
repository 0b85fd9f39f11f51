"""Frame building and repainting for menus anchored at a fixed cursor position.

Row builders are pure and return ``list[str]``; :class:`FrameWriter` places
those rows on a :class:`~termmenus.terminal.Terminal` relative to the anchor,
leaves the cursor at its resting spot and flushes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from termmenus.terminal import Terminal
from termmenus.theme import MenuTheme
from termmenus.utils import truncate_to_width, visible_width

NAVIGATE_HINT = "↑ and ↓ to navigate"
SELECT_HINT = "ENTER to select"
ASCII_NOTICE = "Only ASCII characters"
QUIT_LABEL = "Quit"

_RESET = "\x1b[0m"


@dataclass(frozen=True)
class Anchor:
    """1-based screen position of the cursor when the menu was opened."""

    row: int
    column: int


# ---------------------------------------------------------------------------
# Row builders
# ---------------------------------------------------------------------------


def list_rows(
    labels: Sequence[str],
    selected: int,
    prompt: str,
    theme: MenuTheme,
) -> list[str]:
    """One row per label; the highlighted one carries the prompt marker."""
    rows: list[str] = []
    for i, label in enumerate(labels):
        if i == selected:
            highlighted = theme.selected_text(label)
            rows.append(f"{prompt} {highlighted}" if prompt else highlighted)
        else:
            rows.append(theme.dim_text(label))
    return rows


def filter_rows(
    input_prompt: str,
    value: str,
    labels: Sequence[str],
    selected: int,
    prompt: str,
    theme: MenuTheme,
    notice: str | None = None,
) -> list[str]:
    """Input line, spacer or advisory, navigation hints, then the list.

    The hints are only shown while there is something to navigate.
    """
    rows = [theme.input_prompt(input_prompt) + value]
    if labels:
        rows.append(theme.notice(notice) if notice else "")
        rows.append(theme.hint(NAVIGATE_HINT))
        rows.append(theme.hint(SELECT_HINT))
        rows.extend(list_rows(labels, selected, prompt, theme))
    elif notice:
        rows.append(theme.notice(notice))
    return rows


def numbered_rows(
    title: str,
    labels: Sequence[str],
    quit_label: str,
    theme: MenuTheme,
) -> list[str]:
    rows = [title] if title else []
    for i, label in enumerate(labels):
        rows.append(f"{theme.ordinal(str(i + 1))}. {label}")
    rows.append(f"{theme.ordinal(quit_label)}. {QUIT_LABEL}")
    return rows


# ---------------------------------------------------------------------------
# FrameWriter
# ---------------------------------------------------------------------------


class FrameWriter:
    """Repaints one menu's region of the screen below its anchor."""

    def __init__(self, terminal: Terminal, anchor: Anchor, theme: MenuTheme) -> None:
        self._terminal = terminal
        self._anchor = anchor
        self._theme = theme

    def draw_list(
        self,
        title: str,
        labels: Sequence[str],
        selected: int,
        prompt: str,
    ) -> None:
        rows = [title] if title else []
        rows.extend(list_rows(labels, selected, prompt, self._theme))
        self._paint(rows)
        self._return_to_anchor()
        self._terminal.flush()

    def draw_filter(
        self,
        input_prompt: str,
        value: str,
        cursor: int,
        labels: Sequence[str],
        selected: int,
        prompt: str,
        notice: str | None = None,
    ) -> None:
        rows = filter_rows(
            input_prompt, value, labels, selected, prompt, self._theme, notice
        )
        self._paint(rows)
        self._return_to_anchor()
        self._terminal.move_right(visible_width(input_prompt) + cursor)
        self._terminal.flush()

    def draw_numbered(self, title: str, labels: Sequence[str], quit_label: str) -> None:
        self._paint(numbered_rows(title, labels, quit_label, self._theme))
        self._return_to_anchor()
        self._terminal.flush()

    def clear(self) -> None:
        """Remove the frame, leaving the cursor at the anchor."""
        self._begin()
        self._terminal.flush()

    def clear_filter(self) -> None:
        """Remove a filterable frame, leaving the cursor one row below the anchor."""
        self._begin()
        self._terminal.write("\r\n")
        self._terminal.flush()

    # -- internals ----------------------------------------------------------

    def _begin(self) -> None:
        self._return_to_anchor()
        self._terminal.clear_from_cursor()

    def _return_to_anchor(self) -> None:
        self._terminal.move_to(self._anchor.row, self._anchor.column)

    def _paint(self, rows: list[str]) -> None:
        self._begin()
        width = self._terminal.columns
        for i, row in enumerate(rows):
            if i == 0:
                available = width - self._anchor.column + 1
            else:
                self._terminal.write("\r\n")
                available = width
            clipped = truncate_to_width(row, available, "")
            if clipped != row and "\x1b[" in row:
                clipped += _RESET
            self._terminal.write(clipped)
