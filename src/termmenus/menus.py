"""Interactive selection menus: plain list, filterable list and numbered.

Every menu records the cursor position once when it opens, then loops:
redraw, block for one key, apply it, and either redraw or clear and return.
"""

from __future__ import annotations

import contextlib
import functools
import logging
from typing import Callable, Iterable, Iterator, TypeVar

from termmenus.keybindings import MenuKeybindingsManager
from termmenus.keys import KeyId, describe_key
from termmenus.line_editor import LineEditor
from termmenus.render import ASCII_NOTICE, Anchor, FrameWriter
from termmenus.selection import MenuOutcome, Selected, SelectionState, select_numbered
from termmenus.terminal import ProcessTerminal, Terminal, ensure_minimum_size
from termmenus.theme import MenuTheme, default_theme

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _raw_mode_call(method):
    @functools.wraps(method)
    def wrapper(self: Menus, *args, **kwargs):
        with self._session():
            return method(self, *args, **kwargs)

    return wrapper


class Menus:
    """Owns a terminal and draws selection menus on it.

    Use as a context manager to keep the terminal in raw mode for the whole
    session; the previous mode is restored however the block exits::

        with Menus() as menus:
            index = menus.select_menu(["one", "two"], "Pick one", ">")

    A menu called outside a ``with`` block puts the terminal in raw mode for
    that one call.
    """

    def __init__(
        self,
        terminal: Terminal | None = None,
        *,
        theme: MenuTheme | None = None,
        keybindings: MenuKeybindingsManager | None = None,
        check_size: bool = True,
    ) -> None:
        self._terminal: Terminal = terminal if terminal is not None else ProcessTerminal()
        self._theme = theme or default_theme()
        self._keybindings = keybindings
        self._exit_stack: contextlib.ExitStack | None = None
        if check_size:
            ensure_minimum_size(self._terminal)

    def __enter__(self) -> Menus:
        stack = contextlib.ExitStack()
        stack.enter_context(self._terminal.raw_mode())
        self._exit_stack = stack
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._exit_stack is not None:
            stack, self._exit_stack = self._exit_stack, None
            stack.close()

    @contextlib.contextmanager
    def _session(self) -> Iterator[None]:
        if self._exit_stack is not None:
            yield
            return
        with self._terminal.raw_mode():
            yield

    @property
    def terminal(self) -> Terminal:
        return self._terminal

    # -- cursor and status helpers ------------------------------------------

    def cursor_hide(self) -> None:
        self._terminal.hide_cursor()

    def cursor_show(self) -> None:
        self._terminal.show_cursor()

    def text(self, message: str) -> None:
        """Replace the line just above the cursor with *message*."""
        self._terminal.move_by(-1)
        self._terminal.clear_line()
        self._terminal.write(message)
        self._terminal.move_by(1)
        self._terminal.write("\r")
        self._terminal.flush()

    def textln(self, message: str) -> None:
        """Like :meth:`text`, then advance the cursor to a fresh line."""
        self.text(message)
        self._terminal.write("\n")
        self._terminal.flush()

    # -- menus ----------------------------------------------------------------

    @_raw_mode_call
    def select_menu(
        self,
        items: Iterable[T],
        title: str,
        prompt: str,
        quit: KeyId | None = None,
        formatter: Callable[[T], str] = str,
    ) -> int | None:
        """Let the user move through *items* with the arrow keys and pick one.

        *items* is iterated once per redraw, so it must be reusable. Returns
        the index of the chosen item, or ``None`` on the interrupt key, the
        *quit* key, or Enter on an empty list.
        """
        state = SelectionState(sum(1 for _ in items), self._keybindings)
        frame = FrameWriter(self._terminal, self._anchor(), self._theme)
        logger.debug("select_menu opened with %d items", state.length)

        while True:
            labels = [formatter(item) for item in items]
            frame.draw_list(title, labels, state.index, prompt)
            outcome = state.handle_input(self._terminal.read_key(), quit)
            if outcome is not None:
                break

        frame.clear()
        logger.debug("select_menu finished: %s", outcome)
        return outcome.index if isinstance(outcome, Selected) else None

    @_raw_mode_call
    def select_menu_with_input(
        self,
        lister: Callable[[str], list[T]],
        prompt: str,
        input_prompt: str,
        quit: KeyId | None = None,
        formatter: Callable[[T], str] = str,
    ) -> T | None:
        """Filterable menu: typed text is passed to *lister* to rebuild the list.

        *lister* is called with the current input once up front and again
        after every key that changes the input. The chosen item is removed
        from the list *lister* returned and handed back; ``None`` means
        nothing was chosen.
        """
        editor = LineEditor(self._keybindings)
        state = SelectionState(0, self._keybindings)
        frame = FrameWriter(self._terminal, self._anchor(), self._theme)

        items = list(lister(editor.value))
        state.resize(len(items))
        logger.debug("select_menu_with_input opened with %d items", len(items))

        notice: str | None = None
        while True:
            frame.draw_filter(
                input_prompt,
                editor.value,
                editor.cursor,
                [formatter(item) for item in items],
                state.index,
                prompt,
                notice,
            )
            notice = None

            data = self._terminal.read_key()
            edit = editor.handle_input(data)
            if edit == "rejected":
                notice = ASCII_NOTICE
                continue
            if edit in ("inserted", "deleted"):
                items = list(lister(editor.value))
                state.resize(len(items))
                logger.debug("filter %r matched %d items", editor.value, len(items))
                continue
            if edit != "unhandled":
                continue

            outcome = state.handle_input(data, quit)
            if outcome is not None:
                break

        frame.clear_filter()
        logger.debug("select_menu_with_input finished: %s", outcome)
        if isinstance(outcome, Selected):
            return items.pop(outcome.index)
        return None

    @_raw_mode_call
    def select_menu_numbered(
        self,
        items: Iterable[T],
        quit: KeyId,
        title: str,
        formatter: Callable[[T], str] = str,
    ) -> MenuOutcome:
        """Show *items* numbered from 1 and resolve exactly one keystroke.

        Returns :class:`Selected`, :class:`Quit`, or :class:`UndefinedKey`
        for anything else, so the caller can decide whether to ask again.
        """
        labels = [formatter(item) for item in items]
        frame = FrameWriter(self._terminal, self._anchor(), self._theme)
        frame.draw_numbered(title, labels, describe_key(quit))

        data = self._terminal.read_key()
        frame.clear()

        outcome = select_numbered(data, len(labels), quit, self._keybindings)
        logger.debug("select_menu_numbered finished: %s", outcome)
        return outcome

    def _anchor(self) -> Anchor:
        row, column = self._terminal.cursor_position()
        return Anchor(row, column)
