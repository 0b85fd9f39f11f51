"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

This module provides a ``VirtualTerminal`` class that satisfies the
``termmenus.terminal.Terminal`` protocol without performing any real I/O.
Output is captured for assertions and keys are replayed from a script.
"""

from __future__ import annotations

import contextlib
from collections import deque
from typing import Iterable, Iterator

from termmenus.terminal import KeySourceClosed


class VirtualTerminal:
    """In-memory terminal that records all writes for test inspection.

    Implements the ``Terminal`` protocol from ``termmenus.terminal``.

    Parameters
    ----------
    keys:
        Raw key sequences returned, in order, by ``read_key``. Once they run
        out ``read_key`` raises :class:`KeySourceClosed`.
    rows:
        Number of terminal rows (height).
    columns:
        Number of terminal columns (width).
    cursor:
        1-based ``(row, column)`` reported by ``cursor_position``.
    """

    def __init__(
        self,
        keys: Iterable[str] = (),
        rows: int = 50,
        columns: int = 80,
        cursor: tuple[int, int] = (5, 1),
    ) -> None:
        self._keys: deque[str] = deque(keys)
        self._rows = rows
        self._columns = columns
        self._cursor = cursor
        self._pending: list[str] = []
        self._frames: list[str] = []
        self.cursor_queries = 0
        self.keys_read = 0
        self.raw_mode_entered = 0
        self.raw_mode_exited = 0
        self.cursor_visible = True

    # -- Terminal protocol: properties --------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    # -- Terminal protocol: lifecycle ---------------------------------------

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        self.raw_mode_entered += 1
        try:
            yield
        finally:
            self.raw_mode_exited += 1

    # -- Terminal protocol: input -------------------------------------------

    def read_key(self) -> str:
        if not self._keys:
            raise KeySourceClosed("no more scripted keys")
        self.keys_read += 1
        return self._keys.popleft()

    def cursor_position(self) -> tuple[int, int]:
        self.cursor_queries += 1
        return self._cursor

    # -- Terminal protocol: output ------------------------------------------

    def write(self, data: str) -> None:
        self._pending.append(data)

    def flush(self) -> None:
        self._frames.append("".join(self._pending))
        self._pending.clear()

    # -- Terminal protocol: cursor/screen manipulation ----------------------

    def move_to(self, row: int, column: int) -> None:
        self.write(f"\x1b[{row};{column}H")

    def move_by(self, lines: int) -> None:
        if lines < 0:
            self.write(f"\x1b[{-lines}A")
        elif lines > 0:
            self.write(f"\x1b[{lines}B")

    def move_right(self, columns: int) -> None:
        if columns > 0:
            self.write(f"\x1b[{columns}C")

    def hide_cursor(self) -> None:
        self.cursor_visible = False
        self.write("\x1b[?25l")

    def show_cursor(self) -> None:
        self.cursor_visible = True
        self.write("\x1b[?25h")

    def clear_line(self) -> None:
        self.write("\x1b[2K\r")

    def clear_from_cursor(self) -> None:
        self.write("\x1b[0J")

    # -- Test helpers -------------------------------------------------------

    @property
    def frames(self) -> list[str]:
        """Output grouped by ``flush`` call."""
        return list(self._frames)

    @property
    def output(self) -> str:
        """Everything written so far, flushed or not."""
        return "".join(self._frames) + "".join(self._pending)

    @property
    def remaining_keys(self) -> int:
        return len(self._keys)
