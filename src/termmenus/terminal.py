"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, cursor visibility and positioning,
cursor position reports, and blocking key reads via ANSI escape sequences.
"""

from __future__ import annotations

import codecs
import contextlib
import logging
import os
import re
import select
import sys
import termios
import tty
from typing import IO, Iterator, Protocol

from termmenus.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_LINE = "\x1b[2K\r"
_CLEAR_FROM_CURSOR = "\x1b[0J"
_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_DOWN_FMT = "\x1b[{}B"
_CURSOR_RIGHT_FMT = "\x1b[{}C"
_CURSOR_GOTO_FMT = "\x1b[{};{}H"
_REQUEST_CURSOR_POSITION = "\x1b[6n"

_CURSOR_POSITION_RE = re.compile(r"^\x1b\[(\d+);(\d+)R$")

# Idle time after which a held-back ESC is taken to be a plain Escape press.
_ESCAPE_TIMEOUT = 0.05

# Silence after which a cursor position query is given up.
_CURSOR_REPORT_TIMEOUT = 1.0

MIN_COLUMNS = 46
MIN_ROWS = 29


class KeySourceClosed(EOFError):
    """The terminal input reached end-of-file while a key was awaited."""


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def raw_mode(self) -> contextlib.AbstractContextManager[None]: ...

    def read_key(self) -> str: ...

    def cursor_position(self) -> tuple[int, int]: ...

    def write(self, data: str) -> None: ...

    def flush(self) -> None: ...

    def move_to(self, row: int, column: int) -> None: ...

    def move_by(self, lines: int) -> None: ...

    def move_right(self, columns: int) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_line(self) -> None: ...

    def clear_from_cursor(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by a tty file descriptor and an output stream.

    Output is buffered until :meth:`flush`. Input is read with blocking
    ``os.read`` calls and split into key sequences by :class:`StdinBuffer`.
    """

    def __init__(
        self,
        stdin_fd: int | None = None,
        stdout: IO[str] | None = None,
    ) -> None:
        self._stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self._stdout = sys.stdout if stdout is None else stdout
        self._pending: list[str] = []
        self._stdin_buffer = StdinBuffer()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="strict")
        self._write_log_path: str = os.environ.get("TERMMENUS_WRITE_LOG", "")

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- raw mode -----------------------------------------------------------

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Context manager that keeps the tty in raw mode for its body.

        The saved attributes are restored and the cursor shown again on
        every exit path.
        """
        saved = termios.tcgetattr(self._stdin_fd)
        tty.setraw(self._stdin_fd)
        logger.debug("raw mode enabled on fd %d", self._stdin_fd)
        try:
            yield
        finally:
            try:
                self.show_cursor()
                self.flush()
            finally:
                termios.tcsetattr(self._stdin_fd, termios.TCSADRAIN, saved)
                logger.debug("raw mode disabled on fd %d", self._stdin_fd)

    # -- input --------------------------------------------------------------

    def read_key(self) -> str:
        """Block until one complete key sequence is available and return it.

        Input that is not valid UTF-8 raises :class:`UnicodeDecodeError`.
        """
        return self._next_sequence()

    def cursor_position(self) -> tuple[int, int]:
        """Query the terminal for the 1-based ``(row, column)`` of the cursor.

        Keys typed before the report arrives are kept for :meth:`read_key`.
        Raises :class:`TimeoutError` if the terminal stays silent for
        ``_CURSOR_REPORT_TIMEOUT`` seconds without answering.
        """
        self.write(_REQUEST_CURSOR_POSITION)
        self.flush()

        held: list[str] = []
        try:
            while True:
                sequence = self._next_sequence(_CURSOR_REPORT_TIMEOUT)
                match = _CURSOR_POSITION_RE.match(sequence)
                if match:
                    row, column = int(match.group(1)), int(match.group(2))
                    logger.debug("cursor position report: row=%d column=%d", row, column)
                    return row, column
                held.append(sequence)
        finally:
            for sequence in reversed(held):
                self._stdin_buffer.push_front(sequence)

    def _next_sequence(self, timeout: float | None = None) -> str:
        while True:
            sequence = self._stdin_buffer.pop()
            if sequence is not None:
                return sequence

            if self._stdin_buffer.pending and not self._input_ready(_ESCAPE_TIMEOUT):
                self._stdin_buffer.flush()
                continue

            if timeout is not None and not self._input_ready(timeout):
                raise TimeoutError(f"no reply from terminal within {timeout}s")
            self._read_chunk()

    def _input_ready(self, timeout: float) -> bool:
        readable, _, _ = select.select([self._stdin_fd], [], [], timeout)
        return bool(readable)

    def _read_chunk(self) -> None:
        raw = os.read(self._stdin_fd, 4096)
        if not raw:
            raise KeySourceClosed("terminal input closed")
        self._stdin_buffer.process(self._decoder.decode(raw))

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        self._pending.append(data)

    def flush(self) -> None:
        """Write buffered output to the stream and optionally the write log."""
        if not self._pending:
            return
        data = "".join(self._pending)
        self._pending.clear()
        self._stdout.write(data)
        self._stdout.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass

    # -- cursor / screen manipulation --------------------------------------

    def move_to(self, row: int, column: int) -> None:
        self.write(_CURSOR_GOTO_FMT.format(max(1, row), max(1, column)))

    def move_by(self, lines: int) -> None:
        """Move the cursor up (negative) or down (positive) by *lines*."""
        if lines < 0:
            self.write(_CURSOR_UP_FMT.format(-lines))
        elif lines > 0:
            self.write(_CURSOR_DOWN_FMT.format(lines))

    def move_right(self, columns: int) -> None:
        if columns > 0:
            self.write(_CURSOR_RIGHT_FMT.format(columns))

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)

    def clear_line(self) -> None:
        self.write(_CLEAR_LINE)

    def clear_from_cursor(self) -> None:
        self.write(_CLEAR_FROM_CURSOR)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def ensure_minimum_size(
    terminal: Terminal,
    rows: int = MIN_ROWS,
    columns: int = MIN_COLUMNS,
) -> None:
    """Exit the process when the terminal is smaller than a menu can use."""
    if terminal.rows < rows or terminal.columns < columns:
        logger.debug(
            "terminal %dx%d below minimum %dx%d",
            terminal.columns, terminal.rows, columns, rows,
        )
        print("Terminal screen too small", file=sys.stderr)
        sys.exit(1)
