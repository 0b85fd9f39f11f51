"""StdinBuffer buffers input and yields complete key sequences.

Terminal reads can return partial chunks, especially for escape sequences
like arrow keys. Without buffering, a partial sequence would be
misinterpreted as an Escape press followed by ordinary characters.
"""

from __future__ import annotations

from collections import deque

ESC = "\x1b"
BEL = "\x07"
ST = ESC + "\\"


def sequence_length(data: str) -> int | None:
    """Length of the key sequence at the start of *data*.

    Returns ``None`` while an escape sequence is still missing bytes.
    *data* must not be empty.
    """
    if data[0] != ESC:
        return 1
    if len(data) == 1:
        return None

    kind = data[1]
    if kind == "[":
        # CSI: parameter and intermediate bytes, then one final byte
        for i in range(2, len(data)):
            if 0x40 <= ord(data[i]) <= 0x7E:
                return i + 1
        return None
    if kind == "O":
        return 3 if len(data) >= 3 else None
    if kind in "]P_":
        # OSC / DCS / APC run until ST (OSC may also end in BEL)
        for i in range(2, len(data)):
            if kind == "]" and data[i] == BEL:
                return i + 1
            if data.startswith(ST, i):
                return i + 2
        return None
    # Meta key: ESC followed by a single character
    return 2


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is an incomplete
    escape sequence waiting for more input.
    """
    sequences: list[str] = []
    while buffer:
        length = sequence_length(buffer)
        if length is None:
            break
        sequences.append(buffer[:length])
        buffer = buffer[length:]
    return sequences, buffer


class StdinBuffer:
    """Accumulates decoded input and hands out one key sequence at a time.

    An incomplete escape sequence is held back until more data arrives or
    :meth:`flush` forces it out (a lone ESC press looks exactly like the
    start of an arrow key until the terminal goes quiet).
    """

    def __init__(self) -> None:
        self._buffer: str = ""
        self._sequences: deque[str] = deque()

    def process(self, data: str) -> None:
        """Feed input data into the buffer."""
        sequences, self._buffer = split_sequences(self._buffer + data)
        self._sequences.extend(sequences)

    def flush(self) -> None:
        """Emit any held-back partial sequence as-is."""
        if self._buffer:
            self._sequences.append(self._buffer)
            self._buffer = ""

    def pop(self) -> str | None:
        """Return the next complete sequence, or ``None`` if there is none."""
        if self._sequences:
            return self._sequences.popleft()
        return None

    def push_front(self, sequence: str) -> None:
        """Return *sequence* to the head of the queue."""
        self._sequences.appendleft(sequence)

    @property
    def has_sequences(self) -> bool:
        return bool(self._sequences)

    @property
    def pending(self) -> str:
        """The incomplete tail waiting for more data."""
        return self._buffer

    def clear(self) -> None:
        self._buffer = ""
        self._sequences.clear()
