"""Keyboard input decoding for terminal menus.

Turns raw terminal input (xterm/VT escape sequences, control bytes and
printable characters) into key identifiers such as ``"up"``, ``"ctrl+c"`` or
``"q"``, and compares raw input against caller-supplied identifiers.
"""

from __future__ import annotations

import re

KeyId = str

# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODIFIER_ORDER: tuple[str, ...] = ("ctrl", "shift", "alt")

NAMED_KEYS: dict[str, str] = {
    name.lower(): name
    for name in (
        "escape", "enter", "tab", "space", "backspace", "delete", "insert",
        "clear", "home", "end", "pageUp", "pageDown", "up", "down", "left",
        "right", "f1", "f2", "f3", "f4", "f5", "f6", "f7", "f8", "f9", "f10",
        "f11", "f12",
    )
}

KEY_ALIASES: dict[str, str] = {
    "esc": "escape",
    "return": "enter",
}

# Final byte of ``ESC [ 1 ; m X`` / ``ESC O X`` cursor-style sequences
CURSOR_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "E": "clear",
    "H": "home",
    "F": "end",
}

# Numeric parameter of ``ESC [ n ; m ~`` sequences
TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

SS3_KEYS: dict[str, str] = {
    **CURSOR_KEYS,
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

# Single characters with a name of their own
CONTROL_KEYS: dict[str, str] = {
    "\x1b": "escape",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    " ": "space",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x00": "ctrl+space",
}

_CSI_RE = re.compile(r"^\x1b\[(\d*)(?:;(\d+))?([A-Za-z~])$")
_SS3_RE = re.compile(r"^\x1bO([A-Z])$")

# xterm encodes modifiers as 1 + bitmask in the second CSI parameter
_MODIFIER_BITS: tuple[tuple[str, int], ...] = (("shift", 1), ("alt", 2), ("ctrl", 4))


# ---------------------------------------------------------------------------
# Key ID normalisation
# ---------------------------------------------------------------------------


def normalize_key_id(key_id: KeyId) -> KeyId:
    """Return the canonical form of *key_id*, as produced by :func:`parse_key`.

    Modifiers are lower-cased and ordered ``ctrl+shift+alt``, named keys are
    matched case-insensitively and ``esc``/``return`` resolve to
    ``escape``/``enter``. A lone character keeps its case unless it carries
    modifiers.
    """
    modifiers: set[str] = set()
    rest = key_id
    while True:
        head, sep, tail = rest.partition("+")
        if sep and tail and head.lower() in MODIFIER_ORDER:
            modifiers.add(head.lower())
            rest = tail
        else:
            break

    if len(rest) > 1:
        lowered = rest.lower()
        lowered = KEY_ALIASES.get(lowered, lowered)
        key = NAMED_KEYS.get(lowered, rest)
    elif modifiers:
        key = rest.lower()
    else:
        key = rest

    return _join_modifiers(modifiers, key)


def _join_modifiers(modifiers: set[str], key: str) -> KeyId:
    return "".join(f"{m}+" for m in MODIFIER_ORDER if m in modifiers) + key


# ---------------------------------------------------------------------------
# parse_key - determine what key was pressed from raw input
# ---------------------------------------------------------------------------


def _decode_escape_sequence(data: str) -> KeyId | None:
    match = _CSI_RE.match(data)
    if match:
        number, modifier, final = match.groups()
        if final == "Z":
            return "shift+tab"
        if final == "~":
            name = TILDE_KEYS.get(int(number)) if number else None
        elif number in ("", "1"):
            name = CURSOR_KEYS.get(final)
        else:
            name = None
        if name is None:
            return None
        if not modifier:
            return name
        mask = int(modifier) - 1
        return _join_modifiers({mod for mod, bit in _MODIFIER_BITS if mask & bit}, name)

    match = _SS3_RE.match(data)
    if match:
        return SS3_KEYS.get(match.group(1))
    return None


def parse_key(data: str) -> KeyId | None:
    """Parse raw terminal input and return the key identifier, or ``None``.

    The returned string uses the same format as ``matches_key`` expects:
    e.g. ``"a"``, ``"ctrl+a"``, ``"shift+tab"``, ``"f5"``.
    """
    if not data:
        return None

    if len(data) > 2 and data[0] == "\x1b":
        return _decode_escape_sequence(data)

    named = CONTROL_KEYS.get(data)
    if named is not None:
        return named

    if len(data) == 1:
        code = ord(data)
        if 1 <= code <= 26:
            return "ctrl+" + chr(code + ord("a") - 1)
        return data if data.isprintable() else None

    # ESC prefix: the terminal's encoding of Alt/Meta
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch.isupper():
            return "shift+alt+" + ch.lower()
        inner = parse_key(ch)
        if inner is None:
            return None
        return normalize_key_id("alt+" + inner)

    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if *data* (raw terminal input) decodes to *key_id*."""
    if not key_id:
        return False
    parsed = parse_key(data)
    return parsed is not None and parsed == normalize_key_id(key_id)


# ---------------------------------------------------------------------------
# Character helpers
# ---------------------------------------------------------------------------


def key_char(data: str) -> str | None:
    """Return the literal character typed, or ``None`` for non-character keys."""
    if len(data) == 1 and data.isprintable():
        return data
    return None


def is_ascii_char(char: str) -> bool:
    """Return ``True`` for a single printable ASCII character."""
    return len(char) == 1 and 0x20 <= ord(char) <= 0x7E


def describe_key(key_id: KeyId) -> str:
    """Return a short human label for *key_id*, used in menus and prompts."""
    normalized = normalize_key_id(key_id)
    if normalized == "escape":
        return "esc"
    return normalized
