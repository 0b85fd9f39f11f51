"""Terminal text utilities: ANSI-aware width measurement and truncation."""

from __future__ import annotations

import re
from typing import Iterator

import grapheme
import wcwidth

# SGR/CSI codes and BEL-terminated OSC strings occupy no columns
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]|\x1b\][^\x07]*\x07")

_VS16 = "\ufe0f"
_ZWJ = "\u200d"

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cluster_width(cluster: str) -> int:
    """Columns taken by one grapheme cluster; controls and lone marks take none."""
    if _VS16 in cluster or _ZWJ in cluster:
        return 2
    return max(max(wcwidth.wcwidth(ch) for ch in cluster), 0)


def _clusters(plain: str) -> Iterator[tuple[str, int]]:
    for cluster in grapheme.graphemes(plain):
        yield cluster, _cluster_width(cluster)


def _segments(text: str) -> Iterator[tuple[str, int]]:
    """Split *text* into ``(chunk, columns)`` pairs.

    Escape codes come through whole with a width of 0; everything between
    them is split into grapheme clusters.
    """
    pos = 0
    for match in _ANSI_RE.finditer(text):
        yield from _clusters(text[pos : match.start()])
        yield match.group(), 0
        pos = match.end()
    yield from _clusters(text[pos:])


def visible_width(text: str) -> int:
    """Number of terminal columns *text* occupies once escape codes are removed."""
    if not text:
        return 0
    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    width = _width_cache[text] = sum(columns for _, columns in _segments(text))
    return width


def truncate_to_width(text: str, max_width: int, ellipsis: str = "...") -> str:
    """Truncate *text* to fit within *max_width* visible columns.

    If the text is wider than *max_width*, it is cut on a grapheme boundary
    and *ellipsis* is appended (the ellipsis counts towards the width).
    Escape codes before the cut are kept.
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    room = max_width - visible_width(ellipsis)
    if room <= 0:
        return _take_columns(ellipsis, max_width)
    return _take_columns(text, room) + ellipsis


def _take_columns(text: str, max_cols: int) -> str:
    kept: list[str] = []
    used = 0
    for chunk, columns in _segments(text):
        if used + columns > max_cols:
            break
        kept.append(chunk)
        used += columns
    return "".join(kept)
