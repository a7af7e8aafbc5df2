"""Forward and backward text search with optional caseless matching.

Caseless matching folds case and applies compatibility decomposition to
both sides, so that "Straße" matches "STRASSE" and a precomposed accented
letter matches its decomposed form.  Positions are character offsets into
the searched text, and a needle may span several lines.
"""

from __future__ import annotations

import enum
import unicodedata
from dataclasses import dataclass

__all__ = [
    "SearchFlags",
    "Match",
    "casefold_find",
    "casefold_rfind",
    "caseless_match",
    "split_keep_delimiter",
    "forward_search",
    "backward_search",
]

_UNKNOWN_CHAR = "\ufffc"


class SearchFlags(enum.IntFlag):
    """Options that change how a search matches."""

    NONE = 0
    VISIBLE_ONLY = 1 << 0
    TEXT_ONLY = 1 << 1
    CASE_INSENSITIVE = 1 << 2


@dataclass(frozen=True)
class Match:
    """A found range: ``start`` is the first matched character, ``end`` the one after."""

    start: int
    end: int


def _fold(text: str) -> str:
    return unicodedata.normalize("NFKD", text.casefold())


def _original_offset(haystack: str, offset: int) -> int:
    """Map an offset in the folded haystack back onto the haystack itself."""
    pos = 0
    for ch in haystack:
        if offset <= 0:
            break
        offset -= len(_fold(ch))
        pos += 1
    return pos


def casefold_find(haystack: str, needle: str) -> int | None:
    """Return the index in ``haystack`` of the first caseless match of ``needle``."""
    if not needle:
        return 0
    folded_needle = _fold(needle)
    folded = _fold(haystack)
    if len(folded) < len(folded_needle):
        return None
    index = folded.find(folded_needle)
    if index < 0:
        return None
    return _original_offset(haystack, index)


def casefold_rfind(haystack: str, needle: str) -> int | None:
    """Return the index in ``haystack`` of the last caseless match of ``needle``."""
    if not needle:
        return 0
    folded_needle = _fold(needle)
    folded = _fold(haystack)
    if len(folded) < len(folded_needle):
        return None
    index = folded.rfind(folded_needle)
    if index < 0:
        return None
    return _original_offset(haystack, index)


def caseless_match(s1: str, s2: str) -> bool:
    """Tell whether ``s1`` begins with ``s2``, ignoring case; empty strings never match."""
    if not s1 or not s2:
        return False
    return _fold(s1).startswith(_fold(s2))


def split_keep_delimiter(
    string: str, delimiter: str, max_tokens: int = -1
) -> list[str]:
    """Split ``string`` after each ``delimiter``, keeping it, and fold every piece.

    At most ``max_tokens`` delimited pieces are cut off; whatever follows is
    kept as one last piece.  A value below 1 means no limit.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    remaining = max_tokens if max_tokens >= 1 else -1
    pieces: list[str] = []
    rest = string
    cut = rest.find(delimiter)
    while cut >= 0:
        end = cut + len(delimiter)
        pieces.append(_fold(rest[:end]))
        rest = rest[end:]
        remaining -= 1
        if remaining == 0:
            break
        cut = rest.find(delimiter)
    if rest:
        pieces.append(_fold(rest))
    return pieces


def _line_start(text: str, pos: int) -> int:
    return text.rfind("\n", 0, pos) + 1


def _next_line(text: str, pos: int) -> int:
    found = text.find("\n", pos)
    return len(text) if found < 0 else found + 1


def _advance(
    text: str, pos: int, count: int, skip_nontext: bool, skip_decomp: bool
) -> int:
    """Move forward ``count`` folded characters, skipping object placeholders."""
    while count > 0:
        if pos >= len(text):
            return pos
        ch = text[pos]
        ignored = skip_nontext and ch == _UNKNOWN_CHAR
        if not ignored and skip_decomp:
            count -= len(unicodedata.normalize("NFKD", ch)) - 1
        pos += 1
        if not ignored:
            count -= 1
    return pos


def _line_text(text: str, start: int, end: int, slice_: bool) -> str:
    chunk = text[start:end]
    return chunk if slice_ else chunk.replace(_UNKNOWN_CHAR, "")


def _match_rest(
    text: str, pos: int, lines: list[str], slice_: bool, first: bool
) -> Match | None:
    """Match ``lines`` from ``pos``; the first line may match anywhere in its line."""
    match_start = pos
    for index, needle_line in enumerate(lines):
        if not needle_line:
            break
        nxt = _next_line(text, pos)
        if nxt == pos:
            return None
        line_text = _line_text(text, pos, nxt, slice_)
        if first and index == 0:
            found = casefold_find(line_text, needle_line)
        else:
            found = 0 if caseless_match(line_text, needle_line) else None
        if found is None:
            return None
        pos = _advance(text, pos, found, not slice_, False)
        if first and index == 0:
            match_start = pos
        pos = _advance(text, pos, len(needle_line), not slice_, True)
    return Match(match_start, pos)


def _backward_match(
    text: str, pos: int, lines: list[str], slice_: bool
) -> Match | None:
    if not lines or not lines[0]:
        return Match(pos, pos)
    line_end = pos
    if pos == _line_start(text, pos):
        if pos == 0:
            return None
        begin = _line_start(text, pos - 1)
    else:
        begin = _line_start(text, pos)
    line_text = _line_text(text, begin, line_end, slice_)
    found = casefold_rfind(line_text, lines[0])
    if found is None:
        return None
    start = _advance(text, begin, found, not slice_, False)
    after = _advance(text, start, len(lines[0]), not slice_, True)
    rest = _match_rest(text, after, lines[1:], slice_, first=False)
    if rest is None:
        return None
    return Match(start, rest.end)


def _check_position(text: str, start: int) -> None:
    if not 0 <= start <= len(text):
        raise ValueError(f"position {start} is outside the text")


def forward_search(
    text: str,
    start: int,
    needle: str,
    flags: SearchFlags | int = SearchFlags.NONE,
    limit: int | None = None,
) -> Match | None:
    """Find the first match of ``needle`` at or after ``start``, ending before ``limit``."""
    _check_position(text, start)
    flags = SearchFlags(flags)
    if limit is not None and start >= limit:
        return None

    if not needle:
        if start >= len(text):
            return None
        spot = start + 1
        if limit is not None and spot == limit:
            return None
        return Match(spot, spot)

    if not flags & SearchFlags.CASE_INSENSITIVE:
        index = text.find(needle, start)
        if index < 0:
            return None
        end = index + len(needle)
        if limit is not None and end > limit:
            return None
        return Match(index, end)

    slice_ = not flags & SearchFlags.TEXT_ONLY
    lines = split_keep_delimiter(needle, "\n", -1)
    search = start
    while True:
        if limit is not None and search >= limit:
            return None
        found = _match_rest(text, search, lines, slice_, first=True)
        if found is not None:
            if limit is None or found.end < limit:
                return found
            return None
        search = _next_line(text, search)
        if search >= len(text):
            return None


def backward_search(
    text: str,
    start: int,
    needle: str,
    flags: SearchFlags | int = SearchFlags.NONE,
    limit: int | None = None,
) -> Match | None:
    """Find the last match of ``needle`` before ``start``, not reaching back past ``limit``."""
    _check_position(text, start)
    flags = SearchFlags(flags)
    if limit is not None and start <= limit:
        return None

    if not needle:
        if start == 0:
            return None
        spot = start - 1
        if limit is not None and spot == limit:
            return None
        return Match(spot, spot)

    if not flags & SearchFlags.CASE_INSENSITIVE:
        index = text.rfind(needle, 0, start)
        if index < 0:
            return None
        if limit is not None and index < limit:
            return None
        return Match(index, index + len(needle))

    slice_ = not flags & SearchFlags.TEXT_ONLY
    lines = split_keep_delimiter(needle, "\n", -1)
    search = start
    while True:
        if limit is not None and search <= limit:
            return None
        found = _backward_match(text, search, lines, slice_)
        if found is not None:
            if limit is None or found.end > limit:
                return found
            return None
        line_start = _line_start(text, search)
        if search == line_start:
            if search == 0:
                return None
            search = _line_start(text, search - 1)
        else:
            search = line_start