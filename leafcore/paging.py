"""Splitting a document's text into printed pages of fixed-height lines."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass

__all__ = ["PageLayout"]


def _wrap(line: str, width: int | None) -> list[str]:
    if width is None or len(line) <= width:
        return [line]
    pieces = textwrap.wrap(
        line,
        width,
        expand_tabs=False,
        replace_whitespace=False,
        drop_whitespace=False,
    )
    return pieces or [line]


@dataclass(frozen=True)
class PageLayout:
    """Text laid out as lines, ``lines_per_page`` of them to a page."""

    lines: tuple[str, ...]
    lines_per_page: int
    text_height: float

    @classmethod
    def from_text(
        cls,
        text: str,
        page_height: float,
        text_height: float,
        wrap_width: int | None = None,
    ) -> PageLayout:
        """Lay out ``text`` with trailing whitespace removed.

        ``wrap_width`` is counted in characters; lines longer than that are
        wrapped.  Each line takes ``text_height`` of the ``page_height``.
        """
        if text_height <= 0:
            raise ValueError("text height must be positive")
        if wrap_width is not None and wrap_width < 1:
            raise ValueError("wrap width must be at least 1")
        lines_per_page = int(page_height / text_height)
        if lines_per_page < 1:
            raise ValueError("page is too short to hold a line")
        lines = tuple(
            piece
            for line in text.rstrip().split("\n")
            for piece in _wrap(line, wrap_width)
        )
        return cls(lines, lines_per_page, text_height)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def n_pages(self) -> int:
        return (self.line_count - 1) // self.lines_per_page + 1

    def _check_page(self, page_nr: int) -> None:
        if not 0 <= page_nr < self.n_pages:
            raise IndexError(f"page {page_nr} is out of range")

    def lines_on_page(self, page_nr: int) -> list[str]:
        """Return the lines printed on page ``page_nr``, counting from 0."""
        self._check_page(page_nr)
        first = self.lines_per_page * page_nr
        return list(self.lines[first:first + self.lines_per_page])

    def line_offsets(self, page_nr: int) -> list[float]:
        """Return the baseline of each line on page ``page_nr``."""
        return [
            self.text_height * (index + 1)
            for index, _ in enumerate(self.lines_on_page(page_nr))
        ]

    def page_label(self, page_nr: int) -> str:
        """Return the ``n / total`` label printed in the page header."""
        self._check_page(page_nr)
        return f"{page_nr + 1} / {self.n_pages}"