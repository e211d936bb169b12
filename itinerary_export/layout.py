"""Vertical layout cursor and text measurement for page-based exports."""
from __future__ import annotations

import unicodedata
from typing import Callable, List

from fpdf import FPDF

PDF_ENCODING = "windows-1252"

# A4 portrait, millimetres
PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN = 20.0


def pdf_text(text: str) -> str:
    """Keep characters the PDF core fonts can draw, transliterating the rest."""
    chars: List[str] = []
    for char in text:
        try:
            char.encode(PDF_ENCODING)
        except UnicodeEncodeError:
            normalized = unicodedata.normalize("NFKD", char)
            chars.append(normalized.encode("ascii", "ignore").decode("ascii"))
        else:
            chars.append(char)
    return "".join(chars)


class LayoutCursor:
    """Greedy page-break tracker.

    ``reserve`` decides whether the next block fits on the current page and
    starts a new page when it does not; ``advance`` moves past content that
    was actually placed.
    """

    def __init__(
        self,
        page_height: float = PAGE_HEIGHT,
        top_margin: float = MARGIN,
        bottom_margin: float = MARGIN,
    ) -> None:
        if page_height <= top_margin + bottom_margin:
            raise ValueError("page height must exceed the combined margins")
        self.page_height = page_height
        self.top_margin = top_margin
        self.bottom_margin = bottom_margin
        self.y = top_margin
        self.page_heights: List[float] = [0.0]

    @property
    def bottom(self) -> float:
        return self.page_height - self.bottom_margin

    @property
    def usable_height(self) -> float:
        return self.bottom - self.top_margin

    @property
    def page_count(self) -> int:
        return len(self.page_heights)

    @property
    def remaining(self) -> float:
        return self.bottom - self.y

    @property
    def at_page_top(self) -> bool:
        return self.y <= self.top_margin

    def reserve(self, height: float) -> bool:
        """Make room for a block of ``height``; return True if a page was added."""
        if height <= self.remaining or self.at_page_top:
            return False
        self.y = self.top_margin
        self.page_heights.append(0.0)
        return True

    def advance(self, height: float) -> None:
        self.y += height
        self._record()

    def gap(self, height: float) -> None:
        """Add spacing without ever pushing past the bottom margin."""
        self.y = min(self.y + height, max(self.bottom, self.y))
        self._record()

    def _record(self) -> None:
        self.page_heights[-1] = max(self.page_heights[-1], self.y - self.top_margin)


class FontMetrics:
    """String widths for the Helvetica core font, in millimetres."""

    def __init__(self, family: str = "Helvetica") -> None:
        self._pdf = FPDF(unit="mm", format="A4")
        self._pdf.core_fonts_encoding = PDF_ENCODING
        self._family = family

    def width(self, text: str, size: float, bold: bool = False) -> float:
        self._pdf.set_font(self._family, "B" if bold else "", size)
        return self._pdf.get_string_width(pdf_text(text))


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> List[str]:
    """Greedy word wrap; words wider than the column are split by character.

    Blank paragraphs between text become empty lines; leading and trailing
    blank paragraphs are dropped.
    """
    lines: List[str] = []
    for paragraph in text.splitlines():
        if not paragraph.strip():
            lines.append("")
            continue
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if measure(candidate) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
                current = ""
            while measure(word) > max_width and len(word) > 1:
                cut = len(word) - 1
                while cut > 1 and measure(word[:cut]) > max_width:
                    cut -= 1
                lines.append(word[:cut])
                word = word[cut:]
            current = word
        if current:
            lines.append(current)

    start, end = 0, len(lines)
    while start < end and not lines[start]:
        start += 1
    while end > start and not lines[end - 1]:
        end -= 1
    return lines[start:end]
