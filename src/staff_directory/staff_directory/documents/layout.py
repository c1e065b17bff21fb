"""Page layout arithmetic for the PDF renderers.

Coordinates follow the PDF convention: origin at the bottom-left corner, y
grows upwards. The cursor walks down the page; a block that would cross the
bottom margin starts on a new page instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from reportlab.pdfbase.pdfmetrics import stringWidth

Measure = Callable[[str, str, float], float]

DEFAULT_LINE_SPACING = 1.25
ELLIPSIS = "..."


@dataclass(frozen=True)
class PageGeometry:
    width: float
    height: float
    margin_left: float = 50
    margin_right: float = 50
    margin_top: float = 50
    margin_bottom: float = 50

    @property
    def left(self) -> float:
        return self.margin_left

    @property
    def right(self) -> float:
        return self.width - self.margin_right

    @property
    def top(self) -> float:
        return self.height - self.margin_top

    @property
    def bottom(self) -> float:
        return self.margin_bottom

    @property
    def content_width(self) -> float:
        return self.right - self.left

    @property
    def content_height(self) -> float:
        return self.top - self.bottom


@dataclass(frozen=True)
class Column:
    x: float
    width: float

    @property
    def right(self) -> float:
        return self.x + self.width


def line_height(font_size: float, spacing: float = DEFAULT_LINE_SPACING) -> float:
    return font_size * spacing


def columns(total_width: float, weights: Sequence[float], x0: float = 0) -> List[Column]:
    """Place columns left to right, sized in proportion to their weights."""
    total = float(sum(weights))
    if total <= 0:
        raise ValueError("Column weights must add up to a positive number")

    out: List[Column] = []
    x = x0
    for w in weights:
        width = total_width * (w / total)
        out.append(Column(x=x, width=width))
        x += width
    return out


class LayoutCursor:
    """Tracks the vertical write position and the current page number.

    ``on_new_page`` is invoked after the cursor moved to the top of a fresh
    page; renderers use it to finish the canvas page and redraw repeated
    headers (advancing the cursor past them).
    """

    def __init__(self, geometry: PageGeometry, *, on_new_page: Optional[Callable[["LayoutCursor"], None]] = None):
        self.geometry = geometry
        self.y = geometry.top
        self.page_number = 1
        self._on_new_page = on_new_page

    @property
    def remaining(self) -> float:
        return self.y - self.geometry.bottom

    @property
    def at_page_top(self) -> bool:
        return self.y == self.geometry.top

    def fits(self, height: float) -> bool:
        return self.y - height >= self.geometry.bottom

    def advance(self, height: float) -> None:
        self.y -= height

    def new_page(self) -> None:
        self.page_number += 1
        self.y = self.geometry.top
        if self._on_new_page:
            self._on_new_page(self)

    def ensure_space(self, height: float) -> bool:
        """Break the page when ``height`` does not fit. Returns True on a break.

        A block taller than a whole page is placed at the top of a page and
        overflows; breaking again would never make it fit.
        """
        if self.fits(height) or self.at_page_top:
            return False
        self.new_page()
        return True

    def take(self, height: float) -> float:
        """Reserve ``height`` points and return the y of the block's top edge."""
        self.ensure_space(height)
        top = self.y
        self.advance(height)
        return top


def wrap_text(text: str, font_name: str, font_size: float, width: float, measure: Measure = stringWidth) -> List[str]:
    """Greedy word wrap. Words wider than ``width`` are split across lines."""
    lines: List[str] = []
    for paragraph in (text or "").splitlines() or [""]:
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if measure(candidate, font_name, font_size) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            current = ""
            while measure(word, font_name, font_size) > width and len(word) > 1:
                cut = _longest_prefix(word, font_name, font_size, width, measure)
                lines.append(word[:cut])
                word = word[cut:]
            current = word
        lines.append(current)
    return lines


def _longest_prefix(word: str, font_name: str, font_size: float, width: float, measure: Measure) -> int:
    cut = 1
    while cut < len(word) and measure(word[: cut + 1], font_name, font_size) <= width:
        cut += 1
    return cut


def fit_text(text: str, font_name: str, font_size: float, width: float, measure: Measure = stringWidth) -> str:
    """Single-line form of ``text`` that fits ``width``, truncated with an ellipsis."""
    text = (text or "").replace("\n", " ")
    if measure(text, font_name, font_size) <= width:
        return text
    while text and measure(text.rstrip() + ELLIPSIS, font_name, font_size) > width:
        text = text[:-1]
    if not text:
        return ELLIPSIS if measure(ELLIPSIS, font_name, font_size) <= width else ""
    return text.rstrip() + ELLIPSIS
