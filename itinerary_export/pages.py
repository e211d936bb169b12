"""Page-based itinerary layout.

Layout happens in two phases: ``layout_pages`` places the content and
fixes the page count, then ``stamp_footers`` adds ``Page i of N`` to
every page once ``N`` is known.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from .layout import MARGIN, PAGE_HEIGHT, PAGE_WIDTH, FontMetrics, LayoutCursor, wrap_text
from .models import Itinerary, resolve_destination
from .traversal import EventKind, TraversalEvent, iter_events

RGB = Tuple[int, int, int]

CONTENT_WIDTH = PAGE_WIDTH - MARGIN * 2
INDENT = 5.0
BULLET_INDENT = 10.0
DESCRIPTION_WIDTH = CONTENT_WIDTH - INDENT * 2
DESCRIPTION_LINE_HEIGHT = 5.0
FOOTER_OFFSET = 10.0

# Lookahead so headings are not stranded at the bottom of a page
DAY_LOOKAHEAD = 40.0
ACTIVITY_LOOKAHEAD = 50.0


@dataclass(frozen=True)
class TextStyle:
    size: float
    bold: bool
    color: RGB


TITLE_STYLE = TextStyle(24, True, (37, 99, 235))
DAY_STYLE = TextStyle(16, True, (30, 64, 175))
TIME_STYLE = TextStyle(11, True, (59, 130, 246))
PLACE_STYLE = TextStyle(13, True, (0, 0, 0))
DESCRIPTION_STYLE = TextStyle(10, False, (75, 85, 99))
COORDINATE_STYLE = TextStyle(9, False, (107, 114, 128))
RECOMMENDATION_HEADING_STYLE = TextStyle(10, True, (34, 197, 94))
RECOMMENDATION_STYLE = TextStyle(10, False, (75, 85, 99))
FOOTER_STYLE = TextStyle(8, False, (156, 163, 175))

TITLE_RULE_COLOR: RGB = (37, 99, 235)
DAY_SEPARATOR_COLOR: RGB = (229, 231, 235)


@dataclass(frozen=True)
class TextCommand:
    """Text drawn with its first baseline at ``y``; ``x`` is the centre when ``align`` is 'C'."""

    x: float
    y: float
    lines: Tuple[str, ...]
    style: TextStyle
    line_height: float = 0.0
    align: str = "L"

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class RuleCommand:
    x1: float
    x2: float
    y: float
    color: RGB
    width: float


@dataclass(frozen=True)
class Page:
    number: int
    commands: Tuple[object, ...] = ()
    used_height: float = 0.0
    footer: Optional[TextCommand] = None

    @property
    def texts(self) -> List[str]:
        return [command.text for command in self.commands if isinstance(command, TextCommand)]


@dataclass
class _PageBuilder:
    cursor: LayoutCursor
    metrics: FontMetrics
    pages: List[List[object]] = field(default_factory=lambda: [[]])

    def reserve(self, height: float) -> None:
        if self.cursor.reserve(height):
            self.pages.append([])

    def text(self, x: float, lines: Sequence[str], style: TextStyle, advance: float,
             line_height: float = 0.0, align: str = "L") -> None:
        self.reserve(advance)
        self.pages[-1].append(TextCommand(x, self.cursor.y, tuple(lines), style, line_height, align))
        self.cursor.advance(advance)

    def rule(self, color: RGB, width: float, advance: float, reserve: float) -> None:
        self.reserve(reserve)
        self.pages[-1].append(RuleCommand(MARGIN, PAGE_WIDTH - MARGIN, self.cursor.y, color, width))
        self.cursor.advance(advance)

    def wrap(self, text: str, style: TextStyle, width: float) -> List[str]:
        return wrap_text(text, width, lambda chunk: self.metrics.width(chunk, style.size, style.bold))

    def handle(self, event: TraversalEvent) -> None:
        if event.kind is EventKind.TITLE:
            self.text(PAGE_WIDTH / 2, [f"{event.destination} Itinerary"], TITLE_STYLE, 15, align="C")
            self.rule(TITLE_RULE_COLOR, 0.5, advance=15, reserve=0)

        elif event.kind is EventKind.DAY_START:
            self.reserve(DAY_LOOKAHEAD)
            self.text(MARGIN, [f"Day {event.day.day}"], DAY_STYLE, 10)

        elif event.kind is EventKind.ACTIVITY:
            activity = event.activity
            self.reserve(ACTIVITY_LOOKAHEAD)
            self.text(MARGIN + INDENT, [activity.time], TIME_STYLE, 6)
            self.text(MARGIN + INDENT, [activity.place], PLACE_STYLE, 6)
            lines = self.wrap(activity.description, DESCRIPTION_STYLE, DESCRIPTION_WIDTH)
            if lines:
                self.text(
                    MARGIN + INDENT,
                    lines,
                    DESCRIPTION_STYLE,
                    len(lines) * DESCRIPTION_LINE_HEIGHT,
                    line_height=DESCRIPTION_LINE_HEIGHT,
                )
                self.cursor.gap(3)
            lat, lng = activity.coordinates
            self.text(MARGIN + INDENT, [f"{lat:.4f}, {lng:.4f}"], COORDINATE_STYLE, 6)

        elif event.kind is EventKind.RECOMMENDATION:
            if event.position == 0:
                count = len(event.activity.recommendations)
                # heading and every recommendation line move together
                self.reserve(DESCRIPTION_LINE_HEIGHT * (count + 1))
                self.text(MARGIN + INDENT, ["Nearby Recommendations:"], RECOMMENDATION_HEADING_STYLE, 5)
            rec = event.recommendation
            self.text(MARGIN + BULLET_INDENT, [f"• {rec.name} ({rec.type})"], RECOMMENDATION_STYLE, 5)

        elif event.kind is EventKind.ACTIVITY_END:
            self.cursor.gap(8)

        elif event.kind is EventKind.DAY_END:
            self.cursor.gap(5)
            if not event.is_last:
                self.rule(DAY_SEPARATOR_COLOR, 0.3, advance=10, reserve=15)


def layout_pages(
    itinerary: Itinerary,
    destination: str = "",
    metrics: Optional[FontMetrics] = None,
) -> List[Page]:
    """First pass: place every block and return pages without footers."""
    builder = _PageBuilder(LayoutCursor(PAGE_HEIGHT, MARGIN, MARGIN), metrics or FontMetrics())
    for event in iter_events(itinerary, resolve_destination(destination)):
        builder.handle(event)

    return [
        Page(number=index, commands=tuple(commands), used_height=height)
        for index, (commands, height) in enumerate(
            zip(builder.pages, builder.cursor.page_heights), start=1
        )
    ]


def footer_text(number: int, total: int) -> str:
    return f"Page {number} of {total}"


def stamp_footers(pages: Sequence[Page]) -> List[Page]:
    """Second pass: return copies of ``pages`` carrying their footer."""
    total = len(pages)
    return [
        replace(
            page,
            footer=TextCommand(
                PAGE_WIDTH / 2,
                PAGE_HEIGHT - FOOTER_OFFSET,
                (footer_text(page.number, total),),
                FOOTER_STYLE,
                align="C",
            ),
        )
        for page in pages
    ]


def render_pages(
    itinerary: Itinerary,
    destination: str = "",
    metrics: Optional[FontMetrics] = None,
) -> List[Page]:
    return stamp_footers(layout_pages(itinerary, destination, metrics))
