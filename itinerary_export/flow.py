"""Flow-document itinerary export.

Produces styled paragraphs without positions; the consuming word
processor reflows and paginates them.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .models import Itinerary, resolve_destination
from .traversal import EventKind, TraversalEvent, iter_events

CLOSING_RULE = "─" * 39


class BlockRole(str, Enum):
    TITLE = "title"
    HEADING_1 = "heading_1"
    BODY = "body"
    CAPTION = "caption"
    BULLET = "bullet"
    SPACER = "spacer"
    RULE = "rule"


@dataclass(frozen=True)
class StyledRun:
    text: str
    bold: bool = False
    italics: bool = False
    size: Optional[int] = None  # half-points
    color: Optional[str] = None  # hex RGB, no leading '#'


@dataclass(frozen=True)
class Border:
    color: str
    space: int
    size: int  # eighths of a point
    style: str = "single"


@dataclass(frozen=True)
class StyledBlock:
    role: BlockRole
    runs: Tuple[StyledRun, ...] = ()
    spacing_before: int = 0  # twips
    spacing_after: int = 0
    bottom_border: Optional[Border] = None

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


DAY_BORDER = Border(color="3B82F6", space=4, size=6)


def _blocks_for(event: TraversalEvent) -> List[StyledBlock]:
    if event.kind is EventKind.TITLE:
        title = StyledRun(f"🌍 {event.destination} Itinerary", bold=True, size=48, color="2563EB")
        return [StyledBlock(BlockRole.TITLE, (title,), spacing_after=400)]

    if event.kind is EventKind.DAY_START:
        heading = StyledRun(f"Day {event.day.day}", bold=True, size=32, color="1E40AF")
        return [
            StyledBlock(
                BlockRole.HEADING_1,
                (heading,),
                spacing_before=400,
                spacing_after=200,
                bottom_border=DAY_BORDER,
            )
        ]

    if event.kind is EventKind.ACTIVITY:
        activity = event.activity
        lat, lng = activity.coordinates
        return [
            StyledBlock(
                BlockRole.BODY,
                (StyledRun(f"⏰ {activity.time}", bold=True, size=22, color="3B82F6"),),
                spacing_before=200,
            ),
            StyledBlock(BlockRole.BODY, (StyledRun(activity.place, bold=True, size=26),), spacing_before=100),
            StyledBlock(
                BlockRole.BODY,
                (StyledRun(activity.description, size=22, color="4B5563"),),
                spacing_before=100,
            ),
            StyledBlock(
                BlockRole.CAPTION,
                (StyledRun(f"📍 Location: {lat:.4f}, {lng:.4f}", italics=True, size=18, color="6B7280"),),
                spacing_before=100,
            ),
        ]

    if event.kind is EventKind.RECOMMENDATION:
        rec = event.recommendation
        blocks = []
        if event.position == 0:
            heading = StyledRun("📌 Nearby Recommendations:", bold=True, size=22, color="22C55E")
            blocks.append(StyledBlock(BlockRole.BODY, (heading,), spacing_before=200))
        blocks.append(
            StyledBlock(
                BlockRole.BULLET,
                (
                    StyledRun(f"    • {rec.name}", size=20),
                    StyledRun(f" ({rec.type})", size=20, color="3B82F6"),
                ),
                spacing_before=50,
            )
        )
        return blocks

    if event.kind is EventKind.ACTIVITY_END:
        return [StyledBlock(BlockRole.SPACER, spacing_after=200)]

    return []


def render_flow(itinerary: Itinerary, destination: str = "") -> List[StyledBlock]:
    blocks: List[StyledBlock] = []
    for event in iter_events(itinerary, resolve_destination(destination)):
        blocks.extend(_blocks_for(event))
    blocks.append(
        StyledBlock(BlockRole.RULE, (StyledRun(CLOSING_RULE, color="D1D5DB"),), spacing_before=400)
    )
    return blocks
