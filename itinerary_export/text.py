"""Plain-text itinerary export."""
from __future__ import annotations

import math
from decimal import Decimal
from typing import List

from .models import Itinerary, resolve_destination
from .traversal import EventKind, iter_events

TITLE_RULE = "=" * 50
DAY_RULE = "-" * 30


def format_number(value: float) -> str:
    """Render a coordinate the way the web client printed raw numbers."""
    if math.isfinite(value) and value == int(value) and abs(value) < 1e21:
        return str(int(value))
    text = repr(float(value))
    if "e" not in text:
        return text
    # positional between 1e-6 and 1e21, otherwise exponent without zero padding
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    return f"{mantissa}e{int(exponent):+d}"


def render_text(itinerary: Itinerary, destination: str = "") -> str:
    destination = resolve_destination(destination)
    parts: List[str] = []

    for event in iter_events(itinerary, destination):
        if event.kind is EventKind.TITLE:
            parts.append(f"{event.destination} Itinerary\n{TITLE_RULE}\n\n")
        elif event.kind is EventKind.DAY_START:
            parts.append(f"DAY {event.day.day}\n{DAY_RULE}\n")
        elif event.kind is EventKind.ACTIVITY:
            activity = event.activity
            lat, lng = activity.coordinates
            parts.append(f"\n{activity.time} - {activity.place}\n")
            parts.append(f"{activity.description}\n")
            parts.append(f"Location: {format_number(lat)}, {format_number(lng)}\n")
        elif event.kind is EventKind.RECOMMENDATION:
            if event.position == 0:
                parts.append("\nNearby Recommendations:\n")
            rec = event.recommendation
            parts.append(f"  * {rec.name} ({rec.type})\n")
        elif event.kind in (EventKind.ACTIVITY_END, EventKind.DAY_END):
            parts.append("\n")

    return "".join(parts)
