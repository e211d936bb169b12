"""Canonical walk over an itinerary.

Every renderer folds over the same event stream so the text, page and
flow-document exports always list days, activities and recommendations
in the same order.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from .models import Activity, Day, Itinerary, Recommendation


class EventKind(str, Enum):
    TITLE = "title"
    DAY_START = "day_start"
    ACTIVITY = "activity"
    RECOMMENDATION = "recommendation"
    ACTIVITY_END = "activity_end"
    DAY_END = "day_end"


@dataclass(frozen=True)
class TraversalEvent:
    kind: EventKind
    destination: str = ""
    day: Optional[Day] = None
    activity: Optional[Activity] = None
    recommendation: Optional[Recommendation] = None
    # RECOMMENDATION: index within the activity; DAY_START/DAY_END: index of the day
    position: int = 0
    is_last: bool = False


def iter_events(itinerary: Itinerary, destination: str) -> Iterator[TraversalEvent]:
    """Yield the export events for ``itinerary`` in document order."""
    yield TraversalEvent(EventKind.TITLE, destination=destination)

    last_index = len(itinerary.days) - 1
    for day_index, day in enumerate(itinerary.days):
        is_last_day = day_index == last_index
        yield TraversalEvent(EventKind.DAY_START, day=day, position=day_index, is_last=is_last_day)
        for activity in day.activities:
            yield TraversalEvent(EventKind.ACTIVITY, day=day, activity=activity)
            last_rec = len(activity.recommendations) - 1
            for rec_index, recommendation in enumerate(activity.recommendations):
                yield TraversalEvent(
                    EventKind.RECOMMENDATION,
                    day=day,
                    activity=activity,
                    recommendation=recommendation,
                    position=rec_index,
                    is_last=rec_index == last_rec,
                )
            yield TraversalEvent(EventKind.ACTIVITY_END, day=day, activity=activity)
        yield TraversalEvent(EventKind.DAY_END, day=day, position=day_index, is_last=is_last_day)
