"""Itinerary data model shared by every export format."""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DESTINATION = "Trip"

Coordinates = Tuple[float, float]


class Recommendation(BaseModel):
    """A nearby place suggested alongside an activity."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = Field(..., description="Free-form category, e.g. 'cafe' or 'museum'")
    coordinates: Coordinates


class Activity(BaseModel):
    """One scheduled stop within a day."""

    model_config = ConfigDict(frozen=True)

    time: str
    place: str
    description: str = ""
    coordinates: Coordinates
    recommendations: Tuple[Recommendation, ...] = ()

    @field_validator("recommendations", mode="before")
    @classmethod
    def _none_means_empty(cls, value):
        return () if value is None else value

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value):
        return "" if value is None else value


class Day(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int = Field(..., ge=1)
    activities: Tuple[Activity, ...] = ()


class Itinerary(BaseModel):
    """Ordered days of a trip; day numbers are unique."""

    model_config = ConfigDict(frozen=True)

    days: Tuple[Day, ...] = ()

    @field_validator("days")
    @classmethod
    def _unique_day_numbers(cls, days: Tuple[Day, ...]) -> Tuple[Day, ...]:
        seen = set()
        for day in days:
            if day.day in seen:
                raise ValueError(f"duplicate day number {day.day}")
            seen.add(day.day)
        return days

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Itinerary":
        """Build an itinerary from the generation service's JSON body."""
        return cls.model_validate({"days": payload.get("days") or []})

    @property
    def activity_count(self) -> int:
        return sum(len(day.activities) for day in self.days)


def resolve_destination(destination: Optional[str]) -> str:
    cleaned = (destination or "").strip()
    return cleaned or DEFAULT_DESTINATION
