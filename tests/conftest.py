import pytest

from itinerary_export.models import Itinerary


class CharWidthMetrics:
    """Every character is ``char_width`` millimetres wide."""

    def __init__(self, char_width: float = 1.0) -> None:
        self.char_width = char_width

    def width(self, text: str, size: float, bold: bool = False) -> float:
        return len(text) * self.char_width


def make_activity(index: int, description: str = "A short stop.", recommendations=None) -> dict:
    return {
        "time": f"{9 + index % 10:02d}:00",
        "place": f"Place {index}",
        "description": description,
        "coordinates": [48.85 + index / 1000, 2.35 + index / 1000],
        "recommendations": recommendations,
    }


def make_itinerary(day_count: int, activities_per_day: int, **activity_kwargs) -> Itinerary:
    days = []
    counter = 0
    for day_number in range(1, day_count + 1):
        activities = []
        for _ in range(activities_per_day):
            activities.append(make_activity(counter, **activity_kwargs))
            counter += 1
        days.append({"day": day_number, "activities": activities})
    return Itinerary.model_validate({"days": days})


@pytest.fixture
def metrics():
    return CharWidthMetrics()


@pytest.fixture
def paris_itinerary():
    return Itinerary.model_validate(
        {
            "days": [
                {
                    "day": 1,
                    "activities": [
                        {
                            "time": "09:00 AM",
                            "place": "Louvre Museum",
                            "description": "See the Mona Lisa before the crowds arrive.",
                            "coordinates": [48.8606, 2.3376],
                        },
                        {
                            "time": "01:00 PM",
                            "place": "Le Marais",
                            "description": "Lunch and a stroll through the old Jewish quarter.",
                            "coordinates": [48.8592, 2.3620],
                            "recommendations": [],
                        },
                    ],
                },
                {
                    "day": 2,
                    "activities": [
                        {
                            "time": "10:00 AM",
                            "place": "Eiffel Tower",
                            "description": "Ride to the summit.",
                            "coordinates": [48.8584, 2.2945],
                            "recommendations": [
                                {"name": "Cafe de l'Homme", "type": "cafe", "coordinates": [48.8627, 2.2876]},
                                {"name": "Champ de Mars", "type": "park", "coordinates": [48.8556, 2.2986]},
                                {"name": "Musee du quai Branly", "type": "museum", "coordinates": [48.8609, 2.2977]},
                            ],
                        }
                    ],
                },
            ]
        }
    )


@pytest.fixture
def empty_itinerary():
    return Itinerary()
