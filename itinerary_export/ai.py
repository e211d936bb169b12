"""OpenAI-powered clients for itinerary generation and trip chat."""
from __future__ import annotations

import json
import logging
from typing import List, Optional, Tuple

from pydantic import ValidationError

from .config import get_openai_api_key, get_openai_model
from .models import Itinerary, resolve_destination

try:
    from openai import OpenAI
except ImportError:  # pragma: no cover - handled at runtime
    OpenAI = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

MAX_DAYS = 30
ITINERARY_SYSTEM_PROMPT = (
    "You are a travel planner. Build realistic day-by-day itineraries with accurate "
    "latitude/longitude coordinates for every stop. Always respond with strict JSON."
)
CHAT_SYSTEM_PROMPT = (
    "You are Sanchari, a friendly travel companion. Answer questions about the traveler's "
    "itinerary concisely and suggest practical adjustments when asked."
)
ITINERARY_SCHEMA_HINT = (
    'Return JSON shaped as {"destination": str, "days": [{"day": int, "activities": '
    '[{"time": str, "place": str, "description": str, "coordinates": [lat, lng], '
    '"recommendations": [{"name": str, "type": str, "coordinates": [lat, lng]}]}]}]}. '
    "Give two or three nearby recommendations per activity."
)


def _get_openai_client():
    if OpenAI is None:
        return None, "Install the openai package to enable AI planning."
    api_key = get_openai_api_key()
    if not api_key:
        return None, "Set OPENAI_API_KEY to unlock AI planning."
    try:
        return OpenAI(api_key=api_key), None
    except Exception:
        logger.exception("OpenAI client initialization failed")
        return None, "OpenAI client initialization failed. Verify the key and package version."


def _safe_int(value: object, default: int = 1) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        parsed = default
    return max(1, min(parsed, MAX_DAYS))


def _extract_json_block(raw_text: str) -> str:
    raw_text = raw_text.strip()
    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        raise ValueError("JSON block not found in AI response.")
    return raw_text[start : end + 1]


def _complete(client, messages: List[dict], temperature: float, max_tokens: int) -> Tuple[Optional[str], Optional[str]]:
    try:
        response = client.chat.completions.create(
            model=get_openai_model(),
            temperature=temperature,
            max_tokens=max_tokens,
            messages=messages,
        )
    except Exception:
        logger.exception("OpenAI request failed")
        return None, "OpenAI request failed. Check connectivity and API quota."

    if not response.choices:
        return None, "OpenAI returned no choices. Try again shortly."
    content = (response.choices[0].message.content or "").strip()
    if not content:
        return None, "OpenAI response was empty."
    return content, None


def parse_itinerary_response(raw_content: str, destination: str) -> Tuple[Optional[Itinerary], str, Optional[str]]:
    """Turn a model reply into an itinerary plus the echoed destination."""
    try:
        payload = json.loads(_extract_json_block(raw_content))
    except ValueError:
        return None, destination, "OpenAI response was not valid JSON. Try regenerating."

    try:
        itinerary = Itinerary.from_payload(payload)
    except ValidationError as exc:
        logger.warning("Generated itinerary failed validation: %s", exc)
        return None, destination, "The generated itinerary was malformed. Try regenerating."

    echoed = payload.get("destination") if isinstance(payload.get("destination"), str) else ""
    return itinerary, resolve_destination(echoed or destination), None


def generate_ai_itinerary(
    destination: str,
    day_count: int,
    preferences: str = "",
) -> Tuple[Optional[Tuple[Itinerary, str]], Optional[str]]:
    """Ask the model for an itinerary; returns ``((itinerary, destination), error)``."""
    client, error = _get_openai_client()
    if error:
        return None, error
    assert client is not None

    safe_days = _safe_int(day_count)
    prompt = (
        f"Plan a {safe_days}-day trip to {destination.strip() or 'a destination of your choice'}. "
        f"Traveler preferences: {preferences.strip() or 'none given'}. {ITINERARY_SCHEMA_HINT}"
    )
    content, error = _complete(
        client,
        [
            {"role": "system", "content": ITINERARY_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        temperature=0.7,
        max_tokens=3000,
    )
    if error:
        return None, error

    itinerary, echoed, error = parse_itinerary_response(content, destination)
    if error:
        return None, error
    logger.info("Generated %d-day itinerary for %s", len(itinerary.days), echoed)
    return (itinerary, echoed), None


def chat_reply(message: str, itinerary: Optional[Itinerary]) -> Tuple[Optional[str], Optional[str]]:
    """Answer a traveler question with the current itinerary as context."""
    if not message.strip():
        return None, "Type a question first."
    client, error = _get_openai_client()
    if error:
        return None, error
    assert client is not None

    context = itinerary.model_dump_json() if itinerary is not None else "No itinerary yet."
    return _complete(
        client,
        [
            {"role": "system", "content": CHAT_SYSTEM_PROMPT},
            {"role": "system", "content": f"Current itinerary: {context}"},
            {"role": "user", "content": message.strip()},
        ],
        temperature=0.6,
        max_tokens=500,
    )
