import json
import logging
import re
import time
from typing import Dict, Any, List

from pydantic import ValidationError

from data.sample_events import get_sample_events
from models.event import EventCreate, Position
from .base_tool import BaseTool

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3

PROMPT_TEMPLATE = """You are an event discovery assistant. Compile a list of {count} upcoming events happening in {city} in the next month.

For each event, provide the following information in JSON format:
{{
  "title": "Event Name",
  "description": "Brief description of the event",
  "date": "YYYY-MM-DD",
  "time": "HH:MM",
  "location": "Exact address",
  "lat": 44.4268,
  "lng": 26.1025,
  "organizer": "Organization name",
  "genre": "One of: {genres}",
  "isFree": true,
  "url": "Website or link if available"
}}

Return a JSON array with exactly {count} events. Make sure to include:
- A mix of different genres and types of events
- Events from different locations in {city}, with valid coordinates
- Both free and paid events
- Dates within the next month from today, evenly distributed

Return ONLY valid JSON, no other text."""


def to_event_create(item: Dict[str, Any]) -> EventCreate:
    """Normalise one generated item; raises ValueError or ValidationError when unusable."""
    time_part = item.get("time") or "00:00"
    return EventCreate(
        title=item["title"],
        description=item.get("description") or item["title"],
        date=f"{item['date']}T{time_part}",
        is_free=bool(item.get("isFree", False)),
        category=item.get("genre") or item.get("category") or "Music",
        organizer=item.get("organizer") or "Unknown organizer",
        phone_number=item.get("phoneNumber") or item.get("url") or "-",
        position=Position(lat=float(item["lat"]), lng=float(item["lng"])),
    )


class EventGeneratorTool(BaseTool):
    """
    Generates a list of upcoming events for a city with Gemini.
    Input: {"city": str, "count": int (optional, default=15), "genres": list (optional)}
    Output: {"success": bool, "events": List[EventCreate], "count": int, "source": "gemini" | "fallback"}
    """

    def __init__(self, *args, retry_delay: float = 1.0, **kwargs):
        super().__init__(*args, **kwargs)
        self.retry_delay = retry_delay

    def __call__(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            self.validate_input(input_data)
        except ValueError as e:
            return self.handle_error(e)

        if self.model is None:
            logger.warning("[GENERATOR] GEMINI_API_KEY not set; returning sample events")
            return self._fallback()

        city = input_data["city"]
        count = input_data.get("count", 15)
        genres = input_data.get("genres") or ["Music", "Art", "Sports", "Fair", "Theater", "Education"]
        prompt = PROMPT_TEMPLATE.format(count=count, city=city, genres=", ".join(genres))

        try:
            text = self._call_model(prompt)
            events = self._parse_events(text)
        except Exception as e:
            logger.error("[GENERATOR] Error fetching events from Gemini: %s", e)
            return self._fallback(error=str(e))

        logger.info("[GENERATOR] Parsed %d events for %s", len(events), city)
        return {"success": True, "events": events, "count": len(events), "source": "gemini"}

    def validate_input(self, input_data: Dict[str, Any]) -> None:
        city = input_data.get("city")
        if not city or not isinstance(city, str):
            raise ValueError("Field city must be a non-empty string")
        count = input_data.get("count", 15)
        if not isinstance(count, int) or count < 1 or count > 100:
            raise ValueError("count must be an integer between 1 and 100")

    def _call_model(self, prompt: str) -> str:
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                return self.model.generate_content(prompt).text
            except Exception as e:
                if attempt == MAX_ATTEMPTS:
                    raise
                wait = self.retry_delay * attempt
                logger.warning("[GENERATOR] Model call failed (%s), retry #%d in %.1fs", e, attempt, wait)
                time.sleep(wait)

    def _parse_events(self, text: str) -> List[EventCreate]:
        match = re.search(r"\[[\s\S]*\]", text or "")
        if not match:
            raise ValueError("No JSON array found in response")

        items = json.loads(match.group(0))
        if not isinstance(items, list):
            raise ValueError("Response is not an array")

        events = []
        for item in items:
            try:
                events.append(to_event_create(item))
            except (KeyError, TypeError, ValueError, ValidationError) as e:
                logger.warning("[GENERATOR] Skipping malformed event %r: %s", item.get("title") if isinstance(item, dict) else item, e)
        return events

    def _fallback(self, error: str | None = None) -> Dict[str, Any]:
        events = get_sample_events()
        result = {"success": error is None, "events": events, "count": len(events), "source": "fallback"}
        if error:
            result["error"] = error
        return result
