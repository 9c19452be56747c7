import json
import logging
import re
from typing import Dict, Any, List

from models.event import Event
from utils.dates import local_date, now_local, to_local
from .base_tool import BaseTool

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3

NOT_CONFIGURED_MESSAGE = "API key not configured. Please check your environment variables."
NO_EVENTS_TODAY_MESSAGE = (
    "Sorry, there are no events scheduled for today. "
    "Would you like me to recommend events for another day?"
)
DEFAULT_MESSAGE = (
    "I'm here to help you find today's events! "
    "Tell me about your mood or what activity you'd like to do today."
)
ERROR_MESSAGE = "Sorry, I encountered an issue. Please try again!"

PROMPT_TEMPLATE = """You are an AI Event Assistant for finding local events. Your role is to recommend ONLY TODAY'S events based on the user's mood, interests, or specific activities they want to do.

Available events TODAY:
{events_context}

User's message: "{message}"

IMPORTANT INSTRUCTIONS:
1. Only recommend events from TODAY's list above.
2. If you understand the user's mood/interests clearly, recommend UP TO 3 events from today that match best. Return a JSON object with:
   {{
     "eventIds": ["event-id-1", "event-id-2"],
     "aiMessage": "Your friendly recommendation message explaining why these events match their interest. Include event times."
   }}
3. If the user's intent is unclear, ask a clarifying question. Return:
   {{
     "eventIds": [],
     "aiMessage": "Your friendly question asking for clarification about today's activities"
   }}
4. If no events from today match their criteria, return an empty "eventIds" list and briefly list what is available today.
5. Always respond in a friendly and conversational tone.
6. Never recommend more than 3 events.
7. Mention specific event times in your recommendations.

Respond ONLY with the JSON object, no other text."""


def todays_events(events: List[Event], now=None) -> List[Event]:
    today = local_date(now or now_local())
    return [event for event in events if local_date(event.date) == today]


def build_events_context(events: List[Event]) -> str:
    lines = []
    for index, event in enumerate(events):
        lines.append(
            f'{index}. "{event.title}" (ID: {event.id}, Category: {event.category}): '
            f"{event.description} at {to_local(event.date).strftime('%H:%M')}, "
            f"Free: {str(event.is_free).lower()}, Organizer: {event.organizer}"
        )
    return "\n".join(lines)


def parse_model_reply(text: str) -> Dict[str, Any]:
    """Pull the first JSON object out of a model reply."""
    match = re.search(r"\{[\s\S]*\}", text or "")
    if not match:
        return {"event_ids": [], "ai_message": DEFAULT_MESSAGE}

    result = json.loads(match.group(0))
    event_ids = result.get("eventIds")
    if not isinstance(event_ids, list):
        event_ids = []
    return {
        "event_ids": [str(event_id) for event_id in event_ids][:MAX_SUGGESTIONS],
        "ai_message": result.get("aiMessage") or "I'm here to help you find today's events!",
    }


class EventRecommenderTool(BaseTool):
    """
    Recommends up to three of today's events for a natural-language request.
    Input: {"message": str, "events": List[Event] (today's candidates)}
    Output: {"success": bool, "event_ids": list, "ai_message": str}

    Never raises: a missing key, a model failure or an unparseable reply all
    degrade to an empty suggestion list with an explanatory message.
    """

    def __call__(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            self.validate_input(input_data)
        except ValueError as e:
            return self.handle_error(e)

        message = input_data["message"]
        candidates = input_data.get("events") or []

        if self.model is None:
            logger.warning("[CHAT] GEMINI_API_KEY not set; chatbot disabled")
            return {"success": False, "event_ids": [], "ai_message": NOT_CONFIGURED_MESSAGE}

        if not candidates:
            return {"success": True, "event_ids": [], "ai_message": NO_EVENTS_TODAY_MESSAGE}

        prompt = PROMPT_TEMPLATE.format(events_context=build_events_context(candidates), message=message)

        try:
            response = self.model.generate_content(prompt)
            reply = parse_model_reply(response.text.strip())
        except Exception as e:
            logger.error("[CHAT] Error calling Gemini API: %s", e)
            return {"success": False, "event_ids": [], "ai_message": ERROR_MESSAGE, "error": str(e)}

        logger.info("[CHAT] Gemini suggested %d event(s)", len(reply["event_ids"]))
        return {"success": True, **reply}

    def validate_input(self, input_data: Dict[str, Any]) -> None:
        message = input_data.get("message")
        if not message or not isinstance(message, str):
            raise ValueError("Field message must be a non-empty string")

    def handle_error(self, error: Exception) -> Dict[str, Any]:
        return {"success": False, "event_ids": [], "ai_message": ERROR_MESSAGE, "error": str(error)}
