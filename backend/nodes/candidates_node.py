import logging

from models.chat_state import ChatState
from tools.event_recommender import todays_events

logger = logging.getLogger(__name__)


def candidates_node(state: ChatState) -> dict:
    """Narrow the collection down to today's events; the chatbot only recommends those."""
    today = todays_events(state.events)
    logger.info("[NODE] Candidates node: %d of %d events are today", len(today), len(state.events))
    return {"today_events": today}
