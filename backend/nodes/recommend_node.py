import logging

from models.chat_state import ChatState
from tools.event_recommender import EventRecommenderTool

logger = logging.getLogger(__name__)

recommender = EventRecommenderTool()


def recommend_node(state: ChatState) -> dict:
    """
    Node that asks Gemini which of today's events fit the user's message.
    """
    result = recommender({"message": state.message, "events": state.today_events})

    patch = {
        "event_ids": result.get("event_ids", []),
        "ai_message": result.get("ai_message"),
    }
    if result.get("error"):
        logger.warning("[NODE] Recommend node error: %s", result["error"])
        patch["errors"] = state.errors + [f"Recommender: {result['error']}"]
    return patch
