from models.chat_state import ChatState
from utils.filters import events_by_ids


def resolve_node(state: ChatState) -> dict:
    """Map the suggested ids back to events, keeping collection order and dropping unknown ids."""
    suggested = events_by_ids(state.events, state.event_ids)
    return {
        "suggested_events": suggested,
        "event_ids": [event.id for event in suggested],
    }
