import logging

from fastapi import APIRouter, Depends

from data.store import EventStore, get_event_store
from models.chat_state import ChatRequest, ChatResponse
from workflows.chatbot_workflow import chatbot_workflow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, store: EventStore = Depends(get_event_store)):
    """Chatbot turn powered by the LangGraph workflow.

    The returned ``suggested_events`` replace the manual filter result on the
    client until the user clears them.
    """
    logger.info("[API] Chat message received: %s", request.message)

    initial_state = {
        "message": request.message,
        "events": store.list_events(),
    }
    final_state = await chatbot_workflow.ainvoke(initial_state)

    if final_state.get("errors"):
        logger.warning("[API] Chat errors: %s", final_state["errors"])

    return ChatResponse(
        event_ids=final_state.get("event_ids", []),
        message=final_state.get("ai_message") or "",
        suggested_events=final_state.get("suggested_events", []),
    )
