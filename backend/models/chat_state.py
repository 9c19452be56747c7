from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from models.event import Event


class ChatMessage(BaseModel):
    """A single line in the chatbot conversation."""

    role: Literal["user", "model"]
    content: str
    suggested_event_ids: List[str] = Field(default_factory=list)


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)


class ChatResponse(BaseModel):
    event_ids: List[str]
    message: str
    suggested_events: List[Event]


class ChatState(BaseModel):
    """LangGraph state passed between the chatbot nodes."""

    # --- user-provided params ---
    message: str
    events: List[Event] = Field(default_factory=list)

    # --- data collected along the way ---
    today_events: List[Event] = Field(default_factory=list)
    event_ids: List[str] = Field(default_factory=list)
    ai_message: Optional[str] = None
    suggested_events: List[Event] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
