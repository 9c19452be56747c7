from datetime import datetime
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field


class PriceFilter(str, Enum):
    ALL = "all"
    FREE = "free"
    PAID = "paid"


class DateFilter(str, Enum):
    ALL = "all"
    TODAY = "today"
    THIS_WEEK = "this_week"
    NEXT_WEEK = "next_week"
    THIS_WEEKEND = "this_weekend"


class Position(BaseModel):
    lat: float
    lng: float


class Event(BaseModel):
    id: str
    title: str
    description: str = ""
    date: datetime  # naive values are local time
    is_free: bool = False
    category: str = ""
    organizer: str = ""
    phone_number: Optional[str] = None
    position: Optional[Position] = None
    image_url: str = ""
    photos: List[str] = Field(default_factory=list)
    distance: Optional[float] = None  # km from the viewer, when precomputed

    # ownership, set by the store
    user_id: Optional[str] = None
    user_display_name: Optional[str] = None
    created_at: Optional[datetime] = None


class EventCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    date: datetime
    is_free: bool = False
    category: str = "Music"
    organizer: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)
    position: Position
    image_url: Optional[str] = None
    photos: List[str] = Field(default_factory=list)


class EventUpdate(BaseModel):
    """Fields a creator may edit after publishing."""
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None
    category: Optional[str] = Field(None, min_length=1)
    organizer: Optional[str] = Field(None, min_length=1)
    is_free: Optional[bool] = None


class Filters(BaseModel):
    price: PriceFilter = PriceFilter.ALL
    date: DateFilter = DateFilter.ALL
    search: str = ""


class EventList(BaseModel):
    events: List[Event]
    total_count: int
