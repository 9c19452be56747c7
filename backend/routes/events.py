import asyncio
import logging
from functools import partial
from typing import Dict, Any, List, Optional

from fastapi import APIRouter, Query, Depends, HTTPException, status

from auth.dependencies import get_current_user
from data.locations import AVAILABLE_GENRES
from data.store import EventNotFound, EventStore, PermissionDenied, get_event_store
from models.event import DateFilter, Event, EventCreate, EventList, EventUpdate, Filters, PriceFilter
from models.preferences import UserLocation, UserPreferences
from tools.event_generator import EventGeneratorTool
from utils.distance import with_distances
from utils.filters import events_by_ids, filter_events

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


def _viewer_location(lat: Optional[float], lng: Optional[float]) -> Optional[UserLocation]:
    if lat is None or lng is None:
        return None
    return UserLocation(lat=lat, lng=lng)


@router.get("/events", response_model=EventList)
async def list_events(
    search: str = Query("", description="Case-insensitive text matched against title and description"),
    price: PriceFilter = Query(PriceFilter.ALL),
    date: DateFilter = Query(DateFilter.ALL),
    lat: Optional[float] = Query(None, ge=-90, le=90, description="Viewer latitude"),
    lng: Optional[float] = Query(None, ge=-180, le=180, description="Viewer longitude"),
    max_distance: Optional[float] = Query(None, gt=0, description="Maximum distance in km"),
    genres: Optional[List[str]] = Query(None, description="Genre preferences; empty means all"),
    suggested: Optional[List[str]] = Query(None, description="Chatbot-suggested event ids; overrides every filter"),
    store: EventStore = Depends(get_event_store),
):
    """Events to render for the current filter, preference and location state."""
    events = store.list_events()
    location = _viewer_location(lat, lng)

    filtered = filter_events(
        events,
        filters=Filters(price=price, date=date, search=search),
        location=location,
        preferences=UserPreferences(max_distance=max_distance, genre_preferences=genres or []),
        suggested_events=events_by_ids(events, suggested or []),
    )

    logger.info("[API] %d of %d events match", len(filtered), len(events))
    return EventList(events=with_distances(filtered, location), total_count=len(filtered))


@router.get("/events/mine", response_model=EventList)
async def list_my_events(
    current_user: dict = Depends(get_current_user),
    store: EventStore = Depends(get_event_store),
):
    """Events created by the authenticated user."""
    events = store.list_events_by_user(current_user["uid"])
    return EventList(events=events, total_count=len(events))


@router.get("/events/discover")
async def discover_events(
    city: str = Query("Bucharest, Romania", description="City to generate events for"),
    count: int = Query(15, ge=1, le=100, description="Number of events to ask for"),
) -> Dict[str, Any]:
    """Generate upcoming events for a city with Gemini. Nothing is stored."""
    logger.info("[API] Discover request for %s (%d events)", city, count)

    # Gemini calls and retry backoff block, so run the tool in the thread pool
    generator = EventGeneratorTool()
    payload = {"city": city, "count": count, "genres": AVAILABLE_GENRES}
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, partial(generator, payload))
    return {
        "success": result["success"],
        "source": result.get("source"),
        "events": [event.model_dump(mode="json") for event in result.get("events", [])],
        "count": result.get("count", 0),
        "error": result.get("error"),
    }


@router.get("/events/{event_id}", response_model=Event)
async def get_event(event_id: str, store: EventStore = Depends(get_event_store)):
    try:
        return store.get_event(event_id)
    except EventNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/events", response_model=Event, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: EventCreate,
    current_user: dict = Depends(get_current_user),
    store: EventStore = Depends(get_event_store),
):
    """Publish a new event owned by the authenticated user."""
    created = store.add_event(event, current_user["uid"], current_user["display_name"])
    logger.info("[API] %s added event %s", current_user["email"], created.id)
    return created


@router.patch("/events/{event_id}", response_model=Event)
async def update_event(
    event_id: str,
    updates: EventUpdate,
    current_user: dict = Depends(get_current_user),
    store: EventStore = Depends(get_event_store),
):
    try:
        return store.update_event(event_id, updates, current_user["uid"])
    except EventNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDenied as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    current_user: dict = Depends(get_current_user),
    store: EventStore = Depends(get_event_store),
):
    try:
        store.delete_event(event_id, current_user["uid"])
    except EventNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDenied as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    logger.info("[API] %s deleted event %s", current_user["email"], event_id)


@router.get("/genres")
async def list_genres() -> Dict[str, Any]:
    return {"genres": AVAILABLE_GENRES}
