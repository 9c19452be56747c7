# backend/utils/filters.py
"""
Event filter pipeline.

Given the full event collection and the viewer's filter, preference and
location state, produce the ordered subset to render. A non-empty list of
chatbot suggestions short-circuits every manual filter.
"""

from datetime import datetime, tzinfo
from typing import Iterable, List, Optional, Sequence

import config
from models.event import DateFilter, Event, Filters, PriceFilter
from models.preferences import UserLocation, UserPreferences
from utils.dates import local_date, now_local, week_window
from utils.distance import event_distance_km


def matches_search(event: Event, search: str) -> bool:
    needle = (search or "").lower()
    if not needle:
        return True
    return needle in (event.title or "").lower() or needle in (event.description or "").lower()


def matches_price(event: Event, price: PriceFilter) -> bool:
    if price == PriceFilter.FREE:
        return event.is_free
    if price == PriceFilter.PAID:
        return not event.is_free
    return True


def matches_genre(event: Event, genres: Iterable[str]) -> bool:
    genres = set(genres or [])
    return not genres or event.category in genres


def matches_distance(event: Event, location: Optional[UserLocation], max_distance: Optional[float]) -> bool:
    limit = config.DEFAULT_MAX_DISTANCE_KM if max_distance is None else max_distance
    return event_distance_km(event, location) <= limit


def matches_date(event: Event, date_filter: DateFilter, now: datetime, tz: Optional[tzinfo] = None) -> bool:
    if date_filter == DateFilter.ALL:
        return True

    today = local_date(now, tz)
    event_day = local_date(event.date, tz)

    if date_filter == DateFilter.TODAY:
        return event_day == today

    first_day, last_day = week_window(today, date_filter)
    return first_day <= event_day <= last_day


def filter_events(
    events: Sequence[Event],
    filters: Optional[Filters] = None,
    location: Optional[UserLocation] = None,
    preferences: Optional[UserPreferences] = None,
    suggested_events: Optional[Sequence[Event]] = None,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> List[Event]:
    """Apply the chatbot override or the conjunctive filter predicates.

    Input order is preserved and no event is modified.
    """
    if suggested_events:
        return list(suggested_events)

    filters = filters or Filters()
    preferences = preferences or UserPreferences()
    now = now or now_local(tz)

    return [
        event
        for event in events
        if matches_search(event, filters.search)
        and matches_price(event, filters.price)
        and matches_genre(event, preferences.genre_preferences)
        and matches_distance(event, location, preferences.max_distance)
        and matches_date(event, filters.date, now, tz)
    ]


def events_by_ids(events: Sequence[Event], event_ids: Iterable[str]) -> List[Event]:
    """Events whose id is in ``event_ids``, in collection order."""
    wanted = set(event_ids)
    return [event for event in events if event.id in wanted]
