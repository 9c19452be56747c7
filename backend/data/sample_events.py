# backend/data/sample_events.py
# Static events served when Gemini is unavailable and used to seed the in-memory store.

from datetime import datetime, timedelta
from typing import List

from models.event import EventCreate, Position


def _days_from_now(days: int, hour: int) -> datetime:
    base = datetime.now().replace(hour=hour, minute=0, second=0, microsecond=0)
    return base + timedelta(days=days)


def get_sample_events() -> List[EventCreate]:
    return [
        EventCreate(
            title="Acoustic Concert in Garden",
            description="Enjoy an evening of live music in an intimate setting. Local artists will perform known pieces and original compositions.",
            date=_days_from_now(0, 19),
            is_free=False,
            category="Music",
            organizer="Urban Garden",
            phone_number="+40 721 000 001",
            position=Position(lat=44.435, lng=26.10),
            image_url="https://picsum.photos/seed/music/400/300",
        ),
        EventCreate(
            title="Local Crafts Fair",
            description="Discover unique products created by local craftspeople. Jewelry, ceramics, decorations and much more.",
            date=_days_from_now(3, 11),
            is_free=True,
            category="Fair",
            organizer="Craftspeople Community",
            phone_number="+40 721 000 002",
            position=Position(lat=44.44, lng=26.09),
            image_url="https://picsum.photos/seed/crafts/400/300",
        ),
        EventCreate(
            title="City Marathon",
            description="Join the biggest running event in the city. Courses for all fitness levels.",
            date=_days_from_now(10, 8),
            is_free=False,
            category="Sports",
            organizer="RunClub",
            phone_number="+40 721 000 003",
            position=Position(lat=44.41, lng=26.11),
            image_url="https://picsum.photos/seed/running/400/300",
        ),
        EventCreate(
            title="Open Air Sketching",
            description="Bring a pencil and a notebook. We draw the old town facades together.",
            date=_days_from_now(1, 17),
            is_free=True,
            category="Art",
            organizer="Sketchers Bucharest",
            phone_number="+40 721 000 004",
            position=Position(lat=44.4311, lng=26.1006),
            image_url="https://picsum.photos/seed/sketch/400/300",
        ),
        EventCreate(
            title="Improv Theater Night",
            description="An evening of improvised comedy built on suggestions from the audience.",
            date=_days_from_now(6, 20),
            is_free=False,
            category="Theater",
            organizer="Teatrul de Improvizatie",
            phone_number="+40 721 000 005",
            position=Position(lat=44.4378, lng=26.0969),
            image_url="https://picsum.photos/seed/theater/400/300",
        ),
    ]
