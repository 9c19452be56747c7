# backend/utils/distance.py

import math
from typing import Iterable, List, Optional, Tuple

from data.locations import DEFAULT_LOCATION, FALLBACK_POSITION
from models.event import Event
from models.preferences import UserLocation

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points, in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def _valid_coordinate(lat, lng) -> bool:
    try:
        lat, lng = float(lat), float(lng)
    except (TypeError, ValueError):
        return False
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def resolve_position(event: Event) -> Tuple[float, float]:
    """Return the event's (lat, lng), or the fallback pin when it has no usable position."""
    position = event.position
    if position is None or not _valid_coordinate(position.lat, position.lng):
        return FALLBACK_POSITION
    return float(position.lat), float(position.lng)


def default_location() -> UserLocation:
    return UserLocation(**DEFAULT_LOCATION)


def event_distance_km(event: Event, location: Optional[UserLocation] = None) -> float:
    """Distance from the viewer to the event, reusing a precomputed value when present."""
    if event.distance is not None and math.isfinite(event.distance):
        return event.distance

    viewer = location or default_location()
    if _valid_coordinate(viewer.lat, viewer.lng):
        viewer_lat, viewer_lng = viewer.lat, viewer.lng
    else:
        viewer_lat, viewer_lng = DEFAULT_LOCATION["lat"], DEFAULT_LOCATION["lng"]

    event_lat, event_lng = resolve_position(event)
    return haversine_km(viewer_lat, viewer_lng, event_lat, event_lng)


def with_distances(events: Iterable[Event], location: Optional[UserLocation] = None) -> List[Event]:
    """Copies of the events annotated with their distance from the viewer."""
    return [
        event.model_copy(update={"distance": round(event_distance_km(event, location), 3)})
        for event in events
    ]
