# backend/data/store.py
"""
Event storage: a document store keyed by event id.

The whole collection is fetched on every request; filtering happens in
``utils.filters``, never in the store.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, List, Optional

from dateutil.parser import isoparse
from pydantic import ValidationError

import config
from models.event import Event, EventCreate, EventUpdate, Position

logger = logging.getLogger(__name__)

EVENTS_COLLECTION = "events"


class EventNotFound(Exception):
    """Raised when an event document does not exist."""


class PermissionDenied(Exception):
    """Raised when a user modifies an event they did not create."""


def placeholder_image(event_id: str) -> str:
    return f"https://picsum.photos/seed/{event_id}/400/300"


class EventStore:
    """Interface shared by the storage backends."""

    def list_events(self) -> List[Event]:
        raise NotImplementedError

    def get_event(self, event_id: str) -> Event:
        raise NotImplementedError

    def list_events_by_user(self, user_id: str) -> List[Event]:
        return [event for event in self.list_events() if event.user_id == user_id]

    def add_event(self, data: EventCreate, user_id: Optional[str], display_name: Optional[str] = None) -> Event:
        raise NotImplementedError

    def update_event(self, event_id: str, updates: EventUpdate, user_id: str) -> Event:
        raise NotImplementedError

    def delete_event(self, event_id: str, user_id: str) -> None:
        raise NotImplementedError


class InMemoryEventStore(EventStore):
    def __init__(self, events: Optional[List[Event]] = None):
        self._lock = threading.Lock()
        self._events: Dict[str, Event] = {event.id: event for event in events or []}

    def list_events(self) -> List[Event]:
        with self._lock:
            return list(self._events.values())

    def get_event(self, event_id: str) -> Event:
        with self._lock:
            event = self._events.get(event_id)
        if event is None:
            raise EventNotFound(f"Event with id '{event_id}' not found.")
        return event

    def add_event(self, data: EventCreate, user_id: Optional[str], display_name: Optional[str] = None) -> Event:
        event_id = uuid.uuid4().hex[:20]
        event = Event(
            id=event_id,
            **data.model_dump(exclude={"image_url"}),
            image_url=data.image_url or placeholder_image(event_id),
            user_id=user_id,
            user_display_name=display_name or "Anonymous",
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._events[event_id] = event
        return event

    def _owned(self, event_id: str, user_id: str) -> Event:
        event = self.get_event(event_id)
        if event.user_id != user_id:
            raise PermissionDenied("Only the event creator can modify or delete this event.")
        return event

    def update_event(self, event_id: str, updates: EventUpdate, user_id: str) -> Event:
        event = self._owned(event_id, user_id)
        updated = event.model_copy(update=updates.model_dump(exclude_none=True))
        with self._lock:
            self._events[event_id] = updated
        return updated

    def delete_event(self, event_id: str, user_id: str) -> None:
        self._owned(event_id, user_id)
        with self._lock:
            del self._events[event_id]


def _to_document(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map model fields to the document layout shared with the web client."""
    mapping = {
        "is_free": "isFree",
        "phone_number": "phoneNumber",
        "image_url": "imageUrl",
    }
    doc = {}
    for key, value in data.items():
        if isinstance(value, datetime):
            value = value.isoformat()
        doc[mapping.get(key, key)] = value
    return doc


def event_from_document(doc_id: str, data: Dict[str, Any]) -> Optional[Event]:
    """Build an Event from a stored document, tolerating sloppy client writes."""
    raw_date = data.get("date")
    try:
        date = raw_date if isinstance(raw_date, datetime) else isoparse(str(raw_date))
    except (TypeError, ValueError, OverflowError):
        logger.warning("[STORE] Skipping event %s with unparseable date: %r", doc_id, raw_date)
        return None

    position = None
    raw_position = data.get("position") or {}
    try:
        position = Position(lat=float(raw_position["lat"]), lng=float(raw_position["lng"]))
    except (KeyError, TypeError, ValueError):
        position = None  # pinned to the fallback coordinate later

    created_at = data.get("createdAt")
    try:
        return Event(
            id=doc_id,
            title=data.get("title") or "Untitled Event",
            description=data.get("description") or "",
            date=date,
            is_free=bool(data.get("isFree", False)),
            category=data.get("category") or "",
            organizer=data.get("organizer") or "",
            phone_number=data.get("phoneNumber"),
            position=position,
            image_url=data.get("imageUrl") or placeholder_image(doc_id),
            photos=list(data.get("photos") or []),
            user_id=data.get("userId"),
            user_display_name=data.get("userDisplayName"),
            created_at=created_at if isinstance(created_at, datetime) else None,
        )
    except (TypeError, ValidationError) as e:
        logger.warning("[STORE] Skipping malformed event %s: %s", doc_id, e)
        return None


def get_firestore_client():
    """Initialise firebase_admin once and return a Firestore client."""
    import firebase_admin
    from firebase_admin import credentials, firestore

    if not firebase_admin._apps:
        if config.FIREBASE_CREDENTIALS:
            cred = credentials.Certificate(config.FIREBASE_CREDENTIALS)
        else:
            cred = credentials.ApplicationDefault()
        firebase_admin.initialize_app(cred)
    return firestore.client()


class FirestoreEventStore(EventStore):
    def __init__(self, db=None):
        self.db = db if db is not None else get_firestore_client()

    def _collection(self):
        return self.db.collection(EVENTS_COLLECTION)

    def _from_snapshot(self, snapshot) -> Optional[Event]:
        return event_from_document(snapshot.id, snapshot.to_dict() or {})

    def list_events(self) -> List[Event]:
        try:
            snapshots = self._collection().stream()
            events = [self._from_snapshot(s) for s in snapshots]
        except Exception as e:
            logger.error("[STORE] Error fetching events from Firestore: %s", e)
            return []
        return [event for event in events if event is not None]

    def list_events_by_user(self, user_id: str) -> List[Event]:
        snapshots = self._collection().where("userId", "==", user_id).stream()
        return [e for e in (self._from_snapshot(s) for s in snapshots) if e is not None]

    def get_event(self, event_id: str) -> Event:
        snapshot = self._collection().document(event_id).get()
        event = self._from_snapshot(snapshot) if snapshot.exists else None
        if event is None:
            raise EventNotFound(f"Event with id '{event_id}' not found.")
        return event

    def add_event(self, data: EventCreate, user_id: Optional[str], display_name: Optional[str] = None) -> Event:
        from firebase_admin import firestore

        doc_ref = self._collection().document()
        doc = _to_document(data.model_dump())
        doc["imageUrl"] = data.image_url or placeholder_image(doc_ref.id)
        doc.update({
            "userId": user_id,
            "userDisplayName": display_name or "Anonymous",
            "createdAt": firestore.SERVER_TIMESTAMP,
        })
        doc_ref.set(doc)
        logger.info("[STORE] Added event %s (%s)", doc_ref.id, data.title)
        return self.get_event(doc_ref.id)

    def _owned_ref(self, event_id: str, user_id: str):
        doc_ref = self._collection().document(event_id)
        snapshot = doc_ref.get()
        if not snapshot.exists:
            raise EventNotFound(f"Event with id '{event_id}' not found.")
        if (snapshot.to_dict() or {}).get("userId") != user_id:
            raise PermissionDenied("Only the event creator can modify or delete this event.")
        return doc_ref

    def update_event(self, event_id: str, updates: EventUpdate, user_id: str) -> Event:
        doc_ref = self._owned_ref(event_id, user_id)
        doc_ref.update(_to_document(updates.model_dump(exclude_none=True)))
        return self.get_event(event_id)

    def delete_event(self, event_id: str, user_id: str) -> None:
        self._owned_ref(event_id, user_id).delete()


def seed_store(store: EventStore) -> int:
    from data.sample_events import get_sample_events

    samples = get_sample_events()
    for sample in samples:
        store.add_event(sample, user_id=None, display_name="Local Vibe")
    return len(samples)


@lru_cache
def get_event_store() -> EventStore:
    """FastAPI dependency returning the configured store."""
    if config.EVENT_STORE == "firestore":
        logger.info("[STORE] Using Firestore event store")
        return FirestoreEventStore()

    logger.info("[STORE] Using in-memory event store")
    store = InMemoryEventStore()
    if config.SEED_SAMPLE_EVENTS:
        seed_store(store)
    return store
