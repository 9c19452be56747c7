import os
import sys
from datetime import datetime

import pytest

# Add backend to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "backend")))

os.environ.setdefault("EVENT_STORE", "memory")
os.environ.setdefault("SEED_SAMPLE_EVENTS", "false")

from data.store import InMemoryEventStore, get_event_store
from data.users import InMemoryUserStore, get_user_store
from models.event import Event, Position

# Wednesday; its Sunday-start week runs 2025-11-09 .. 2025-11-15
NOW = datetime(2025, 11, 12, 15, 0)


def make_event(event_id="event-1", **overrides) -> Event:
    data = {
        "id": event_id,
        "title": "Jazz Night",
        "description": "Live jazz in the old town",
        "date": datetime(2025, 11, 12, 20, 0),
        "is_free": True,
        "category": "Music",
        "organizer": "Jazz Club",
        "position": Position(lat=44.4300, lng=26.1000),
        "image_url": "https://picsum.photos/seed/jazz/400/300",
    }
    data.update(overrides)
    return Event(**data)


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def store():
    return InMemoryEventStore()


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def client(store, user_store):
    from fastapi.testclient import TestClient
    from main import app

    app.dependency_overrides[get_event_store] = lambda: store
    app.dependency_overrides[get_user_store] = lambda: user_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    def _register(email="ana@example.com", password="secret123", display_name="Ana"):
        res = client.post("/register", json={"email": email, "password": password, "display_name": display_name})
        assert res.status_code == 201, res.text
        return {"Authorization": f"Bearer {res.json()['access_token']}"}
    return _register
