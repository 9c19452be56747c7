"""Tests for the Local Vibe HTTP API."""

import asyncio
import time
from datetime import timedelta
from unittest.mock import patch

import httpx

from conftest import make_event
from models.event import Position
from utils.dates import now_local

EVENT_PAYLOAD = {
    "title": "Poetry Slam",
    "description": "Open mic for poets",
    "date": "2025-11-20T19:30:00",
    "is_free": True,
    "category": "Art",
    "organizer": "Words Collective",
    "phone_number": "+40 700 111 222",
    "position": {"lat": 44.435, "lng": 26.099},
}


def seed(store, *events):
    store._events.update({event.id: event for event in events})


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root_endpoint(client):
    data = client.get("/").json()
    assert data["name"] == "Local Vibe API"
    assert "docs" in data


def test_genres_endpoint(client):
    assert "Music" in client.get("/genres").json()["genres"]


def test_list_events_with_default_filters_returns_everything(client, store):
    seed(store, make_event("a"), make_event("b", is_free=False))
    data = client.get("/events").json()
    assert data["total_count"] == 2
    assert [e["id"] for e in data["events"]] == ["a", "b"]


def test_list_events_price_and_search(client, store):
    seed(
        store,
        make_event("jazz", title="Jazz Night", is_free=True),
        make_event("opera", title="Opera Gala", description="Verdi", is_free=False),
    )
    assert [e["id"] for e in client.get("/events", params={"price": "free"}).json()["events"]] == ["jazz"]
    assert [e["id"] for e in client.get("/events", params={"price": "paid"}).json()["events"]] == ["opera"]
    assert [e["id"] for e in client.get("/events", params={"search": "verdi"}).json()["events"]] == ["opera"]


def test_list_events_today(client, store):
    now = now_local()
    seed(store, make_event("today", date=now), make_event("later", date=now + timedelta(days=30)))
    data = client.get("/events", params={"date": "today"}).json()
    assert [e["id"] for e in data["events"]] == ["today"]


def test_list_events_distance_and_genres(client, store):
    seed(
        store,
        make_event("near-music", category="Music", position=Position(lat=44.43, lng=26.10)),
        make_event("near-art", category="Art", position=Position(lat=44.43, lng=26.10)),
        make_event("cluj-music", category="Music", position=Position(lat=46.7712, lng=23.6236)),
    )
    params = {"lat": 44.4268, "lng": 26.1025, "max_distance": 50, "genres": ["Music"]}
    data = client.get("/events", params=params).json()

    assert [e["id"] for e in data["events"]] == ["near-music"]
    assert data["events"][0]["distance"] < 1


def test_list_events_annotates_distance(client, store):
    seed(store, make_event("a", position=Position(lat=44.9365, lng=26.0134)))
    event = client.get("/events", params={"lat": 44.4268, "lng": 26.1025}).json()["events"][0]
    assert 50 < event["distance"] < 65


def test_suggested_ids_override_filters(client, store):
    seed(store, make_event("a", is_free=True), make_event("b", is_free=False), make_event("c", is_free=True))
    params = {"price": "free", "search": "no match", "suggested": ["c", "b"]}
    data = client.get("/events", params=params).json()
    assert [e["id"] for e in data["events"]] == ["b", "c"]


def test_unknown_suggested_ids_fall_back_to_filters(client, store):
    seed(store, make_event("a", is_free=True), make_event("b", is_free=False))
    data = client.get("/events", params={"price": "paid", "suggested": ["ghost"]}).json()
    assert [e["id"] for e in data["events"]] == ["b"]


def test_invalid_filter_value_is_rejected(client):
    assert client.get("/events", params={"price": "cheap"}).status_code == 422


def test_get_event(client, store):
    seed(store, make_event("a"))
    assert client.get("/events/a").json()["title"] == "Jazz Night"
    assert client.get("/events/missing").status_code == 404


def test_create_event_requires_auth(client):
    assert client.post("/events", json=EVENT_PAYLOAD).status_code in (401, 403)


def test_create_event(client, store, auth_headers):
    headers = auth_headers()
    response = client.post("/events", json=EVENT_PAYLOAD, headers=headers)

    assert response.status_code == 201
    created = response.json()
    assert created["user_display_name"] == "Ana"
    assert created["image_url"].startswith("https://picsum.photos/seed/")
    assert store.get_event(created["id"]).title == "Poetry Slam"


def test_create_event_missing_required_fields(client, auth_headers):
    payload = dict(EVENT_PAYLOAD)
    del payload["phone_number"]
    assert client.post("/events", json=payload, headers=auth_headers()).status_code == 422


def test_my_events_update_and_delete(client, auth_headers):
    owner = auth_headers("owner@example.com")
    other = auth_headers("other@example.com")

    event_id = client.post("/events", json=EVENT_PAYLOAD, headers=owner).json()["id"]

    mine = client.get("/events/mine", headers=owner).json()
    assert [e["id"] for e in mine["events"]] == [event_id]
    assert client.get("/events/mine", headers=other).json()["total_count"] == 0

    assert client.patch(f"/events/{event_id}", json={"title": "Nope"}, headers=other).status_code == 403

    updated = client.patch(f"/events/{event_id}", json={"title": "Poetry Slam Finals"}, headers=owner)
    assert updated.status_code == 200
    assert updated.json()["title"] == "Poetry Slam Finals"

    assert client.delete(f"/events/{event_id}", headers=other).status_code == 403
    assert client.delete(f"/events/{event_id}", headers=owner).status_code == 204
    assert client.delete(f"/events/{event_id}", headers=owner).status_code == 404


def test_chat_endpoint_returns_suggestions(client, store):
    now = now_local()
    seed(store, make_event("jazz", date=now), make_event("rock", date=now))

    fake = lambda input_data: {"success": True, "event_ids": ["rock"], "ai_message": "Rock tonight!"}
    with patch("nodes.recommend_node.recommender", fake):
        response = client.post("/chat", json={"message": "something loud"})

    assert response.status_code == 200
    data = response.json()
    assert data["event_ids"] == ["rock"]
    assert data["message"] == "Rock tonight!"
    assert [e["id"] for e in data["suggested_events"]] == ["rock"]


def test_chat_endpoint_rejects_empty_message(client):
    assert client.post("/chat", json={"message": ""}).status_code == 422


@patch("routes.geocode.geocode_address")
def test_geocode_endpoint(mock_geocode, client):
    mock_geocode.return_value = {"lat": 44.4, "lng": 26.1, "address": "Bucharest"}
    assert client.get("/geocode", params={"address": "Bucharest"}).json()["lat"] == 44.4

    mock_geocode.return_value = None
    assert client.get("/geocode", params={"address": "Atlantis"}).status_code == 404


@patch("routes.geocode.reverse_geocode", return_value=None)
def test_reverse_geocode_endpoint_falls_back_to_coordinates(mock_reverse, client):
    data = client.get("/geocode/reverse", params={"lat": 44.42681, "lng": 26.10253}).json()
    assert data["address"] == "44.4268, 26.1025"
    assert data["resolved"] is False


@patch("routes.geocode.search_locations", return_value=[{"display_name": "Ateneu", "lat": 44.44, "lng": 26.09}])
def test_suggest_endpoint(mock_search, client):
    data = client.get("/geocode/suggest", params={"q": "aten"}).json()
    assert data["suggestions"][0]["display_name"] == "Ateneu"
    mock_search.assert_called_once_with("aten", limit=8)


def test_discover_endpoint_uses_generator(client):
    fake_result = {"success": True, "source": "fallback", "events": [], "count": 0}
    with patch("routes.events.EventGeneratorTool") as tool_cls:
        tool_cls.return_value.return_value = fake_result
        data = client.get("/events/discover", params={"city": "Cluj", "count": 5}).json()

    assert data["source"] == "fallback"
    assert tool_cls.return_value.call_args[0][0]["city"] == "Cluj"


def test_update_event_with_edit_form_fields(client, auth_headers):
    owner = auth_headers()
    event_id = client.post("/events", json=EVENT_PAYLOAD, headers=owner).json()["id"]
    updates = {
        "title": "Poetry Night",
        "description": "Open mic, second edition",
        "date": "2025-11-22T20:00:00",
        "category": "Theater",
        "organizer": "Words Collective & Friends",
        "is_free": False,
    }

    updated = client.patch(f"/events/{event_id}", json=updates, headers=owner).json()

    assert updated["title"] == "Poetry Night"
    assert updated["date"].startswith("2025-11-22T20:00")
    assert updated["category"] == "Theater"
    assert updated["is_free"] is False
    assert updated["phone_number"] == EVENT_PAYLOAD["phone_number"]


def test_update_event_cannot_blank_required_fields(client, auth_headers):
    owner = auth_headers()
    event_id = client.post("/events", json=EVENT_PAYLOAD, headers=owner).json()["id"]

    for field in ("title", "description", "organizer", "category"):
        response = client.patch(f"/events/{event_id}", json={field: ""}, headers=owner)
        assert response.status_code == 422, field

    assert client.get(f"/events/{event_id}").json()["title"] == "Poetry Slam"


def test_discover_does_not_block_other_requests(client):
    from main import app

    def slow_generator(payload):
        time.sleep(0.6)
        return {"success": True, "source": "gemini", "events": [], "count": 0}

    async def run():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            async def timed_health():
                await asyncio.sleep(0.05)
                started = time.perf_counter()
                response = await ac.get("/health")
                return response, time.perf_counter() - started

            discover, (health, elapsed) = await asyncio.gather(
                ac.get("/events/discover", params={"city": "Cluj"}),
                timed_health(),
            )
            return discover, health, elapsed

    with patch("routes.events.EventGeneratorTool", return_value=slow_generator):
        discover, health, elapsed = asyncio.run(run())

    assert discover.status_code == 200
    assert health.status_code == 200
    assert elapsed < 0.4


def test_geocode_does_not_block_other_requests(client):
    from main import app

    def slow_geocode(address):
        time.sleep(0.6)
        return {"lat": 44.4, "lng": 26.1, "address": address}

    async def run():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            async def timed_health():
                await asyncio.sleep(0.05)
                started = time.perf_counter()
                await ac.get("/health")
                return time.perf_counter() - started

            geocoded, elapsed = await asyncio.gather(
                ac.get("/geocode", params={"address": "Bucharest"}),
                timed_health(),
            )
            return geocoded, elapsed

    with patch("routes.geocode.geocode_address", slow_geocode):
        geocoded, elapsed = asyncio.run(run())

    assert geocoded.json()["lat"] == 44.4
    assert elapsed < 0.4
