import json
from unittest.mock import MagicMock, Mock

from tools.event_generator import EventGeneratorTool, to_event_create

GENERATED = [
    {
        "title": "Rooftop Cinema",
        "description": "Classic films under the stars",
        "date": "2025-11-20",
        "time": "21:00",
        "location": "Str. Lipscani 1",
        "lat": 44.431,
        "lng": 26.101,
        "organizer": "Cinema Club",
        "genre": "Art",
        "isFree": False,
    },
    {"title": "Missing coordinates", "date": "2025-11-21"},
]


def test_to_event_create_combines_date_and_time():
    event = to_event_create(GENERATED[0])
    assert event.date.isoformat() == "2025-11-20T21:00:00"
    assert event.category == "Art"
    assert event.position.lat == 44.431


def test_generator_parses_and_skips_malformed_items():
    model = MagicMock()
    model.generate_content.return_value = Mock(text="Here you go:\n" + json.dumps(GENERATED))

    result = EventGeneratorTool(model=model)({"city": "Bucharest", "count": 2})

    assert result["success"] is True
    assert result["source"] == "gemini"
    assert [e.title for e in result["events"]] == ["Rooftop Cinema"]


def test_generator_retries_then_succeeds():
    model = MagicMock()
    model.generate_content.side_effect = [RuntimeError("overloaded"), Mock(text=json.dumps(GENERATED[:1]))]

    result = EventGeneratorTool(model=model, retry_delay=0)({"city": "Bucharest"})

    assert model.generate_content.call_count == 2
    assert result["count"] == 1


def test_generator_falls_back_after_three_failures():
    model = MagicMock()
    model.generate_content.side_effect = RuntimeError("overloaded")

    result = EventGeneratorTool(model=model, retry_delay=0)({"city": "Bucharest"})

    assert model.generate_content.call_count == 3
    assert result["success"] is False
    assert result["source"] == "fallback"
    assert result["events"]


def test_generator_without_key_returns_samples():
    result = EventGeneratorTool(api_key="")({"city": "Bucharest"})
    assert result["success"] is True
    assert result["source"] == "fallback"
    assert len(result["events"]) == result["count"] > 0


def test_generator_validates_input():
    result = EventGeneratorTool(model=MagicMock())({"city": "Bucharest", "count": 0})
    assert result["success"] is False
    assert "count" in result["error"]
