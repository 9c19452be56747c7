import argparse
import json
import logging
import os
import sys
from datetime import date
from typing import List

# Fix for CLI execution (keep this for running manually)
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from data.store import get_event_store
from models.event import EventCreate
from tools.event_generator import EventGeneratorTool

logger = logging.getLogger(__name__)


def save_events(events: List[EventCreate], filename: str) -> None:
    with open(filename, "w", encoding="utf-8") as f:
        json.dump([event.model_dump(mode="json") for event in events], f, indent=2, ensure_ascii=False)


def import_events(events: List[EventCreate]) -> int:
    store = get_event_store()
    for event in events:
        store.add_event(event, user_id=None, display_name=event.organizer)
    return len(events)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate upcoming events for a city with Gemini")
    parser.add_argument("city", nargs="?", default="Bucharest, Romania", help="City to generate events for")
    parser.add_argument("--count", type=int, default=50, help="Number of events to ask for (default: 50)")
    parser.add_argument("--output", help="Output JSON file (default: events_<city>_<date>.json)")
    parser.add_argument("--import", dest="do_import", action="store_true", help="Also add the events to the configured store")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    result = EventGeneratorTool()({"city": args.city, "count": args.count})
    if result.get("error"):
        logger.error("Generation failed (%s); using %s events", result["error"], result.get("source"))

    events = result.get("events", [])
    slug = args.city.split(",")[0].strip().lower().replace(" ", "_")
    filename = args.output or f"events_{slug}_{date.today().isoformat()}.json"
    save_events(events, filename)
    logger.info("Saved %d events to %s", len(events), filename)

    if args.do_import:
        logger.info("Imported %d events into the %s store", import_events(events), os.getenv("EVENT_STORE", "memory"))

    for idx, event in enumerate(events[:3], start=1):
        logger.info("%d. %s | %s | %s | free=%s", idx, event.title, event.date.isoformat(), event.category, event.is_free)
    return 0 if result["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
