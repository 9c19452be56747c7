# backend/utils/dates.py

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Tuple

import config
from models.event import DateFilter


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    return datetime.now(tz or config.TIMEZONE)


def to_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Timestamp as local wall-clock time. Naive timestamps already are."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tz or config.TIMEZONE)


def local_date(value: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar day of a timestamp in the configured timezone."""
    return to_local(value, tz).date()


def start_of_week(today: date) -> date:
    """Sunday on or before ``today``."""
    # weekday(): Monday=0 .. Sunday=6
    return today - timedelta(days=(today.weekday() + 1) % 7)


def week_window(today: date, kind: DateFilter) -> Tuple[date, date]:
    """First and last day (inclusive) of the window a week-based filter selects.

    Every window is derived from the same Sunday so the result never depends
    on which filter was evaluated before.
    """
    sunday = start_of_week(today)
    if kind == DateFilter.THIS_WEEK:
        return sunday, sunday + timedelta(days=6)
    if kind == DateFilter.NEXT_WEEK:
        return sunday + timedelta(days=7), sunday + timedelta(days=13)
    if kind == DateFilter.THIS_WEEKEND:
        # Friday and Saturday closing the current Sunday-start week
        return sunday + timedelta(days=5), sunday + timedelta(days=6)
    raise ValueError(f"No week window for date filter: {kind}")
