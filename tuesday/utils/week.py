import re
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta, timezone
from typing import TypeVar

from tuesday.core.constants import WEEKDAYS

T = TypeVar("T")

ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_iso_date(value: str) -> date | None:
    """Parse a strict ``YYYY-MM-DD`` string. Returns None when it is malformed or not a real date."""
    if not ISO_DATE_PATTERN.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def get_week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``. Sunday belongs to the week before."""
    weekday = day.isoweekday()  # Monday=1 .. Sunday=7
    offset = -6 if weekday == 7 else 1 - weekday
    return day + timedelta(days=offset)


def resolve_week_start(value: str | None, *, today: date | None = None) -> date | None:
    """Monday of the requested week.

    An absent value means the current (UTC) week. Returns None when ``value``
    is present but is not a valid ``YYYY-MM-DD`` date.
    """
    if not value:
        return get_week_start(today or datetime.now(timezone.utc).date())

    parsed = parse_iso_date(value)
    if parsed is None:
        return None
    return get_week_start(parsed)


def week_days(week_start: date) -> list[tuple[str, date]]:
    """(weekday name, date) for the seven days starting at ``week_start``."""
    return [(name, week_start + timedelta(days=i)) for i, name in enumerate(WEEKDAYS)]


def bucket_by_day(
    week_start: date,
    items: Iterable[T],
    deadline_of: Callable[[T], str | None],
) -> list[tuple[str, str, list[T]]]:
    """Group items into (weekday, iso date, items) buckets by exact deadline string match.

    Items whose deadline falls outside the week are dropped; input order is kept
    within each bucket.
    """
    items = list(items)
    buckets = []
    for weekday, day in week_days(week_start):
        iso_day = day.isoformat()
        buckets.append((weekday, iso_day, [item for item in items if deadline_of(item) == iso_day]))
    return buckets


def shift_week(week_start: date, weeks: int) -> date:
    """Monday ``weeks`` weeks away from the week containing ``week_start``."""
    return get_week_start(week_start + timedelta(weeks=weeks))


def format_week_range(week_start: str, week_end: str) -> str:
    """Short label such as ``Feb 23 - Mar 1``."""
    start = date.fromisoformat(week_start)
    end = date.fromisoformat(week_end)
    return f"{start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}"
