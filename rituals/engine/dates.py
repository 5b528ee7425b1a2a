"""
Calendar helpers — pure functions, no DB access.

Everything works on whole calendar days: timestamps are truncated to their
date before any comparison, so DST shifts never change a day difference.
"""
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable

from dateutil.parser import isoparse
from dateutil.rrule import DAILY, MONTHLY, WEEKLY, rrule

SUNDAY = 0

DayLike = date | datetime | str


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp ("2024-01-05" or "2024-01-05T08:30:00Z")."""
    return isoparse(value)


def start_of_day(value: DayLike, tz: tzinfo | None = None) -> date:
    """
    Truncate a timestamp to its calendar day.
    Aware datetimes are converted to `tz` first when one is given.
    """
    if isinstance(value, str):
        value = parse_timestamp(value)
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def day_difference(a: DayLike, b: DayLike) -> int:
    """Whole calendar days from b to a (a - b)."""
    return (start_of_day(a) - start_of_day(b)).days


def same_day(a: DayLike, b: DayLike) -> bool:
    return start_of_day(a) == start_of_day(b)


def day_of_week(value: DayLike) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return (start_of_day(value).weekday() + 1) % 7


def start_of_week(value: DayLike, week_starts_on: int = SUNDAY) -> date:
    day = start_of_day(value)
    offset = (day_of_week(day) - week_starts_on) % 7
    return day - timedelta(days=offset)


def same_week(a: DayLike, b: DayLike, week_starts_on: int = SUNDAY) -> bool:
    return start_of_week(a, week_starts_on) == start_of_week(b, week_starts_on)


def start_of_month(value: DayLike) -> date:
    return start_of_day(value).replace(day=1)


def same_month(a: DayLike, b: DayLike) -> bool:
    return start_of_month(a) == start_of_month(b)


def _as_datetime(day: date) -> datetime:
    return datetime(day.year, day.month, day.day)


def each_day(start: DayLike, end: DayLike) -> list[date]:
    """Every calendar day in [start, end]; empty when end precedes start."""
    first, last = start_of_day(start), start_of_day(end)
    if last < first:
        return []
    return [dt.date() for dt in rrule(DAILY, dtstart=_as_datetime(first), until=_as_datetime(last))]


def each_week(start: DayLike, end: DayLike, week_starts_on: int = SUNDAY) -> list[date]:
    """
    Start day of every week overlapping [start, end].
    The first entry may precede `start` when the range opens mid-week.
    """
    first, last = start_of_day(start), start_of_day(end)
    if last < first:
        return []
    first_week = start_of_week(first, week_starts_on)
    return [dt.date() for dt in rrule(WEEKLY, dtstart=_as_datetime(first_week), until=_as_datetime(last))]


def each_month(start: DayLike, end: DayLike) -> list[date]:
    """First day of every month overlapping [start, end]."""
    first, last = start_of_day(start), start_of_day(end)
    if last < first:
        return []
    first_month = start_of_month(first)
    return [dt.date() for dt in rrule(MONTHLY, dtstart=_as_datetime(first_month), until=_as_datetime(last))]


def distinct_days(values: Iterable[DayLike], tz: tzinfo | None = None) -> list[date]:
    """Deduplicate timestamps by calendar day; returned ascending."""
    return sorted({start_of_day(v, tz) for v in values})
