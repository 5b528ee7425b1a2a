"""
Yearly progress — expected vs. achieved occurrences for one calendar year.
"""
import logging
from datetime import date, tzinfo
from typing import Iterable

from ..models import Daily, EveryNDays, Frequency, Monthly, SpecificDays, Weekly, YearlyStats
from .dates import (
    DayLike, distinct_days, each_day, each_month, each_week, same_month, same_week, start_of_day,
)
from .schedule import is_scheduled

logger = logging.getLogger(__name__)


def compute_yearly_stats(
    completions: Iterable[DayLike],
    frequency: Frequency,
    created_at: DayLike,
    year: int,
    through: date | None = None,
    tz: tzinfo | None = None,
) -> YearlyStats:
    """
    Day-based habits count scheduled days (from creation onwards) and the
    completed ones among them. Weekly and monthly habits count Sunday-start
    weeks / months of the year and those holding at least one completion.
    `through` cuts the range short for year-to-date figures; `tz` is the
    zone aware timestamps are cut to days in.
    """
    start = date(year, 1, 1)
    end = date(year, 12, 31)
    if through is not None:
        end = min(end, through)

    days = distinct_days(completions, tz)
    created = start_of_day(created_at, tz)

    if isinstance(frequency, (Daily, SpecificDays, EveryNDays)):
        done = set(days)
        expected = [d for d in each_day(start, end) if is_scheduled(frequency, created, d)]
        achieved = sum(1 for d in expected if d in done)
        total_expected = len(expected)
    elif isinstance(frequency, Weekly):
        weeks = each_week(start, end)
        total_expected = len(weeks)
        achieved = sum(1 for w in weeks if any(same_week(d, w) for d in days))
    elif isinstance(frequency, Monthly):
        months = each_month(start, end)
        total_expected = len(months)
        achieved = sum(1 for m in months if any(same_month(d, m) for d in days))
    else:
        raise TypeError(f"unsupported frequency: {frequency!r}")

    logger.debug("yearly stats %d: %d/%d", year, achieved, total_expected)
    return YearlyStats(achieved=achieved, total_expected=total_expected, year=year)
