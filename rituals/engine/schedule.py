"""
Scheduling rules — pure functions, no I/O.
"""
from datetime import date

from ..models import Daily, EveryNDays, Frequency, Habit, Monthly, SpecificDays, Weekly
from .dates import DayLike, day_difference, day_of_week, each_day


def is_scheduled(frequency: Frequency, created_at: DayLike, day: DayLike) -> bool:
    """
    True if the habit is due on `day`.
    Nothing is due before the creation day. Weekly and monthly habits are
    due every day; counting once per period is left to the streak and
    yearly calculators.
    """
    diff_days = day_difference(day, created_at)
    if diff_days < 0:
        return False

    if isinstance(frequency, (Daily, Weekly, Monthly)):
        return True
    if isinstance(frequency, SpecificDays):
        return day_of_week(day) in frequency.days
    if isinstance(frequency, EveryNDays):
        # anchored to the creation day
        return diff_days % frequency.n == 0
    raise TypeError(f"unsupported frequency: {frequency!r}")


def scheduled_days(frequency: Frequency, created_at: DayLike, start: DayLike, end: DayLike) -> list[date]:
    """All days in [start, end] on which the habit is due."""
    return [d for d in each_day(start, end) if is_scheduled(frequency, created_at, d)]


def is_due_today(habit: Habit, today: date | None = None) -> bool:
    return is_scheduled(habit.frequency, habit.created_at, today or date.today())
