"""
Streak tracking — pure functions, no I/O.
"""
import logging
from datetime import date, tzinfo
from typing import Iterable, NamedTuple

from ..models import Daily, EveryNDays, Frequency, Monthly, SpecificDays, Weekly
from .dates import DayLike, day_difference, distinct_days

logger = logging.getLogger(__name__)


class StreakResult(NamedTuple):
    current: int
    best: int


def max_gap(frequency: Frequency) -> int:
    """Largest gap in calendar days between two completions that keeps a streak alive."""
    if isinstance(frequency, EveryNDays):
        return frequency.n
    if isinstance(frequency, Weekly):
        return 7
    if isinstance(frequency, Monthly):
        return 31
    if isinstance(frequency, SpecificDays) and frequency.days:
        days = sorted(frequency.days)
        gaps = [b - a for a, b in zip(days, days[1:])]
        # wrap around the week, e.g. Fri(5) -> Mon(1) is 3 days
        gaps.append(7 - days[-1] + days[0])
        return max(gaps)
    if isinstance(frequency, (Daily, SpecificDays)):
        return 1
    raise TypeError(f"unsupported frequency: {frequency!r}")


def longest_run(days: list[date], gap: int) -> int:
    """Longest run of sorted days whose consecutive gaps are all <= gap."""
    if not days:
        return 0
    best = temp = 1
    for prev, cur in zip(days, days[1:]):
        if day_difference(cur, prev) <= gap:
            temp += 1
        else:
            temp = 1
        best = max(best, temp)
    return best


def trailing_run(days: list[date], gap: int) -> int:
    """Length of the run ending at the most recent day."""
    if not days:
        return 0
    run = 1
    for i in range(len(days) - 1, 0, -1):
        if day_difference(days[i], days[i - 1]) > gap:
            break
        run += 1
    return run


def compute_streak(
    frequency: Frequency,
    completions: Iterable[DayLike],
    today: date | None = None,
    best_so_far: int = 0,
    tz: tzinfo | None = None,
) -> StreakResult:
    """
    Returns (current, best) by replaying the whole completion history.

    The current streak is 0 once more than max_gap days have passed since the
    last completion. `best_so_far` carries a previously stored best forward
    for incremental updates; pass 0 for a fresh rebuild. Aware timestamps
    are cut to days in `tz` when one is given.
    """
    today = today or date.today()
    days = distinct_days(completions, tz)
    if not days:
        return StreakResult(0, best_so_far)

    gap = max_gap(frequency)
    best = max(best_so_far, longest_run(days, gap))

    if day_difference(today, days[-1]) > gap:
        current = 0
    else:
        current = trailing_run(days, gap)

    logger.debug("streak over %d days (gap=%d): current=%d best=%d", len(days), gap, current, best)
    return StreakResult(current, best)
