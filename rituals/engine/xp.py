"""
XP computation rules — pure functions, no I/O.
"""
from dataclasses import dataclass
from datetime import tzinfo
from typing import Iterable

from ..config import Settings, get_settings
from ..models import Frequency, Habit
from .dates import DayLike, day_difference, distinct_days
from .streak import max_gap


def streak_bonus(streak: int, settings: Settings | None = None) -> int:
    """min(streak * STREAK_XP_BONUS, MAX_STREAK_BONUS)"""
    settings = settings or get_settings()
    return min(streak * settings.streak_xp_bonus, settings.max_streak_bonus)


def compute_xp(
    completions: Iterable[DayLike],
    frequency: Frequency,
    settings: Settings | None = None,
    tz: tzinfo | None = None,
) -> int:
    """
    Flat XP per distinct completion day, plus a streak bonus for every day
    that extends a streak. The first day of a streak earns no bonus.
    Aware timestamps are cut to days in `tz` when one is given.
    """
    settings = settings or get_settings()
    days = distinct_days(completions, tz)
    total = len(days) * settings.xp_per_ritual

    gap = max_gap(frequency)
    temp_streak = 1
    for prev, cur in zip(days, days[1:]):
        if day_difference(cur, prev) <= gap:
            temp_streak += 1
            total += streak_bonus(temp_streak, settings)
        else:
            temp_streak = 1
    return total


def total_habit_xp(habits: Iterable[Habit]) -> int:
    return sum(h.xp for h in habits)


# ── Levels ────────────────────────────────────────────────────────────────────

@dataclass
class LevelInfo:
    level: int
    current_level_xp: int   # XP earned inside the current level
    next_level_xp: int      # XP needed to leave the current level
    progress: float         # percent of the way to the next level
    total_xp: int


def xp_for_level(level: int, settings: Settings | None = None) -> int:
    """XP needed to go from `level` to `level + 1`; the increment stops growing at max_increment_level."""
    settings = settings or get_settings()
    effective = min(level, settings.max_increment_level)
    return settings.base_xp_requirement + (effective - 1) * settings.xp_increment


def compute_level(total_xp: int, settings: Settings | None = None) -> LevelInfo:
    """Levels start at 1; negative XP is treated as 0."""
    settings = settings or get_settings()
    level = 1
    remaining = max(total_xp, 0)
    needed = xp_for_level(level, settings)
    while remaining >= needed:
        remaining -= needed
        level += 1
        needed = xp_for_level(level, settings)
    return LevelInfo(
        level=level,
        current_level_xp=remaining,
        next_level_xp=needed,
        progress=remaining / needed * 100,
        total_xp=total_xp,
    )
