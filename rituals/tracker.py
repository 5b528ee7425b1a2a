"""
Habit lifecycle — create, toggle, edit.

Every mutation re-derives streak, XP and yearly stats from the full
completion history; nothing is tracked incrementally except the stored best
streak, which toggles carry forward.
"""
import logging
from datetime import date, tzinfo
from typing import Optional

from .engine.dates import DayLike, distinct_days, start_of_day
from .engine.streak import compute_streak
from .engine.xp import compute_xp
from .engine.yearly import compute_yearly_stats
from .models import Completion, Daily, Frequency, Habit, HabitStats, frequency_tag

logger = logging.getLogger(__name__)


def compute_stats(
    habit: Habit,
    today: Optional[date] = None,
    year: Optional[int] = None,
    best_so_far: int = 0,
    tz: Optional[tzinfo] = None,
) -> HabitStats:
    today = today or date.today()
    moments = [c.completed_at for c in habit.completions]

    streak = compute_streak(habit.frequency, moments, today=today, best_so_far=best_so_far, tz=tz)
    return HabitStats(
        current_streak=streak.current,
        best_streak=streak.best,
        total_completions=len(distinct_days(moments, tz)),
        xp=compute_xp(moments, habit.frequency, tz=tz),
        yearly_stats=compute_yearly_stats(
            moments, habit.frequency, habit.created_at, year or today.year, tz=tz,
        ),
    )


def _apply(habit: Habit, stats: HabitStats) -> Habit:
    return habit.model_copy(update=dict(stats))


def recompute(habit: Habit, today: Optional[date] = None, tz: Optional[tzinfo] = None) -> Habit:
    """Full rebuild: the best streak is derived from the current completions only."""
    stats = compute_stats(habit, today=today, tz=tz)
    logger.info("Habit %s rebuilt: streak=%d best=%d xp=%d",
                habit.id[:8], stats.current_streak, stats.best_streak, stats.xp)
    return _apply(habit, stats)


def create_habit(
    title: str,
    frequency: Optional[Frequency] = None,
    created_at: Optional[DayLike] = None,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> Habit:
    today = today or date.today()
    habit = Habit(
        title=title,
        frequency=frequency or Daily(),
        created_at=created_at or today,
    )
    habit = _apply(habit, compute_stats(habit, today=today, tz=tz))
    logger.info("Habit created: %s (%s)", habit.id[:8], frequency_tag(habit.frequency))
    return habit


def toggle_completion(
    habit: Habit,
    day: DayLike,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> Habit:
    """
    Mark `day` done, or undo it if it is already done.
    Undoing removes every completion recorded on that calendar day, with
    days taken in `tz` for aware timestamps.
    """
    target = start_of_day(day, tz)
    kept = [c for c in habit.completions if start_of_day(c.completed_at, tz) != target]

    if len(kept) == len(habit.completions):
        completions = kept + [Completion(completed_at=target)]
        action = "completed"
    else:
        completions = kept
        action = "uncompleted"

    updated = habit.model_copy(update={"completions": completions})
    stats = compute_stats(updated, today=today, best_so_far=habit.best_streak, tz=tz)
    logger.info("Habit %s %s on %s: streak=%d best=%d",
                habit.id[:8], action, target, stats.current_streak, stats.best_streak)
    return _apply(updated, stats)


def update_habit(
    habit: Habit,
    title: Optional[str] = None,
    frequency: Optional[Frequency] = None,
    created_at: Optional[DayLike] = None,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> Habit:
    """Edit a habit; changing its frequency or creation date forces a full rebuild."""
    updates = {}
    if title is not None:
        updates["title"] = title
    if frequency is not None:
        updates["frequency"] = frequency
    if created_at is not None:
        updates["created_at"] = created_at

    # revalidate so a bad title or frequency is rejected
    updated = Habit.model_validate({**habit.model_dump(), **updates})
    if frequency is None and created_at is None:
        return updated
    return recompute(updated, today=today, tz=tz)
