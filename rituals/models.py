import re
import uuid
from datetime import date, datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

EVERY_N_DAYS_RE = re.compile(r"^every_(\d+)_days$")

FROZEN = {"frozen": True}


# ── Frequency descriptors ─────────────────────────────────────────────────────

class Daily(BaseModel):
    kind: Literal["daily"] = "daily"
    model_config = FROZEN


class Weekly(BaseModel):
    kind: Literal["weekly"] = "weekly"
    model_config = FROZEN


class Monthly(BaseModel):
    kind: Literal["monthly"] = "monthly"
    model_config = FROZEN


class EveryNDays(BaseModel):
    kind: Literal["every_n_days"] = "every_n_days"
    n: int = Field(ge=2)
    model_config = FROZEN


class SpecificDays(BaseModel):
    """Days of week, 0 = Sunday. An empty set is valid and never due."""
    kind: Literal["specific_days"] = "specific_days"
    days: frozenset[int] = frozenset()
    model_config = FROZEN

    @field_validator("days")
    @classmethod
    def validate_days(cls, v):
        bad = sorted(d for d in v if not 0 <= d <= 6)
        if bad:
            raise ValueError(f"days of week must be within 0..6, got {bad}")
        return v


Frequency = Annotated[
    Union[Daily, Weekly, Monthly, EveryNDays, SpecificDays],
    Field(discriminator="kind"),
]


def parse_frequency(tag: str, custom_days: Optional[list[int]] = None) -> Frequency:
    """
    Build a descriptor from a storage tag such as 'daily', 'every_3_days'
    or 'specific_days' (which takes its days from custom_days).
    """
    if tag == "daily":
        return Daily()
    if tag == "weekly":
        return Weekly()
    if tag == "monthly":
        return Monthly()
    if tag == "specific_days":
        return SpecificDays(days=frozenset(custom_days or ()))
    m = EVERY_N_DAYS_RE.match(tag or "")
    if m:
        return EveryNDays(n=int(m.group(1)))
    raise ValueError(f"unknown frequency tag: {tag!r}")


def frequency_tag(frequency: Frequency) -> str:
    if isinstance(frequency, EveryNDays):
        return f"every_{frequency.n}_days"
    return frequency.kind


# ── Completions and derived stats ─────────────────────────────────────────────

class Completion(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    completed_at: Union[datetime, date]
    model_config = FROZEN


class YearlyStats(BaseModel):
    achieved: int = 0
    total_expected: int = 0
    year: int
    model_config = FROZEN

    @property
    def completion_rate(self) -> float:
        """Achieved share of expected occurrences, as a percentage."""
        if self.total_expected == 0:
            return 0.0
        return round(100 * self.achieved / self.total_expected, 1)


class HabitStats(BaseModel):
    current_streak: int = 0
    best_streak: int = 0
    total_completions: int = 0
    xp: int = 0
    yearly_stats: YearlyStats
    model_config = FROZEN


class Habit(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str = Field(min_length=1)
    frequency: Frequency = Field(default_factory=Daily)
    created_at: Union[datetime, date]
    completions: list[Completion] = []

    # Derived — always recomputed from the fields above.
    current_streak: int = 0
    best_streak: int = 0
    total_completions: int = 0
    xp: int = 0
    yearly_stats: Optional[YearlyStats] = None
    model_config = FROZEN
