import os
import logging
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)

ENV_PREFIX = "RITUALS_"


@dataclass(frozen=True)
class Settings:
    xp_per_ritual: int = 15
    streak_xp_bonus: int = 2        # extra XP per day of streak, capped below
    max_streak_bonus: int = 20
    base_xp_requirement: int = 100  # XP to go from level 1 to 2
    xp_increment: int = 20
    max_increment_level: int = 100


def _read_int(name: str, default: int) -> int:
    key = ENV_PREFIX + name.upper()
    raw = os.environ.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


def load_settings() -> Settings:
    defaults = Settings()
    settings = Settings(**{
        name: _read_int(name, getattr(defaults, name))
        for name in Settings.__dataclass_fields__
    })
    if settings != defaults:
        logger.info("Using XP settings from environment: %s", settings)
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
