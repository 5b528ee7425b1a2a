import os

import pytest

from rituals.config import ENV_PREFIX, get_settings


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Every test starts from the built-in XP constants."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
