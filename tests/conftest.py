from datetime import datetime, timezone

import pytest

from ariba.domain.models import Card

# 2026-10-19 12:00:00 UTC
NOW = int(datetime(2026, 10, 19, 12, tzinfo=timezone.utc).timestamp())
DAY = 86400


def make_card(**overrides) -> Card:
    fields = {
        "id": "card_1",
        "front_text": "la mer",
        "back_text": "the sea",
        "difficulty": 3.5,
        "easiness_factor": 2.5,
        "interval": 0,
        "repetitions": 0,
        "next_review": 0,
        "tags": ("french", "nouns"),
    }
    fields.update(overrides)
    return Card(**fields)


@pytest.fixture
def fixed_clock():
    """A clock frozen at NOW."""
    return lambda: NOW


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for var in ("ARIBA_DECK_PATH", "ARIBA_PORT", "ARIBA_HOST", "ARIBA_EXPORT_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    return home
