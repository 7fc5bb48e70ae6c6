import datetime as dt
from dataclasses import replace

import pytest

from booker.application.service import StudyService
from booker.domain.models import Category, Language, ReviewItem
from booker.infrastructure.adapters import JsonFileStore, JsonStateStore, TieredStore, YamlFileStore
from booker.infrastructure.transfer import TextTransfer

# Fixed "real" day so date arithmetic in tests never depends on when they run.
DAY_ZERO = dt.date(2024, 3, 10)


@pytest.fixture
def day_zero():
    return DAY_ZERO


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and data
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("BOOKER_DATA_DIR", raising=False)
    return home


@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "booker-data"
    d.mkdir()
    return d


@pytest.fixture
def make_item():
    """Factory for items with sensible defaults; override any field by keyword."""

    def _make(**overrides) -> ReviewItem:
        base = ReviewItem(
            id="item_01HTEST0000000000000000001",
            topic="Subjuntivo presente",
            description=None,
            language=Language.SPANISH,
            category=Category.GRAMMAR,
            original_duration=30,
            created_at=DAY_ZERO,
            next_due_date=DAY_ZERO + dt.timedelta(days=1),
            stage=1,
            is_archived=False,
        )
        return replace(base, **overrides)

    return _make


@pytest.fixture
def tiered_store(data_dir):
    return TieredStore(
        primary=JsonFileStore(data_dir / "items.json"),
        fallback=YamlFileStore(data_dir / "items.yaml"),
    )


@pytest.fixture
def service(data_dir, tiered_store):
    return StudyService(
        tiered_store,
        JsonStateStore(data_dir / "state.json"),
        notifier=None,
        codec=TextTransfer(),
        today_provider=lambda: DAY_ZERO,
    )
