import datetime as dt

import pytest

from booker.application.daily import (
    active_items,
    archived_items,
    daily_stats,
    due_items,
    group_by_effective_date,
)
from booker.application.display import format_minutes, language_code, stage_label
from booker.domain.models import DailyStats, Language

T = dt.date(2024, 3, 10)


def days(n: int) -> dt.date:
    return T + dt.timedelta(days=n)


@pytest.fixture
def mixed_items(make_item):
    return [
        make_item(id="overdue", next_due_date=days(-1), original_duration=20),
        make_item(id="due", next_due_date=days(0), original_duration=30),
        make_item(id="later", next_due_date=days(1), original_duration=40),
    ]


def test_daily_stats_counts_due_and_overdue(mixed_items):
    stats = daily_stats(mixed_items, T)

    assert stats == DailyStats(count=2, total_minutes=50, time_string="50m", has_tasks=True)


def test_daily_stats_ignores_archived(make_item):
    items = [make_item(id="a", next_due_date=days(-3), stage=5, is_archived=True)]

    stats = daily_stats(items, T)

    assert stats.count == 0
    assert stats.has_tasks is False
    assert stats.time_string == "0m"


def test_daily_stats_empty():
    assert daily_stats([], T) == DailyStats(count=0, total_minutes=0, time_string="0m", has_tasks=False)


def test_daily_stats_formats_hours(make_item):
    items = [
        make_item(id="a", next_due_date=T, original_duration=60),
        make_item(id="b", next_due_date=T, original_duration=30),
    ]
    assert daily_stats(items, T).time_string == "1h 30m"


def test_overdue_items_accumulate(make_item):
    items = [make_item(id=str(n), next_due_date=days(-n), original_duration=10) for n in range(1, 6)]
    assert daily_stats(items, T).count == 5


def test_due_items(mixed_items):
    assert [i.id for i in due_items(mixed_items, T)] == ["overdue", "due"]


# ---------- grouping ----------


def test_group_pulls_overdue_into_today(mixed_items):
    groups = group_by_effective_date(mixed_items, T)

    assert list(groups) == [T, days(1)]
    assert [i.id for i in groups[T]] == ["overdue", "due"]
    assert [i.id for i in groups[days(1)]] == ["later"]


def test_group_does_not_change_stored_due_date(mixed_items):
    groups = group_by_effective_date(mixed_items, T)
    overdue = groups[T][0]
    assert overdue.next_due_date == days(-1)


def test_group_skips_archived(make_item):
    items = [make_item(id="x", stage=5, is_archived=True, next_due_date=T)]
    assert group_by_effective_date(items, T) == {}


def test_group_sorts_before_bucketing(make_item):
    items = [
        make_item(id="c", next_due_date=days(7)),
        make_item(id="a", next_due_date=days(-2)),
        make_item(id="b", next_due_date=days(3)),
        make_item(id="d", next_due_date=days(-5)),
    ]

    groups = group_by_effective_date(items, T)

    assert list(groups) == [T, days(3), days(7)]
    assert [i.id for i in groups[T]] == ["d", "a"]


def test_active_and_archived_ordering(make_item):
    items = [
        make_item(id="late", next_due_date=days(9)),
        make_item(id="old", created_at=days(-30), stage=5, is_archived=True),
        make_item(id="soon", next_due_date=days(2)),
        make_item(id="new", created_at=days(-3), stage=5, is_archived=True),
    ]

    assert [i.id for i in active_items(items)] == ["soon", "late"]
    assert [i.id for i in archived_items(items)] == ["new", "old"]


# ---------- display helpers ----------


@pytest.mark.parametrize(
    "minutes, expected", [(0, "0m"), (45, "45m"), (60, "1h 0m"), (125, "2h 5m")]
)
def test_format_minutes(minutes, expected):
    assert format_minutes(minutes) == expected


def test_stage_labels():
    assert stage_label(0) == "New"
    assert stage_label(3) == "Review 3"
    assert stage_label(5) == "Review 5 (final)"


def test_language_codes():
    assert language_code(Language.SPANISH) == "ES"
    assert language_code("Włoski") == "IT"
    assert language_code(Language.OTHER) == "--"
