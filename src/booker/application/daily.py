"""
Daily aggregation: what is due on a given day and how long it will take.

This is a pure computation module with no I/O. Overdue items are never
dropped; they stay due until completed and are shown under the reference day.
"""

import datetime as dt
from collections.abc import Iterable

from booker.domain.models import DailyStats, ReviewItem

from .display import format_minutes


def is_due(item: ReviewItem, today: dt.date) -> bool:
    """True for an unarchived item due on or before ``today``."""
    return not item.is_archived and item.next_due_date <= today


def due_items(items: Iterable[ReviewItem], today: dt.date) -> list[ReviewItem]:
    return [item for item in items if is_due(item, today)]


def daily_stats(items: Iterable[ReviewItem], today: dt.date) -> DailyStats:
    """
    Summarize the due-or-overdue workload as of ``today``.

    Every review is assumed to take as long as the original study session.
    """
    todo = due_items(items, today)
    total = sum(item.original_duration for item in todo)

    return DailyStats(
        count=len(todo),
        total_minutes=total,
        time_string=format_minutes(total),
        has_tasks=len(todo) > 0,
    )


def active_items(items: Iterable[ReviewItem]) -> list[ReviewItem]:
    """Unarchived items, soonest due first."""
    return sorted((item for item in items if not item.is_archived), key=lambda i: i.next_due_date)


def archived_items(items: Iterable[ReviewItem]) -> list[ReviewItem]:
    """Archived items, most recently created first."""
    return sorted(
        (item for item in items if item.is_archived),
        key=lambda i: i.created_at,
        reverse=True,
    )


def group_by_effective_date(
    items: Iterable[ReviewItem], today: dt.date
) -> dict[dt.date, list[ReviewItem]]:
    """
    Bucket unarchived items by the day they should be shown under.

    Overdue items are pulled forward into today's bucket. This is a view only:
    the stored due date is never changed. Buckets come out in date order.
    """
    groups: dict[dt.date, list[ReviewItem]] = {}
    for item in active_items(items):
        key = max(item.next_due_date, today)
        groups.setdefault(key, []).append(item)
    return groups
