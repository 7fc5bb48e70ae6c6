"""
Date-to-items lookup for calendar collaborators.

The calendar only needs to know which items (actual or projected) land on a
given day, plus the Monday-first layout of a month.
"""

import calendar
import datetime as dt
from collections.abc import Iterable

from booker.domain.models import Category, Language, ProjectionEntry, ReviewItem

from .scheduler import project_schedule

CalendarEntry = tuple[ReviewItem, ProjectionEntry]


def calendar_map(
    items: Iterable[ReviewItem],
    language: Language | None = None,
    category: Category | None = None,
) -> dict[dt.date, list[CalendarEntry]]:
    """
    Map each day to the review entries projected onto it.

    Args:
        items: The item collection.
        language: Only include items in this language.
        category: Only include items of this category.
    """
    by_date: dict[dt.date, list[CalendarEntry]] = {}

    for item in items:
        if language is not None and item.language != language:
            continue
        if category is not None and item.category != category:
            continue
        for entry in project_schedule(item):
            by_date.setdefault(entry.date, []).append((item, entry))

    return by_date


def month_grid(year: int, month: int) -> list[list[dt.date | None]]:
    """Week rows for a month, Monday first; padding cells are None."""
    cal = calendar.Calendar(firstweekday=calendar.MONDAY)
    return [
        [dt.date(year, month, day) if day else None for day in week]
        for week in cal.monthdayscalendar(year, month)
    ]
