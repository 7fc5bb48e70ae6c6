"""
Calendar-day helpers.

A canonical day is a ``datetime.date``: it carries no time of day, so values
compare by equality and ordering as pure calendar keys. Nothing in here reads
the clock except ``start_of_day`` when called without a moment.
"""

import datetime as dt
import logging
from typing import Any

from booker.domain.constants import INVALID_DATE_LABEL, RELATIVE_DAY_LABELS
from booker.domain.dates import parse_day

logger = logging.getLogger(__name__)


def start_of_day(moment: Any = None) -> dt.date:
    """
    Normalize a moment to its canonical day (default: now).

    Unparseable input yields today rather than raising.
    """
    if moment is None:
        return dt.date.today()

    day = parse_day(moment)
    if day is None:
        logger.debug(f"Unparseable moment {moment!r}; falling back to today")
        return dt.date.today()
    return day


def add_days(day: dt.date, n: int) -> dt.date:
    """Calendar-day addition (negative n subtracts)."""
    return day + dt.timedelta(days=n)


def day_key(day: dt.date) -> str:
    """Stable string key for a day, used for once-per-day bookkeeping."""
    return day.isoformat()


def format_relative_label(day: Any, reference: Any) -> str:
    """
    Human label for a day relative to the reference day.

    "Today", "Tomorrow" and "Day after tomorrow" for offsets 0..2, otherwise a
    locale-formatted weekday/day/month string such as "Friday, 24 Oct".
    """
    target = parse_day(day)
    ref = parse_day(reference)
    if target is None or ref is None:
        return INVALID_DATE_LABEL

    offset = (target - ref).days
    if offset in RELATIVE_DAY_LABELS:
        return RELATIVE_DAY_LABELS[offset]

    return f"{target:%A}, {target.day} {target:%b}"
