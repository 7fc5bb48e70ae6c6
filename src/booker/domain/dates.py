"""Conversion of arbitrary moments to canonical days (``datetime.date``)."""

import datetime as dt
from typing import Any


def parse_day(moment: Any) -> dt.date | None:
    """
    Strictly convert a moment to its local calendar day.

    Accepts dates, datetimes (aware ones are converted to local time),
    ISO-8601 strings and epoch values in milliseconds.
    Returns None for anything that cannot be interpreted.
    """
    if isinstance(moment, dt.datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone()
        return moment.date()

    if isinstance(moment, dt.date):
        return moment

    if isinstance(moment, bool):
        return None

    if isinstance(moment, (int, float)):
        try:
            return dt.datetime.fromtimestamp(moment / 1000).date()
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(moment, str):
        text = moment.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return parse_day(dt.datetime.fromisoformat(text))
        except ValueError:
            pass
        try:
            return dt.date.fromisoformat(text)
        except ValueError:
            return None

    return None
