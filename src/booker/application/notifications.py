"""
Once-per-day due check.

Safe to run any number of times: a notification is sent at most once per
effective day, tracked by the day key stored in the session state.
"""

import datetime as dt
import logging
from collections.abc import Sequence

from booker.domain.constants import NOTIFICATION_BODY, NOTIFICATION_TITLE
from booker.domain.models import DailyStats, ReviewItem, SessionState
from booker.domain.ports import Notifier

from .daily import daily_stats
from .dates import day_key

logger = logging.getLogger(__name__)


def build_notification(stats: DailyStats) -> tuple[str, str]:
    """Title and body for the daily reminder."""
    body = NOTIFICATION_BODY.format(count=stats.count, time_string=stats.time_string)
    return NOTIFICATION_TITLE, body


def check_and_notify(
    items: Sequence[ReviewItem],
    today: dt.date,
    state: SessionState,
    notifier: Notifier,
) -> bool:
    """
    Notify about today's workload unless already done for this day.

    ``state.last_notified`` is updated only when a notification was sent.

    Returns:
        True if a notification was sent.
    """
    if not items:
        return False

    if not state.notifications_granted:
        logger.debug("Notifications not granted; skipping due check")
        return False

    key = day_key(today)
    if state.last_notified == key:
        logger.debug(f"Already notified for {key}")
        return False

    stats = daily_stats(items, today)
    if not stats.has_tasks:
        return False

    title, body = build_notification(stats)
    notifier.notify(title, body)
    state.last_notified = key
    logger.info(f"Sent daily notification for {key}: {stats.count} due")
    return True
