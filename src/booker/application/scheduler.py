"""
Scheduling engine: item lifecycle and review-timeline projection.

Items move through stages 0..5. Logging creates an item at stage 1 (the
study session itself counts as the first exposure); each completed review
advances the stage by exactly one and re-anchors the next due date to the
day the review was actually done. Reaching the final stage archives the item.

All functions are pure. "Today" is always passed in by the caller.
"""

import datetime as dt
import logging
import math
from dataclasses import replace
from typing import Any

from ulid import ULID

from booker.domain.constants import (
    FINAL_STAGE,
    FLUENCY_SHARE,
    INITIAL_STAGE,
    ITEM_ID_PREFIX,
    MAX_PROJECTION_STEPS,
)
from booker.domain.errors import ItemValidationError
from booker.domain.models import (
    Category,
    EntryKind,
    Language,
    ProjectionEntry,
    ReviewItem,
    TimeSplit,
    parse_category,
    parse_language,
)

from .dates import add_days, start_of_day
from .intervals import interval_for_stage

logger = logging.getLogger(__name__)

# Share of the session treated as fluency drilling, per category.
FLUENCY_SHARES: dict[Category, float] = {
    Category.GRAMMAR: FLUENCY_SHARE,
}


def generate_item_id() -> str:
    """Generate a stable, sortable item ID using ULID."""
    return f"{ITEM_ID_PREFIX}{ULID()}"


def next_due_date(completed_stage: int, completed_on: Any) -> dt.date | None:
    """Due day of the review following ``completed_stage``, or None if terminal."""
    interval = interval_for_stage(completed_stage)
    if interval is None:
        return None
    return add_days(start_of_day(completed_on), interval)


def log_item(
    topic: str,
    description: str | None,
    language: Language | str,
    category: Category | str,
    duration_minutes: int,
    reference_date: Any,
    item_id: str | None = None,
) -> ReviewItem:
    """
    Create a freshly studied item.

    Raises:
        ItemValidationError: if the topic is blank or the duration is not a
            positive whole number of minutes.
    """
    if topic is None or not str(topic).strip():
        raise ItemValidationError("Topic must not be empty.")

    if (
        isinstance(duration_minutes, bool)
        or not isinstance(duration_minutes, int)
        or duration_minutes <= 0
    ):
        raise ItemValidationError(
            f"Duration must be a positive number of minutes, got {duration_minutes!r}."
        )

    try:
        lang = parse_language(language)
        cat = parse_category(category)
    except ValueError as e:
        raise ItemValidationError(str(e)) from e

    created = start_of_day(reference_date)
    due = next_due_date(0, created)

    item = ReviewItem(
        id=item_id or generate_item_id(),
        topic=str(topic).strip(),
        description=(description or "").strip() or None,
        language=lang,
        category=cat,
        original_duration=duration_minutes,
        created_at=created,
        next_due_date=due if due is not None else created,
        stage=INITIAL_STAGE,
        is_archived=False,
    )
    logger.debug(f"Logged {item.id} '{item.topic}' due {item.next_due_date}")
    return item


def complete_review(item: ReviewItem, reference_date: Any) -> ReviewItem:
    """
    Record a completed review on ``reference_date``.

    The stage always advances by one. The next due date is counted from the
    completion day, not from the previous due date, so early and late reviews
    both re-anchor the schedule. When the new stage has no further interval
    the item is archived and its due date is left as it was.

    Raises:
        ItemValidationError: if the item is already archived.
    """
    if item.is_archived:
        raise ItemValidationError(f"Item {item.id} is archived and has no review due.")

    new_stage = item.stage + 1
    due = next_due_date(item.stage, reference_date)

    if due is None or interval_for_stage(new_stage) is None:
        logger.info(f"Item {item.id} graduated at stage {new_stage}")
        return replace(item, stage=new_stage, is_archived=True)

    return replace(item, stage=new_stage, next_due_date=due)


def time_split(duration_minutes: int, category: Category | str) -> TimeSplit:
    """
    Advisory split of a session into main work and fluency drilling.

    Display only: neither the stored duration nor the schedule changes.
    """
    share = FLUENCY_SHARES.get(parse_category(category))
    if share is None:
        return TimeSplit(main=duration_minutes, secondary=0, has_split=False)

    # Half-up rounding, so 4.5 minutes becomes 5.
    secondary = math.floor(duration_minutes * share + 0.5)
    return TimeSplit(main=duration_minutes - secondary, secondary=secondary, has_split=True)


def project_schedule(item: ReviewItem) -> list[ProjectionEntry]:
    """
    Simulate the remaining review timeline assuming every review is done on its due day.

    The first entry is the real due date; the rest are projected. Archived
    items have no timeline. Stages outside 0..5 get no projected continuation.
    """
    if item.is_archived:
        return []

    entries = [ProjectionEntry(date=item.next_due_date, stage=item.stage, kind=EntryKind.ACTUAL)]

    if not isinstance(item.stage, int) or not 0 <= item.stage <= FINAL_STAGE:
        return entries

    day = item.next_due_date
    stage = item.stage
    for _ in range(MAX_PROJECTION_STEPS):
        if stage >= FINAL_STAGE:
            break
        interval = interval_for_stage(stage)
        if interval is None:
            break
        day = add_days(day, interval)
        stage += 1
        entries.append(ProjectionEntry(date=day, stage=stage, kind=EntryKind.PROJECTED))

    return entries
