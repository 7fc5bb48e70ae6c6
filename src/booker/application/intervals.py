"""Stage/interval lookup for the fixed five-stage repetition schedule.

Cumulative review days from logging are 1, 2, 7, 14 and 25; the table
stores only the delta from one stage's due date to the next.
"""

from booker.domain.constants import STAGE_INTERVALS


def interval_for_stage(stage: int) -> int | None:
    """Days until the next review after completing ``stage``; None when terminal."""
    if isinstance(stage, bool) or not isinstance(stage, int):
        return None
    return STAGE_INTERVALS.get(stage)
