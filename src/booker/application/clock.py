"""
Simulated clock.

The effective "today" is the real current day plus a day offset. It is the
single source of truth for "today" across scheduling, aggregation and labels;
core functions receive it as an argument and never read the clock themselves.
"""

import datetime as dt
import logging
from collections.abc import Callable

from .dates import add_days, start_of_day

logger = logging.getLogger(__name__)


class SimulatedClock:
    def __init__(
        self,
        offset: int = 0,
        today_provider: Callable[[], dt.date] = dt.date.today,
    ):
        """
        Args:
            offset: Days added to the real current day.
            today_provider: Source of the real current day; replaceable in tests.
        """
        self._offset = offset
        self._today_provider = today_provider

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def is_simulated(self) -> bool:
        return self._offset != 0

    def today(self) -> dt.date:
        return add_days(start_of_day(self._today_provider()), self._offset)

    def advance_day(self) -> dt.date:
        self._offset += 1
        logger.info(f"Simulated clock advanced to {self.today()} (+{self._offset} days)")
        return self.today()

    def reset_date(self) -> dt.date:
        self._offset = 0
        logger.info("Simulated clock reset to the real date")
        return self.today()
