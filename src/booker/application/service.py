"""
Study Service — Application layer orchestrator.

Owns the item collection, the simulated clock and the session state, and
coordinates the pure scheduling functions with the persistence, transfer and
notification ports. Every change is saved through the store first and only
then replaces the in-memory collection, so a failed write leaves the last
saved collection in place.
"""

import datetime as dt
import logging
import threading
from collections.abc import Callable

from booker.domain.constants import DEFAULT_DURATION
from booker.domain.errors import ImportRejected
from booker.domain.models import (
    Category,
    DailyStats,
    Language,
    ProjectionEntry,
    ReviewItem,
)
from booker.domain.ports import ItemCodec, ItemStore, Notifier, StateStore, TextFormat

from . import collection, daily
from .calendar_view import CalendarEntry, calendar_map
from .clock import SimulatedClock
from .notifications import check_and_notify
from .scheduler import complete_review, log_item, project_schedule

logger = logging.getLogger(__name__)


class StudyService:
    """
    Application service for logging, reviewing and planning study items.

    Follows Dependency Inversion: depends on the ItemStore, StateStore,
    ItemCodec and Notifier abstractions, not concrete adapters.

    Mutations are serialized by a lock, so one instance can be shared by the
    worker threads of the HTTP server.
    """

    def __init__(
        self,
        store: ItemStore,
        state_store: StateStore,
        notifier: Notifier | None = None,
        codec: ItemCodec | None = None,
        today_provider: Callable[[], dt.date] = dt.date.today,
    ):
        """
        Args:
            store: Persistence for the item collection.
            state_store: Persistence for the day offset and notification bookkeeping.
            notifier: Optional notification collaborator.
            codec: Text format for bulk export/import; required by export_text/import_text.
            today_provider: Source of the real current day.
        """
        self._store = store
        self._state_store = state_store
        self._notifier = notifier
        self._codec = codec
        self._today_provider = today_provider
        self._lock = threading.Lock()
        self.state = state_store.load()
        self.clock = SimulatedClock(self.state.day_offset, today_provider)
        self._items: collection.Collection = self._load_items()

    def _load_items(self) -> collection.Collection:
        try:
            loaded = self._store.load()
        except ImportRejected as e:
            logger.error(f"Stored items could not be read, starting empty: {e}")
            return ()
        return tuple(loaded or ())

    def _commit(self, items: collection.Collection) -> None:
        self._store.save(items)
        self._items = items

    def _save_state(self) -> None:
        self.state.day_offset = self.clock.offset
        self._state_store.save(self.state)

    def _move_clock(self, move: Callable[[], dt.date]) -> dt.date:
        previous = self.clock.offset
        today = move()
        try:
            self._save_state()
        except OSError:
            self.clock = SimulatedClock(previous, self._today_provider)
            self.state.day_offset = previous
            raise
        return today

    def _require_codec(self) -> ItemCodec:
        if self._codec is None:
            raise RuntimeError("No export/import format configured for this service.")
        return self._codec

    # ----- collection -----

    @property
    def items(self) -> collection.Collection:
        return self._items

    @property
    def today(self) -> dt.date:
        return self.clock.today()

    def get(self, item_id: str) -> ReviewItem:
        return collection.find_item(self._items, item_id)

    def log(
        self,
        topic: str,
        description: str | None = None,
        language: Language | str = Language.SPANISH,
        category: Category | str = Category.GRAMMAR,
        duration: int = DEFAULT_DURATION,
    ) -> ReviewItem:
        """Log a studied topic; the first review is due tomorrow (effective day)."""
        with self._lock:
            item = log_item(topic, description, language, category, duration, self.today)
            self._commit(collection.add_item(self._items, item))
        logger.info(f"Logged '{item.topic}' ({item.id}), first review {item.next_due_date}")
        return item

    def complete(self, item_id: str) -> ReviewItem:
        """Mark the item's current review as done today."""
        with self._lock:
            updated = complete_review(self.get(item_id), self.today)
            self._commit(collection.replace_item(self._items, updated))
        return updated

    def delete(self, item_id: str) -> ReviewItem:
        with self._lock:
            item = self.get(item_id)
            self._commit(collection.remove_item(self._items, item_id))
        logger.info(f"Deleted {item_id}")
        return item

    # ----- derived views -----

    def today_stats(self) -> DailyStats:
        return daily.daily_stats(self._items, self.today)

    def agenda(self) -> dict[dt.date, list[ReviewItem]]:
        return daily.group_by_effective_date(self._items, self.today)

    def archive(self) -> list[ReviewItem]:
        return daily.archived_items(self._items)

    def schedule(self, item_id: str) -> list[ProjectionEntry]:
        return project_schedule(self.get(item_id))

    def calendar(
        self,
        language: Language | None = None,
        category: Category | None = None,
    ) -> dict[dt.date, list[CalendarEntry]]:
        return calendar_map(self._items, language=language, category=category)

    # ----- bulk import/export -----

    def export_text(self, fmt: TextFormat = "json") -> str:
        return self._require_codec().export_text(self._items, fmt)

    def import_text(self, text: str, fmt: TextFormat = "json") -> int:
        """
        Replace the whole collection with the parsed text.

        Raises:
            ImportRejected: the current collection is left untouched.
        """
        items = self._require_codec().import_text(text, fmt)
        with self._lock:
            self._commit(tuple(items))
        logger.info(f"Imported {len(items)} items, replacing the collection")
        return len(items)

    # ----- simulated clock -----

    def advance_day(self) -> dt.date:
        with self._lock:
            return self._move_clock(self.clock.advance_day)

    def reset_date(self) -> dt.date:
        with self._lock:
            return self._move_clock(self.clock.reset_date)

    # ----- notifications -----

    def enable_notifications(self) -> bool:
        if self._notifier is None:
            return False
        with self._lock:
            self.state.notifications_granted = self._notifier.request_permission()
            self._save_state()
        return self.state.notifications_granted

    def check_and_notify(self) -> bool:
        """Send today's reminder at most once per effective day."""
        if self._notifier is None:
            return False
        with self._lock:
            sent = check_and_notify(self._items, self.today, self.state, self._notifier)
            if sent:
                self._save_state()
        return sent
