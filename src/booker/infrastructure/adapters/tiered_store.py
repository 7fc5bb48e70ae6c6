"""
Two-tier item store.

Load precedence is explicit: the primary store wins whenever it holds a
collection that parses; otherwise the fallback is consulted. Saves go to both.
"""

import logging
from collections.abc import Sequence

from booker.domain.errors import ImportRejected
from booker.domain.models import ReviewItem
from booker.domain.ports import ItemStore

logger = logging.getLogger(__name__)


class TieredStore(ItemStore):
    def __init__(self, primary: ItemStore, fallback: ItemStore):
        self.primary = primary
        self.fallback = fallback

    def load(self) -> list[ReviewItem] | None:
        try:
            items = self.primary.load()
        except ImportRejected as e:
            logger.warning(f"Primary store unreadable, trying fallback: {e}")
            items = None

        if items is not None:
            return items

        try:
            items = self.fallback.load()
        except ImportRejected as e:
            logger.error(f"Fallback store unreadable: {e}")
            return None

        if items is not None:
            logger.info(f"Restored {len(items)} items from fallback store")
        return items

    def save(self, items: Sequence[ReviewItem]) -> None:
        self.primary.save(items)
        try:
            self.fallback.save(items)
        except OSError as e:
            logger.error(f"Fallback store save failed: {e}")
