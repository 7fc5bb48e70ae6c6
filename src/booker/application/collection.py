"""
Item collection operations.

The collection is an ordered tuple of items keyed by id. Every operation
returns a new tuple; callers replace their collection wholesale.
"""

from collections.abc import Iterable

from booker.domain.errors import ItemNotFound
from booker.domain.models import ReviewItem

Collection = tuple[ReviewItem, ...]


def find_item(items: Iterable[ReviewItem], item_id: str) -> ReviewItem:
    for item in items:
        if item.id == item_id:
            return item
    raise ItemNotFound(item_id)


def add_item(items: Iterable[ReviewItem], item: ReviewItem) -> Collection:
    current = tuple(items)
    if any(existing.id == item.id for existing in current):
        raise ValueError(f"Duplicate item id: {item.id}")
    return current + (item,)


def replace_item(items: Iterable[ReviewItem], item: ReviewItem) -> Collection:
    current = tuple(items)
    find_item(current, item.id)
    return tuple(item if existing.id == item.id else existing for existing in current)


def remove_item(items: Iterable[ReviewItem], item_id: str) -> Collection:
    current = tuple(items)
    find_item(current, item_id)
    return tuple(existing for existing in current if existing.id != item_id)
