# Domain Package
from .errors import ImportRejected, ItemNotFound, ItemValidationError
from .models import (
    Category,
    DailyStats,
    EntryKind,
    Language,
    ProjectionEntry,
    ReviewItem,
    SessionState,
    TimeSplit,
)
from .ports import ItemCodec, ItemStore, Notifier, StateStore, TextFormat

__all__ = [
    "Category",
    "DailyStats",
    "EntryKind",
    "ImportRejected",
    "ItemNotFound",
    "ItemCodec",
    "ItemStore",
    "ItemValidationError",
    "Language",
    "Notifier",
    "ProjectionEntry",
    "ReviewItem",
    "SessionState",
    "StateStore",
    "TextFormat",
    "TimeSplit",
]
