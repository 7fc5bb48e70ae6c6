"""
Domain models for review items and their derived views.

These are pure data structures with no I/O or external dependencies.
"""

import datetime as dt
from dataclasses import dataclass
from enum import Enum

from .constants import INITIAL_STAGE


class Language(str, Enum):
    ENGLISH = "English"
    SPANISH = "Spanish"
    GERMAN = "German"
    FRENCH = "French"
    ITALIAN = "Italian"
    OTHER = "Other"


class Category(str, Enum):
    GRAMMAR = "Grammar"
    LEXIS = "Lexis"
    NON_VERBAL = "NonVerbal"


class EntryKind(str, Enum):
    ACTUAL = "actual"
    PROJECTED = "projected"


LANGUAGE_CODES: dict[Language, str] = {
    Language.ENGLISH: "EN",
    Language.SPANISH: "ES",
    Language.GERMAN: "DE",
    Language.FRENCH: "FR",
    Language.ITALIAN: "IT",
    Language.OTHER: "--",
}

# Labels written by the browser version of Booker (Polish UI).
LEGACY_LANGUAGE_LABELS: dict[str, Language] = {
    "Angielski": Language.ENGLISH,
    "Hiszpański": Language.SPANISH,
    "Niemiecki": Language.GERMAN,
    "Francuski": Language.FRENCH,
    "Włoski": Language.ITALIAN,
    "Inny": Language.OTHER,
}

LEGACY_CATEGORY_LABELS: dict[str, Category] = {
    "Gramatyka": Category.GRAMMAR,
    "Leksyka": Category.LEXIS,
    "Niewerbalność": Category.NON_VERBAL,
}


def parse_language(value: str | Language) -> Language:
    """Resolve a language from its value, member name, or legacy label."""
    if isinstance(value, Language):
        return value
    text = str(value).strip()
    if text in LEGACY_LANGUAGE_LABELS:
        return LEGACY_LANGUAGE_LABELS[text]
    for lang in Language:
        if text.lower() in (lang.value.lower(), lang.name.lower()):
            return lang
    raise ValueError(f"Unknown language: {value!r}")


def parse_category(value: str | Category) -> Category:
    """Resolve a category from its value, member name, or legacy label."""
    if isinstance(value, Category):
        return value
    text = str(value).strip()
    if text in LEGACY_CATEGORY_LABELS:
        return LEGACY_CATEGORY_LABELS[text]
    normalized = text.lower().replace("-", "").replace("_", "").replace(" ", "")
    for cat in Category:
        if normalized in (cat.value.lower(), cat.name.lower().replace("_", "")):
            return cat
    raise ValueError(f"Unknown category: {value!r}")


@dataclass(frozen=True)
class ReviewItem:
    """
    One learning artifact under spaced repetition.

    Attributes:
        id: Immutable identity assigned at creation.
        topic: Short non-empty label.
        language: Language the material belongs to.
        category: Kind of material; drives the advisory time split.
        original_duration: Minutes spent in the original session, reused as
            the nominal duration of every review.
        created_at: Day the item was first logged.
        next_due_date: Day of the next scheduled review. Frozen once archived.
        stage: Completed exposures, 0..5.
        is_archived: True once no further interval exists for the stage.
        description: Optional longer note.
    """

    id: str
    topic: str
    language: Language
    category: Category
    original_duration: int
    created_at: dt.date
    next_due_date: dt.date
    stage: int = INITIAL_STAGE
    is_archived: bool = False
    description: str | None = None


@dataclass(frozen=True)
class TimeSplit:
    main: int
    secondary: int
    has_split: bool


@dataclass(frozen=True)
class ProjectionEntry:
    """A single point of an item's review timeline."""

    date: dt.date
    stage: int
    kind: EntryKind


@dataclass(frozen=True)
class DailyStats:
    """Due-or-overdue workload as of a reference day."""

    count: int
    total_minutes: int
    time_string: str
    has_tasks: bool


@dataclass
class SessionState:
    """
    Per-installation state that is not part of the item collection.

    Attributes:
        day_offset: Simulated days added to the real current day.
        last_notified: Day key of the last daily notification sent.
        notifications_granted: Whether the user allowed notifications.
    """

    day_offset: int = 0
    last_notified: str | None = None
    notifications_granted: bool = False
