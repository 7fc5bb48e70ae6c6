"""
Wire format for review items.

Items are stored as camelCase JSON-compatible dicts, the same shape the
browser version of Booker exported. Reading also accepts that version's
quirks: the ``tag`` key for the category, Polish enum labels and dates as
epoch milliseconds.
"""

import datetime as dt
from collections.abc import Sequence
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from booker.domain.constants import FINAL_STAGE
from booker.domain.dates import parse_day
from booker.domain.errors import ImportRejected
from booker.domain.models import Category, Language, ReviewItem, parse_category, parse_language


class ReviewItemRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    topic: str
    description: str | None = None
    language: Language
    category: Category = Field(validation_alias=AliasChoices("category", "tag"))
    original_duration: int = Field(gt=0)
    created_at: dt.date
    next_due_date: dt.date
    stage: int = Field(ge=0)
    is_archived: bool = False

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("topic must not be empty")
        return v

    @field_validator("language", mode="before")
    @classmethod
    def resolve_language(cls, v: Any) -> Language:
        return parse_language(v)

    @field_validator("category", mode="before")
    @classmethod
    def resolve_category(cls, v: Any) -> Category:
        return parse_category(v)

    @field_validator("created_at", "next_due_date", mode="before")
    @classmethod
    def to_local_day(cls, v: Any) -> dt.date:
        # Older exports wrote epoch milliseconds or full ISO timestamps.
        day = parse_day(v)
        if day is None:
            raise ValueError(f"not a date: {v!r}")
        return day

    @model_validator(mode="after")
    def archive_finished(self) -> "ReviewItemRecord":
        # Older exports kept graduated items at stage 6, or left stage 5 unarchived.
        if self.stage >= FINAL_STAGE:
            self.stage = FINAL_STAGE
            self.is_archived = True
        return self

    @classmethod
    def from_item(cls, item: ReviewItem) -> "ReviewItemRecord":
        return cls(
            id=item.id,
            topic=item.topic,
            description=item.description,
            language=item.language,
            category=item.category,
            original_duration=item.original_duration,
            created_at=item.created_at,
            next_due_date=item.next_due_date,
            stage=item.stage,
            is_archived=item.is_archived,
        )

    def to_item(self) -> ReviewItem:
        return ReviewItem(
            id=self.id,
            topic=self.topic,
            description=self.description,
            language=self.language,
            category=self.category,
            original_duration=self.original_duration,
            created_at=self.created_at,
            next_due_date=self.next_due_date,
            stage=self.stage,
            is_archived=self.is_archived,
        )


_RECORD_LIST = TypeAdapter(list[ReviewItemRecord])


def items_to_payload(items: Sequence[ReviewItem]) -> list[dict[str, Any]]:
    """Serialize items to JSON-compatible dicts (ISO dates, camelCase keys)."""
    return [
        ReviewItemRecord.from_item(item).model_dump(mode="json", by_alias=True)
        for item in items
    ]


def items_from_payload(payload: Any) -> list[ReviewItem]:
    """
    Validate a decoded payload and build items from it.

    Raises:
        ImportRejected: if the payload is not a list, any entry is invalid,
            or two entries share an id.
    """
    if not isinstance(payload, list):
        raise ImportRejected(
            f"Expected a list of items, got {type(payload).__name__}."
        )

    try:
        records = _RECORD_LIST.validate_python(payload)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ImportRejected(
            f"Invalid item data ({e.error_count()} error(s)); first at {location}: {first['msg']}"
        ) from e

    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            raise ImportRejected(f"Duplicate item id: {record.id}")
        seen.add(record.id)

    return [record.to_item() for record in records]
