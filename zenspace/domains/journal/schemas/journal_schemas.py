"""Journal request/response schemas and the entry validation rules."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_serializer, field_validator

from zenspace.core.utils.dates import parse_timestamp
from zenspace.core.utils.validation import validate_payload

TITLE_MAX_LENGTH = 255


class Mood(str, Enum):
    CALM = "calm"
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    ANGRY = "angry"


MOOD_VALUES = tuple(m.value for m in Mood)

REQUIRED_MESSAGES = {
    "title": "Title is required",
    "content": "Journal content is required",
    "mood": "Mood is required",
}


def _clean_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Title is required")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError("Title is too long")
    return value


def _clean_content(value: str) -> str:
    if not value.strip():
        raise ValueError("Journal content is required")
    return value


def _coerce_mood(value: Any) -> Any:
    if isinstance(value, Mood):
        return value
    if not isinstance(value, str) or value not in MOOD_VALUES:
        raise ValueError(f"Invalid mood, expected one of: {', '.join(MOOD_VALUES)}")
    return value


def _coerce_date(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    return parse_timestamp(value)


class _EntryRules(BaseModel):
    # Unknown keys (including any client-sent owner id) are dropped.
    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    @field_validator("title", check_fields=False)
    @classmethod
    def clean_title(cls, value: str) -> str:
        return _clean_title(value)

    @field_validator("content", check_fields=False)
    @classmethod
    def clean_content(cls, value: str) -> str:
        return _clean_content(value)

    @field_validator("mood", mode="before", check_fields=False)
    @classmethod
    def check_mood(cls, value: Any) -> Any:
        return _coerce_mood(value)

    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def parse_date(cls, value: Any) -> Optional[datetime]:
        return _coerce_date(value)


class JournalEntryCreate(_EntryRules):
    title: str
    content: str
    mood: Mood
    date: Optional[datetime] = None


class JournalEntryUpdate(_EntryRules):
    """Partial update: omitted fields stay untouched, present fields must be valid."""

    title: Optional[str] = None
    content: Optional[str] = None
    mood: Optional[Mood] = None
    date: Optional[datetime] = None

    @field_validator("title", "content", "mood", "date", mode="before")
    @classmethod
    def reject_explicit_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    def changes(self) -> dict:
        return {key: getattr(self, key) for key in self.model_fields_set}


class JournalEntryResponse(BaseModel):
    id: int
    user_id: int = Field(serialization_alias="userId")
    title: str
    content: str
    mood: str
    date: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("date")
    def serialize_date(self, value: datetime) -> str:
        # Stored timestamps are naive UTC.
        return value.isoformat(timespec="milliseconds") + "Z"


def validate_entry(payload: object, *, partial: bool = False) -> JournalEntryCreate | JournalEntryUpdate:
    """Validate a journal-entry payload, collecting every violated field."""
    if partial:
        return validate_payload(JournalEntryUpdate, payload)
    return validate_payload(JournalEntryCreate, payload, REQUIRED_MESSAGES)
