"""Validation rules for journal entries and credential payloads."""

from __future__ import annotations

from datetime import datetime

import pytest

from zenspace.core.auth.schemas import REQUIRED_MESSAGES, RegisterRequest
from zenspace.core.errors import ValidationFailure
from zenspace.core.utils.validation import validate_payload
from zenspace.domains.journal.schemas import MOOD_VALUES, validate_entry

pytestmark = pytest.mark.unit


def _messages(exc: ValidationFailure) -> dict[str, str]:
    return {e.field: e.message for e in exc.errors}


@pytest.mark.parametrize("mood", MOOD_VALUES)
def test_valid_entry_keeps_mood_verbatim(mood):
    data = validate_entry({"title": "Morning", "content": "Walked by the river", "mood": mood})
    assert data.mood == mood
    assert isinstance(data.mood, str)
    assert data.date is None


def test_title_is_trimmed_but_content_keeps_its_whitespace():
    data = validate_entry({"title": "  Evening  ", "content": "  Quiet night \n", "mood": "calm"})
    assert data.title == "Evening"
    assert data.content == "  Quiet night \n"


@pytest.mark.parametrize("payload", [{"content": "C", "mood": "calm"}, {"title": "", "content": "C", "mood": "calm"}])
def test_missing_or_empty_title_cites_title(payload):
    with pytest.raises(ValidationFailure) as exc:
        validate_entry(payload)
    assert exc.value.fields == ["title"]
    assert _messages(exc.value)["title"] == "Title is required"


def test_whitespace_only_title_is_rejected():
    with pytest.raises(ValidationFailure) as exc:
        validate_entry({"title": "   ", "content": "C", "mood": "calm"})
    assert "title" in exc.value.fields


def test_overlong_title_is_rejected():
    with pytest.raises(ValidationFailure) as exc:
        validate_entry({"title": "x" * 256, "content": "C", "mood": "calm"})
    assert _messages(exc.value)["title"] == "Title is too long"


@pytest.mark.parametrize("mood", ["furious", "Calm", "", 3])
def test_unknown_mood_cites_mood(mood):
    with pytest.raises(ValidationFailure) as exc:
        validate_entry({"title": "T", "content": "C", "mood": mood})
    assert exc.value.fields == ["mood"]
    assert _messages(exc.value)["mood"].startswith("Invalid mood")


def test_every_violation_is_reported():
    with pytest.raises(ValidationFailure) as exc:
        validate_entry({})
    assert set(exc.value.fields) == {"title", "content", "mood"}
    messages = _messages(exc.value)
    assert messages["content"] == "Journal content is required"
    assert messages["mood"] == "Mood is required"
    body = exc.value.to_dict()
    assert body["ok"] is False
    assert body["error"] == "validation_error"
    assert len(body["details"]) == 3


def test_non_object_payload_is_rejected():
    with pytest.raises(ValidationFailure) as exc:
        validate_entry(["not", "an", "object"])
    assert exc.value.fields == ["body"]


def test_client_supplied_owner_is_dropped():
    data = validate_entry({"title": "T", "content": "C", "mood": "calm", "userId": 999, "user_id": 999})
    dumped = data.model_dump()
    assert "userId" not in dumped
    assert "user_id" not in dumped


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-01-15", datetime(2024, 1, 15)),
        ("2024-01-15T10:30:00Z", datetime(2024, 1, 15, 10, 30)),
        ("2024-01-15T10:30:00.250Z", datetime(2024, 1, 15, 10, 30, 0, 250000)),
        ("2024-01-15T10:30:00+02:00", datetime(2024, 1, 15, 8, 30)),
    ],
)
def test_dates_are_normalized_to_naive_utc(raw, expected):
    data = validate_entry({"title": "T", "content": "C", "mood": "calm", "date": raw})
    assert data.date == expected


@pytest.mark.parametrize(
    "raw",
    ["not-a-date", "2024-13-45", "", "0001-01-01T00:00:00+01:00", "9999-12-31T23:59:59-05:00"],
)
def test_invalid_date_cites_date(raw):
    with pytest.raises(ValidationFailure) as exc:
        validate_entry({"title": "T", "content": "C", "mood": "calm", "date": raw})
    assert exc.value.fields == ["date"]


def test_partial_update_reports_only_present_fields():
    data = validate_entry({"mood": "sad"}, partial=True)
    assert data.changes() == {"mood": "sad"}
    assert validate_entry({}, partial=True).changes() == {}


def test_partial_update_still_validates_present_fields():
    with pytest.raises(ValidationFailure) as exc:
        validate_entry({"title": "", "mood": "furious"}, partial=True)
    assert set(exc.value.fields) == {"title", "mood"}


def test_partial_update_rejects_explicit_null():
    with pytest.raises(ValidationFailure) as exc:
        validate_entry({"title": None}, partial=True)
    assert exc.value.fields == ["title"]


# ==================== Credentials ====================


def _register(**overrides):
    payload = {"username": "calm_user", "password": "secret123", "confirmPassword": "secret123"}
    payload.update(overrides)
    return validate_payload(RegisterRequest, payload, REQUIRED_MESSAGES)


def test_register_payload_accepts_valid_credentials():
    data = _register()
    assert data.username == "calm_user"
    assert data.confirm_password == "secret123"


def test_register_rejects_mismatched_confirmation():
    with pytest.raises(ValidationFailure) as exc:
        _register(confirmPassword="secret124")
    assert exc.value.fields == ["confirmPassword"]
    assert _messages(exc.value)["confirmPassword"] == "Passwords do not match"


@pytest.mark.parametrize(
    ("field", "value", "message"),
    [
        ("username", "ab", "Username must be at least 3 characters"),
        ("username", "u" * 51, "Username too long"),
        ("password", "12345", "Password must be at least 6 characters"),
    ],
)
def test_register_length_rules(field, value, message):
    overrides = {field: value}
    if field == "password":
        overrides["confirmPassword"] = value
    with pytest.raises(ValidationFailure) as exc:
        _register(**overrides)
    assert _messages(exc.value)[field] == message


def test_register_requires_confirmation():
    with pytest.raises(ValidationFailure) as exc:
        validate_payload(RegisterRequest, {"username": "calm_user", "password": "secret123"}, REQUIRED_MESSAGES)
    assert _messages(exc.value) == {"confirmPassword": "Please confirm your password"}
