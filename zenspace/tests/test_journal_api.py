"""Journal API tests.

Tests all API endpoints for the journal domain:
- GET /api/journal-entries - list_journal
- GET /api/journal-entries/<id> - get_entry
- GET /api/journal-entries/range/<start>/<end> - list_journal_in_range
- POST /api/journal-entries - create_journal_entry
- PUT /api/journal-entries/<id> - update_journal_entry
- DELETE /api/journal-entries/<id> - delete_journal_entry
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from zenspace.core.storage import SQLAlchemyStorage
from zenspace.extensions import db
from zenspace.tests.conftest import register

pytestmark = pytest.mark.integration

BASE = "/api/journal-entries"


def _create(client, **fields):
    payload = {"title": "T", "content": "C", "mood": "calm"}
    payload.update(fields)
    return client.post(BASE, json=payload)


@pytest.fixture
def entry(user_client):
    resp = _create(user_client, title="Morning pages", content="Slept well", mood="happy")
    assert resp.status_code == 201
    return resp.get_json()


# ==================== Create ====================


def test_create_returns_entity(user_client):
    resp = _create(user_client, date="2024-01-15T10:30:00Z")
    assert resp.status_code == 201
    body = resp.get_json()
    assert set(body) == {"id", "userId", "title", "content", "mood", "date"}
    assert body["userId"] == user_client.user["id"]
    assert body["mood"] == "calm"
    assert body["date"] == "2024-01-15T10:30:00.000Z"


def test_create_without_date_uses_server_time(user_client):
    body = _create(user_client).get_json()
    assert body["date"].endswith("Z")


def test_create_ignores_client_owner(user_client, other_client):
    resp = _create(user_client, userId=other_client.user["id"])
    assert resp.status_code == 201
    assert resp.get_json()["userId"] == user_client.user["id"]
    assert other_client.get(BASE).get_json() == []


def test_create_missing_title(user_client):
    resp = user_client.post(BASE, json={"content": "C", "mood": "calm"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "validation_error"
    assert body["details"] == [{"field": "title", "message": "Title is required"}]


def test_create_rejects_unknown_mood(user_client):
    resp = _create(user_client, mood="furious")
    assert resp.status_code == 400
    assert [d["field"] for d in resp.get_json()["details"]] == ["mood"]


@pytest.mark.parametrize("raw", ["9999-12-31T23:59:59-05:00", "0001-01-01T00:00:00+01:00"])
def test_create_rejects_date_outside_datetime_range(user_client, raw):
    resp = _create(user_client, date=raw)
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "validation_error"
    assert [d["field"] for d in body["details"]] == ["date"]


def test_create_requires_session(client):
    resp = _create(client)
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "unauthenticated"


# ==================== Read ====================


def test_round_trip(user_client, entry):
    resp = user_client.get(f"{BASE}/{entry['id']}")
    assert resp.status_code == 200
    assert resp.get_json() == entry


def test_list_is_newest_first(user_client):
    for day in ("2024-01-01", "2024-03-01", "2024-02-01"):
        _create(user_client, title=day, date=day)
    titles = [e["title"] for e in user_client.get(BASE).get_json()]
    assert titles == ["2024-03-01", "2024-02-01", "2024-01-01"]


def test_list_empty_for_new_user(user_client):
    resp = user_client.get(BASE)
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_other_user_cannot_read_entry(other_client, entry):
    resp = other_client.get(f"{BASE}/{entry['id']}")
    assert resp.status_code == 403
    body = resp.get_json()
    assert body["error"] == "forbidden"
    assert str(entry["userId"]) not in body["message"]


def test_unauthenticated_read_is_401(client, entry):
    assert client.get(f"{BASE}/{entry['id']}").status_code == 401


def test_missing_entry_is_404(user_client):
    resp = user_client.get(f"{BASE}/9999")
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Journal entry not found"


# ==================== Range ====================


def test_range_returns_matching_entries_newest_first(user_client):
    for day in ("2024-01-01", "2024-01-15", "2024-02-01"):
        _create(user_client, title=day, date=day)
    resp = user_client.get(f"{BASE}/range/2024-01-01/2024-01-31")
    assert resp.status_code == 200
    assert [e["title"] for e in resp.get_json()] == ["2024-01-15", "2024-01-01"]


def test_range_accepts_full_timestamps(user_client):
    _create(user_client, title="noon", date="2024-01-15T12:00:00Z")
    resp = user_client.get(f"{BASE}/range/2024-01-15T00:00:00.000Z/2024-01-15T23:59:59.999Z")
    assert [e["title"] for e in resp.get_json()] == ["noon"]


def test_inverted_range_is_empty(user_client):
    _create(user_client, date="2024-01-15")
    resp = user_client.get(f"{BASE}/range/2024-01-31/2024-01-01")
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_unparsable_range_is_400(user_client):
    resp = user_client.get(f"{BASE}/range/yesterday/today")
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "invalid_range"
    assert body["message"] == "Invalid date format"


@pytest.mark.parametrize(
    "path", ["0001-01-01T00:00:00+01:00/2024-01-31", "2024-01-01/9999-12-31T23:59:59-05:00"]
)
def test_range_bound_outside_datetime_range_is_400(user_client, path):
    resp = user_client.get(f"{BASE}/range/{path}")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_range"


def test_range_is_scoped_to_caller(user_client, other_client):
    _create(other_client, date="2024-01-15")
    assert user_client.get(f"{BASE}/range/2024-01-01/2024-01-31").get_json() == []


# ==================== Update ====================


def test_partial_update_only_changes_mood(user_client, entry):
    resp = user_client.put(f"{BASE}/{entry['id']}", json={"mood": "sad"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["mood"] == "sad"
    assert {k: body[k] for k in ("id", "userId", "title", "content", "date")} == {
        k: entry[k] for k in ("id", "userId", "title", "content", "date")
    }


def test_update_rejects_invalid_mood(user_client, entry):
    resp = user_client.put(f"{BASE}/{entry['id']}", json={"mood": "furious"})
    assert resp.status_code == 400
    assert user_client.get(f"{BASE}/{entry['id']}").get_json()["mood"] == "happy"


def test_update_rejects_null_field(user_client, entry):
    resp = user_client.put(f"{BASE}/{entry['id']}", json={"title": None})
    assert resp.status_code == 400


def test_other_user_cannot_update(other_client, user_client, entry):
    resp = other_client.put(f"{BASE}/{entry['id']}", json={"title": "Mine now"})
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Unauthorized to update this journal entry"
    assert user_client.get(f"{BASE}/{entry['id']}").get_json()["title"] == "Morning pages"


def test_update_missing_entry_is_404(user_client):
    assert user_client.put(f"{BASE}/9999", json={"mood": "sad"}).status_code == 404


# ==================== Delete ====================


def test_delete_twice(user_client, entry):
    first = user_client.delete(f"{BASE}/{entry['id']}")
    assert first.status_code == 204
    assert first.data == b""
    second = user_client.delete(f"{BASE}/{entry['id']}")
    assert second.status_code == 404


def test_other_user_cannot_delete(other_client, user_client, entry):
    resp = other_client.delete(f"{BASE}/{entry['id']}")
    assert resp.status_code == 403
    assert user_client.get(f"{BASE}/{entry['id']}").status_code == 200


def test_unauthenticated_delete_is_401(client, entry):
    assert client.delete(f"{BASE}/{entry['id']}").status_code == 401


# ==================== Failures ====================


def test_storage_failure_is_opaque_500(user_client, caplog):
    caplog.set_level(logging.ERROR)

    def _db_down(*args, **kwargs):
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    with patch.object(Session, "commit", side_effect=_db_down):
        resp = _create(user_client)

    assert resp.status_code == 500
    assert resp.get_json() == {"ok": False, "error": "storage_error", "message": "Internal server error"}
    assert "database is locked" not in resp.get_data(as_text=True)
    assert "Storage failure during create_journal_entry" in caplog.text


class _ExplodingListStorage(SQLAlchemyStorage):
    def list_journal_entries_for_user(self, user_id):
        raise RuntimeError("list exploded")


def test_unexpected_error_uses_generic_envelope(make_app):
    app = make_app(storage=_ExplodingListStorage(db))
    c = app.test_client()
    assert register(c, "calm_user").status_code == 201

    resp = c.get(BASE)
    assert resp.status_code == 500
    body = resp.get_json()
    assert body["ok"] is False
    assert body["error"] == "unexpected_error"
    # Testing mode surfaces the message; production returns a fixed string.
    assert body["message"] == "list exploded"
