"""Journal JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from zenspace.core.services import get_journal_service
from zenspace.core.utils.routing import bind_routes
from zenspace.domains.journal.mappers import map_entry

journal_api_bp = Blueprint("journal_api", __name__)


@login_required
def list_journal():
    entries = get_journal_service().list_entries(current_user.id)
    return jsonify([map_entry(e) for e in entries])


@login_required
def list_journal_in_range(start: str, end: str):
    entries = get_journal_service().list_entries_in_range(current_user.id, start, end)
    return jsonify([map_entry(e) for e in entries])


@login_required
def get_entry(entry_id: int):
    entry = get_journal_service().get_entry(current_user.id, entry_id)
    return jsonify(map_entry(entry))


@login_required
def create_journal_entry():
    entry = get_journal_service().create_entry(current_user.id, request.get_json(silent=True))
    return jsonify(map_entry(entry)), 201


@login_required
def update_journal_entry(entry_id: int):
    entry = get_journal_service().update_entry(current_user.id, entry_id, request.get_json(silent=True))
    return jsonify(map_entry(entry))


@login_required
def delete_journal_entry(entry_id: int):
    get_journal_service().delete_entry(current_user.id, entry_id)
    return "", 204


JOURNAL_ROUTES = (
    ("GET", "", list_journal),
    ("GET", "/range/<start>/<end>", list_journal_in_range),
    ("GET", "/<int:entry_id>", get_entry),
    ("POST", "", create_journal_entry),
    ("PUT", "/<int:entry_id>", update_journal_entry),
    ("DELETE", "/<int:entry_id>", delete_journal_entry),
)

bind_routes(journal_api_bp, JOURNAL_ROUTES)
