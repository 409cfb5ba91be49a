"""Auth HTTP controllers (API only)."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from zenspace.core.services import get_auth_service
from zenspace.core.users.schemas import serialize_user
from zenspace.core.utils.routing import bind_routes

auth_bp = Blueprint("auth_api", __name__)


def _set_session_cookie(response, token: str):
    config = current_app.config
    response.set_cookie(
        config["SESSION_TOKEN_COOKIE_NAME"],
        token,
        max_age=int(config["PERMANENT_SESSION_LIFETIME"].total_seconds()),
        httponly=True,
        secure=config.get("SESSION_COOKIE_SECURE", False),
        samesite=config.get("SESSION_COOKIE_SAMESITE", "Lax"),
    )
    return response


def session_token() -> str | None:
    return request.cookies.get(current_app.config["SESSION_TOKEN_COOKIE_NAME"])


def register():
    user, token = get_auth_service().register(request.get_json(silent=True))
    return _set_session_cookie(jsonify(serialize_user(user)), token), 201


def login():
    user, token = get_auth_service().login(request.get_json(silent=True))
    return _set_session_cookie(jsonify(serialize_user(user)), token)


def logout():
    get_auth_service().logout(session_token())
    response = jsonify({"message": "Logged out successfully"})
    response.delete_cookie(
        current_app.config["SESSION_TOKEN_COOKIE_NAME"],
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
    )
    return response


@login_required
def me():
    return jsonify(serialize_user(current_user._get_current_object()))


AUTH_ROUTES = (
    ("POST", "/register", register),
    ("POST", "/login", login),
    ("POST", "/logout", logout),
    ("GET", "/user", me),
)

bind_routes(auth_bp, AUTH_ROUTES)
