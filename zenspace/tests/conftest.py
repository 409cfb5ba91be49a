import pytest

from zenspace import create_app
from zenspace.extensions import db

DEFAULT_PASSWORD = "secret123"


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")
    config.addinivalue_line("markers", "slow: Slow running tests")
    config.addinivalue_line("markers", "smoke: Quick smoke tests for CI")


def _test_overrides(tmp_path) -> dict:
    return {
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'zenspace-test.db'}",
        "SECRET_KEY": "test-secret",
        "BCRYPT_LOG_ROUNDS": 10,
    }


@pytest.fixture()
def make_app(tmp_path):
    """Build a testing app on a throwaway sqlite file; extra kwargs go to create_app."""
    built = []

    def _make(**kwargs):
        overrides = {**_test_overrides(tmp_path), **kwargs.pop("overrides", {})}
        app = create_app("testing", overrides=overrides, **kwargs)
        with app.app_context():
            db.create_all()
        built.append(app)
        return app

    yield _make

    for app in built:
        with app.app_context():
            db.session.remove()
            db.drop_all()
            db.engine.dispose()


@pytest.fixture()
def app(make_app):
    """Per-test app with its schema created. Requests get their own app context."""
    return make_app()


@pytest.fixture()
def app_ctx(app):
    """Push an app context for tests that call services directly."""
    ctx = app.app_context()
    ctx.push()
    try:
        yield app
    finally:
        db.session.remove()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


def register(client, username: str, password: str = DEFAULT_PASSWORD, confirm: str | None = None):
    return client.post(
        "/api/register",
        json={
            "username": username,
            "password": password,
            "confirmPassword": password if confirm is None else confirm,
        },
    )


@pytest.fixture()
def user_client(app):
    """Test client already holding a session cookie for ``calm_user``."""
    c = app.test_client()
    resp = register(c, "calm_user")
    assert resp.status_code == 201
    c.user = resp.get_json()
    return c


@pytest.fixture()
def other_client(app):
    """A second, independent signed-in user."""
    c = app.test_client()
    resp = register(c, "other_user")
    assert resp.status_code == 201
    c.user = resp.get_json()
    return c
