"""
Pytest fixtures for Lingua tests. Uses a temporary SQLite DB per test.
"""

from __future__ import annotations

import pytest

TEST_SECRET = "test-session-secret"


@pytest.fixture
def lingua_db(tmp_path, monkeypatch):
    """
    Point the engine at a temporary SQLite DB and create tables.
    Resets the engine cache so each test gets a fresh DB.
    """
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("LINGUA_DB_URL", f"sqlite:///{tmp_path / 'lingua.db'}")
    monkeypatch.setenv("SESSION_SECRET", TEST_SECRET)

    from backend_lingua.database import connection

    connection.reset_engine_for_test()
    connection.init_db()
    yield connection
    connection.reset_engine_for_test()


@pytest.fixture
def make_user(lingua_db):
    """Create a user row directly through the repository."""
    from backend_lingua.database import repositories

    def _make(wallet: str, name: str = "Ana", **overrides):
        profile = {
            "username": name.lower(),
            "name": name,
            "country": "Spain",
            "country_code": "ES",
            "native_languages": ["es"],
            "learning_languages": ["en"],
            "notifications_enabled": False,
        }
        profile.update(overrides)
        return repositories.upsert_user(wallet, profile)

    return _make


@pytest.fixture
def auth_headers():
    """Return a function building Authorization headers for a wallet."""
    from backend_lingua.api_server.auth import issue_session_token

    def _headers(wallet: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {issue_session_token(wallet, TEST_SECRET)}"}

    return _headers


@pytest.fixture
def client(lingua_db):
    """FastAPI TestClient. Depends on lingua_db so the temp DB is set before app runs."""
    from fastapi.testclient import TestClient

    from backend_lingua.api_server.server import app

    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()
    if hasattr(app.state, "picture_resolver"):
        del app.state.picture_resolver
