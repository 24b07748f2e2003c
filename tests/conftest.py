"""Shared fixtures: a throwaway SQLite database per test and an API client bound to it."""

import pytest
from fastapi.testclient import TestClient

from user_management_api.app.core.config import settings
from user_management_api.app.core.db import init_db
from user_management_api.app.main import app
from user_management_api.app.repositories.user_repository import UserRepository


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the application at a fresh database file and migrate it."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "users.db"))
    init_db()
    return settings.database_url


@pytest.fixture
def repository(database):
    return UserRepository()


@pytest.fixture
def client(database):
    """TestClient running the real service stack against the test database."""
    app.dependency_overrides.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def john_payload():
    return {"username": "john_doe", "email": "john@example.com", "fullName": "John Doe"}
