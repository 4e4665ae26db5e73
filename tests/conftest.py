import pytest
from fastapi.testclient import TestClient

from contact_keeper_api.app.core.config import settings
from contact_keeper_api.app.core.db import init_db
from contact_keeper_api.app.main import create_app


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point every test at its own SQLite file."""
    db_path = tmp_path / "contact_keeper.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user and return the auth headers for them."""

    def _register(name="Alice", email=None, password="secret123"):
        email = email or f"{name.lower()}@example.com"
        resp = client.post("/api/users", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"x-auth-token": resp.json()["token"]}

    return _register
