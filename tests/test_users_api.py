"""
Tests for registration, login and the current-user endpoint.
"""

import sqlite3
from contextlib import contextmanager

import pytest

from contact_keeper_api.app.core import db
from contact_keeper_api.app.core.security import create_user_token


def test_welcome(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"msg": "welcome to contact-keeper API"}


class TestRegister:
    def test_returns_usable_token(self, client):
        resp = client.post("/api/users", json={"name": "Jane", "email": "Jane@Example.com", "password": "secret123"})
        assert resp.status_code == 200
        token = resp.json()["token"]

        me = client.get("/api/auth", headers={"x-auth-token": token})
        assert me.status_code == 200
        body = me.json()
        assert body["name"] == "Jane"
        assert body["email"] == "jane@example.com"
        assert "password" not in body

    def test_duplicate_email(self, client, register):
        register("Jane", email="jane@example.com")
        resp = client.post("/api/users", json={"name": "Other", "email": "JANE@example.com", "password": "secret123"})
        assert resp.status_code == 400
        assert resp.json() == {"msg": "user already exists"}

    def test_reports_every_invalid_field(self, client):
        resp = client.post("/api/users", json={"name": "", "email": "not-an-email", "password": "123"})
        assert resp.status_code == 400
        errors = resp.json()["errors"]
        assert [e["param"] for e in errors] == ["name", "email", "password"]
        assert all("123" != e.get("value") for e in errors)

    def test_empty_body(self, client):
        resp = client.post("/api/users", json={})
        assert resp.status_code == 400
        assert len(resp.json()["errors"]) == 3


class TestLogin:
    def test_success(self, client, register):
        register("Jane", email="jane@example.com", password="secret123")
        resp = client.post("/api/auth", json={"email": "jane@example.com", "password": "secret123"})
        assert resp.status_code == 200
        token = resp.json()["token"]
        assert client.get("/api/auth", headers={"x-auth-token": token}).json()["name"] == "Jane"

    def test_wrong_password_and_unknown_email_look_the_same(self, client, register):
        register("Jane", email="jane@example.com", password="secret123")
        wrong = client.post("/api/auth", json={"email": "jane@example.com", "password": "nope123"})
        unknown = client.post("/api/auth", json={"email": "ghost@example.com", "password": "secret123"})
        assert wrong.status_code == unknown.status_code == 400
        assert wrong.json() == unknown.json() == {"msg": "invalid credentials"}

    def test_validation(self, client):
        resp = client.post("/api/auth", json={"email": "nope"})
        assert resp.status_code == 400
        assert [e["param"] for e in resp.json()["errors"]] == ["email", "password"]


class TestCurrentUser:
    def test_requires_token(self, client):
        resp = client.get("/api/auth")
        assert resp.status_code == 401
        assert resp.json() == {"msg": "no token, authorization denied"}

    def test_token_for_missing_user(self, client):
        resp = client.get("/api/auth", headers={"x-auth-token": create_user_token(999)})
        assert resp.status_code == 404
        assert resp.json() == {"msg": "user not found"}

    def test_id_beyond_integer_range(self, client):
        token = create_user_token(2**70)
        resp = client.get("/api/auth", headers={"x-auth-token": token})
        assert resp.status_code == 404
        assert resp.json() == {"msg": "user not found"}


@pytest.mark.parametrize(
    "method, url, body",
    [
        ("post", "/api/users", {"name": "Carol", "email": "carol@example.com", "password": "secret123"}),
        ("post", "/api/auth", {"email": "carol@example.com", "password": "secret123"}),
        ("get", "/api/auth", None),
    ],
)
def test_store_failure_is_reported_as_server_error(client, register, monkeypatch, caplog, method, url, body):
    headers = register("Alice")

    @contextmanager
    def broken_cursor():
        raise sqlite3.OperationalError("disk I/O error")
        yield  # pragma: no cover

    monkeypatch.setattr(db, "get_cursor", broken_cursor)
    resp = client.request(method, url, json=body, headers=headers)
    assert resp.status_code == 500
    assert resp.json() == {"msg": "server error"}
    assert "disk I/O error" in caplog.text
