"""
Tests for the requests-based ContactKeeperAPI client, using a mocked
session instead of a running server.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from contact_keeper_client import ContactKeeperAPI


def _response(status_code, body=None):
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = json.dumps(body).encode() if body is not None else b""
    resp.url = "http://testserver"
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return ContactKeeperAPI(base_url="http://testserver/", session=session)


def test_login_stores_token_and_sends_it(api, session):
    session.request.return_value = _response(200, {"token": "abc"})
    data, error = api.login("jane@example.com", "secret123")
    assert error is None
    assert api.token == "abc"

    session.request.return_value = _response(200, [{"id": 1, "name": "Jill"}])
    contacts, error = api.list_contacts()
    assert error is None
    assert contacts == [{"id": 1, "name": "Jill"}]
    kwargs = session.request.call_args.kwargs
    assert kwargs["url"] == "http://testserver/api/contacts"
    assert kwargs["headers"] == {"x-auth-token": "abc"}


def test_create_contact_omits_unset_fields(api, session):
    session.request.return_value = _response(200, {"id": 3, "name": "Jill"})
    api.create_contact("Jill", phone="555")
    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "POST"
    assert kwargs["json"] == {"name": "Jill", "phone": "555"}


def test_update_contact_sends_only_given_fields(api, session):
    session.request.return_value = _response(200, {"id": 3, "name": "Jill", "phone": "1"})
    api.update_contact(3, phone="1")
    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "PUT"
    assert kwargs["url"] == "http://testserver/api/contacts/3"
    assert kwargs["json"] == {"phone": "1"}


def test_validation_errors_are_surfaced(api, session):
    session.request.return_value = _response(400, {"errors": [{"msg": "name is required", "param": "name"}]})
    data, error = api.create_contact("")
    assert data is None
    assert error["status_code"] == 400
    assert error["message"] == "name is required"
    assert error["errors"][0]["param"] == "name"


def test_message_errors_are_surfaced(api, session):
    session.request.return_value = _response(401, {"msg": "not authorized"})
    ok, error = api.delete_contact(3)
    assert ok is False
    assert error == {"status_code": 401, "message": "not authorized"}


def test_delete_success(api, session):
    session.request.return_value = _response(200, {"msg": "contact removed"})
    assert api.delete_contact(3) == (True, None)


def test_connection_failure(api, session):
    session.request.side_effect = requests.ConnectionError("refused")
    contacts, error = api.list_contacts()
    assert contacts == []
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_logout_drops_token(api, session):
    api.token = "abc"
    api.logout()
    session.request.return_value = _response(200, [])
    api.list_contacts()
    assert session.request.call_args.kwargs["headers"] == {}
