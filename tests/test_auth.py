# tests/test_auth.py

import pytest
import requests

from api import auth
from core.response import ErrorCode
from models.session import Role, require_role


def test_login_admin_passes_admin_gate(http, client):
    http.queue(body={"status": "success", "role": "ADMIN", "id": 1})

    response = auth.login(client, "admin", "secret")

    assert response.success
    assert response.data["role"] is Role.ADMIN
    assert client.session.role is Role.ADMIN
    assert client.session.user_id == "1"
    assert require_role(client.session, Role.ADMIN)
    assert client.session.is_authenticated


def test_login_sends_credentials(http, client):
    http.queue(body={"status": "success", "role": "TEACHER", "id": 7})

    auth.login(client, "teacher", "secret")

    call = http.calls[0]
    assert call["method"] == "POST"
    assert call["path"] == "/login"
    assert call["body"] == {"login": "teacher", "password": "secret"}


def test_login_unknown_role_leaves_session_anonymous(http, client):
    http.queue(body={"status": "success", "role": "BOGUS", "id": 5})

    response = auth.login(client, "someone", "secret")

    assert not response.success
    assert response.error is ErrorCode.UNKNOWN_ROLE
    assert response.detail == "Unknown role: BOGUS"
    assert not client.session.is_authenticated
    assert client.session.state == "ANONYMOUS"


@pytest.mark.parametrize("id_key", ["id", "user_id", "userId"])
def test_login_reads_id_from_any_key(http, client, id_key):
    http.queue(body={"status": "success", "role": "STUDENT", id_key: 42})

    response = auth.login(client, "student", "secret")

    assert response.success
    assert client.session.user_id == "42"


def test_login_without_id_fails(http, client):
    http.queue(body={"status": "success", "role": "STUDENT"})

    response = auth.login(client, "student", "secret")

    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD
    assert not client.session.is_authenticated


def test_login_blank_fields_make_no_call(http, client):
    response = auth.login(client, "  ", "secret")

    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD
    assert http.calls == []


def test_login_rejected_credentials_surface_server_message(http, client):
    http.queue(status_code=401, body={"error": "Invalid login or password"})

    response = auth.login(client, "admin", "wrong")

    assert not response.success
    assert response.detail == "Invalid login or password"
    assert response.status_code == 401


def test_login_without_success_status_fails(http, client):
    http.queue(body={"status": "denied", "role": "ADMIN", "id": 1})

    response = auth.login(client, "admin", "secret")

    assert response.detail == "Login failed"
    assert not client.session.is_authenticated


def test_login_network_failure(http, client):
    http.queue_error(requests.exceptions.Timeout("timed out"))

    response = auth.login(client, "admin", "secret")

    assert response.error is ErrorCode.NETWORK_FAILURE
    assert response.detail == "network failure"


def test_logout_clears_session(admin_client):
    auth.logout(admin_client)

    assert admin_client.session.role is None
    assert admin_client.session.user_id is None
