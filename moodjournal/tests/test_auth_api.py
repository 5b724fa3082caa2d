"""Authentication API tests.

- POST /api/register
- POST /api/login
- DELETE /api/logout
- GET /api/user
"""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from moodjournal.core.auth.auth_service import EMAIL_TAKEN_MESSAGE
from moodjournal.core.auth.models import AccessToken
from moodjournal.core.users.models import User
from moodjournal.tests.factories import auth_headers, make_user


def _register_payload(**overrides) -> dict:
    payload = {
        "name": "Ada",
        "email": "a@x.com",
        "password": "s3cret-pass",
        "firstname": "Ada",
        "lastname": "Lovelace",
        "device_name": "laptop",
    }
    payload.update(overrides)
    return payload


# ==================== Register Tests ====================


def test_register_then_login_with_same_credentials(app, client):
    """Registration returns a token and the same credentials log in afterwards."""
    resp = client.post("/api/register", json=_register_payload())
    assert resp.status_code == 200
    token = resp.get_json()["register successfull"]
    assert token

    resp = client.post(
        "/api/login",
        json={"email": "a@x.com", "password": "s3cret-pass", "device_name": "phone"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["login successful"]


def test_register_duplicate_email_rejected_without_second_user(app, client):
    assert client.post("/api/register", json=_register_payload()).status_code == 200

    resp = client.post("/api/register", json=_register_payload(name="Impostor"))
    assert resp.status_code == 422
    assert resp.get_json()["user already exist"] == {"email": [EMAIL_TAKEN_MESSAGE]}

    with app.app_context():
        assert User.query.filter_by(email="a@x.com").count() == 1


def test_register_email_is_normalized(app, client):
    """Emails are stored lower-cased, so login is case-insensitive."""
    resp = client.post("/api/register", json=_register_payload(email="  Mixed.Case@X.com "))
    assert resp.status_code == 200

    resp = client.post(
        "/api/login",
        json={"email": "mixed.case@x.com", "password": "s3cret-pass", "device_name": "phone"},
    )
    assert resp.status_code == 200

    resp = client.post("/api/register", json=_register_payload(email="MIXED.CASE@x.com"))
    assert resp.status_code == 422


def test_register_missing_fields_reports_each_field(app, client):
    resp = client.post("/api/register", json={"email": "b@x.com"})
    assert resp.status_code == 422
    errors = resp.get_json()["user already exist"]
    for field in ("name", "password", "firstname", "lastname", "device_name"):
        assert field in errors
    with app.app_context():
        assert User.query.count() == 0


def test_register_rejects_malformed_email(app, client):
    resp = client.post("/api/register", json=_register_payload(email="not-an-email"))
    assert resp.status_code == 422
    assert "email" in resp.get_json()["user already exist"]


def test_register_stores_hash_not_password(app, client):
    client.post("/api/register", json=_register_payload())
    with app.app_context():
        user = User.query.filter_by(email="a@x.com").one()
        assert user.password_hash != "s3cret-pass"
        assert user.password_hash.startswith("$2")


# ==================== Login Tests ====================


def test_login_unknown_email_creates_no_token(app, client):
    resp = client.post(
        "/api/login",
        json={"email": "ghost@x.com", "password": "whatever", "device_name": "phone"},
    )
    assert resp.status_code == 422
    assert resp.get_json()["error"] == "email doesnt exist"
    with app.app_context():
        assert AccessToken.query.count() == 0


def test_login_wrong_password_creates_no_token(app, client):
    with app.app_context():
        make_user(email="real@x.com", password="right-one")

    resp = client.post(
        "/api/login",
        json={"email": "real@x.com", "password": "wrong-one", "device_name": "phone"},
    )
    assert resp.status_code == 422
    assert resp.get_json()["error"] == "wrong password"
    with app.app_context():
        assert AccessToken.query.count() == 0


def test_login_requires_device_name(app, client):
    resp = client.post("/api/login", json={"email": "real@x.com", "password": "pw"})
    assert resp.status_code == 422
    body = resp.get_json()
    assert body["error"] == "validation error"
    assert "device_name" in body["details"]


def test_repeated_login_from_same_device_issues_separate_tokens(app, client):
    with app.app_context():
        make_user(email="multi@x.com", password="pw-12345")

    tokens = []
    for _ in range(2):
        resp = client.post(
            "/api/login",
            json={"email": "multi@x.com", "password": "pw-12345", "device_name": "phone"},
        )
        tokens.append(resp.get_json()["login successful"])

    assert tokens[0] != tokens[1]
    with app.app_context():
        assert AccessToken.query.filter_by(name="phone").count() == 2
    for token in tokens:
        assert client.get("/api/user", headers=auth_headers(token)).status_code == 200


# ==================== Logout / User Tests ====================


def test_logout_revokes_only_the_presented_token(app, client):
    with app.app_context():
        make_user(email="two@x.com", password="pw-12345")
    login = {"email": "two@x.com", "password": "pw-12345"}
    laptop = client.post("/api/login", json={**login, "device_name": "laptop"}).get_json()["login successful"]
    phone = client.post("/api/login", json={**login, "device_name": "phone"}).get_json()["login successful"]

    resp = client.delete("/api/logout", headers=auth_headers(laptop))
    assert resp.status_code == 200
    assert resp.get_json() == {"success": "token successfully deleted"}

    assert client.get("/api/user", headers=auth_headers(laptop)).status_code == 401
    assert client.get("/api/user", headers=auth_headers(phone)).status_code == 200


def test_logout_with_revoked_token_is_unauthenticated(app, client, writer):
    headers = auth_headers(writer["token"])
    assert client.delete("/api/logout", headers=headers).status_code == 200

    resp = client.delete("/api/logout", headers=headers)
    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Unauthenticated."}


def test_user_endpoint_returns_profile_projection(app, client, writer):
    resp = client.get("/api/user", headers=auth_headers(writer["token"]))
    assert resp.status_code == 200
    assert resp.get_json() == {
        "id": writer["user_id"],
        "name": "Writer",
        "email": "writer@example.org",
        "firstname": "Wren",
        "lastname": "Writer",
    }


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer"},
        {"Authorization": "Bearer not-a-real-token"},
        {"Authorization": "Basic dXNlcjpwYXNz"},
    ],
)
def test_protected_routes_reject_missing_or_bad_tokens(app, client, headers):
    for method, path in (("get", "/api/user"), ("get", "/api/index"), ("delete", "/api/logout")):
        resp = getattr(client, method)(path, headers=headers)
        assert resp.status_code == 401
        assert resp.get_json() == {"message": "Unauthenticated."}
