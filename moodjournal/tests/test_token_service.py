"""Token service tests (issue / validate / revoke)."""

from __future__ import annotations

import pytest
from flask import request

pytestmark = pytest.mark.integration

from moodjournal.core.auth import token_service
from moodjournal.core.auth.bearer import current_access_token, load_user_from_request
from moodjournal.core.auth.models import AccessToken
from moodjournal.core.auth.password import hash_password, verify_password
from moodjournal.extensions import db
from moodjournal.tests.factories import make_user


def test_issue_persists_only_a_digest(app):
    with app.app_context():
        user = make_user()
        plain = token_service.issue(user, "phone")
        db.session.commit()

        token_id, _, secret = plain.partition("|")
        record = db.session.get(AccessToken, int(token_id))
        assert record.user_id == user.id
        assert record.name == "phone"
        assert len(record.token_hash) == 64
        assert secret not in record.token_hash
        assert plain not in record.token_hash


def test_validate_resolves_owner(app):
    with app.app_context():
        user = make_user()
        plain = token_service.issue(user, "phone")
        db.session.commit()

        authenticated = token_service.validate(plain)
        assert authenticated.user.id == user.id
        assert authenticated.token.id == int(plain.partition("|")[0])
        # The secret alone is enough; the id prefix is a lookup hint.
        assert token_service.validate(plain.partition("|")[2]).user.id == user.id


@pytest.mark.parametrize("tamper", ["wrong-secret", "id", "empty"])
def test_validate_rejects_tampered_tokens(app, tamper):
    with app.app_context():
        user = make_user()
        plain = token_service.issue(user, "phone")
        db.session.commit()
        token_id, _, secret = plain.partition("|")

        presented = {
            "wrong-secret": f"{token_id}|{secret}x",
            "id": f"{int(token_id) + 1}|{secret}",
            "empty": "",
        }[tamper]
        assert token_service.validate(presented) is None


def test_revoke_is_idempotent(app):
    with app.app_context():
        user = make_user()
        plain = token_service.issue(user, "phone")
        db.session.commit()
        record = token_service.find_token(plain)

        token_service.revoke(record)
        assert token_service.validate(plain) is None
        assert AccessToken.query.count() == 0

        token_service.revoke(record)
        token_service.revoke(None)


def test_tokens_are_unique_per_issue(app):
    with app.app_context():
        user = make_user()
        first = token_service.issue(user, "phone")
        second = token_service.issue(user, "phone")
        db.session.commit()
        assert first != second
        assert AccessToken.query.filter_by(user_id=user.id).count() == 2


def test_password_hashing_round_trip(app):
    with app.app_context():
        hashed = hash_password("correct horse")
        assert verify_password("correct horse", hashed)
        assert not verify_password("battery staple", hashed)
        assert not verify_password("correct horse", None)
        assert not verify_password("correct horse", "not-a-bcrypt-hash")


def test_request_loader_uses_token_validation(app):
    """The request loader exposes the same token record that validate resolves."""
    with app.app_context():
        user = make_user()
        plain = token_service.issue(user, "tablet")
        db.session.commit()
        expected = token_service.validate(plain)

    with app.test_request_context(headers={"Authorization": f"Bearer {plain}"}):
        loaded = load_user_from_request(request)
        assert loaded.id == expected.user.id
        assert current_access_token().id == expected.token.id

    with app.test_request_context(headers={"Authorization": "Bearer 1|forged"}):
        assert load_user_from_request(request) is None
        assert current_access_token() is None
