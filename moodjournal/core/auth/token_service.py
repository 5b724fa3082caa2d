"""Opaque bearer token issue, validation and revocation.

Plaintext tokens look like ``"<id>|<secret>"``. Only the sha256 of the secret
is persisted, so a token can be shown to its owner exactly once.
"""

from __future__ import annotations

import hmac
import secrets
from hashlib import sha256
from typing import NamedTuple, Optional

from moodjournal.core.auth.models import AccessToken
from moodjournal.core.users.models import User
from moodjournal.extensions import db

TOKEN_BYTES = 30


class Authenticated(NamedTuple):
    token: AccessToken
    user: User


def issue(user: User, device_name: str) -> str:
    """Persist a new token for ``user`` and return its plaintext.

    The caller owns the commit so the token lands in the same transaction as
    any user write that preceded it.
    """
    secret = secrets.token_urlsafe(TOKEN_BYTES)
    token = AccessToken(user_id=user.id, name=device_name, token_hash=_hash_secret(secret))
    db.session.add(token)
    db.session.flush()
    return f"{token.id}|{secret}"


def find_token(plain_token: str) -> Optional[AccessToken]:
    """Look up the stored record for a presented plaintext token."""
    if not plain_token:
        return None
    token_id, sep, secret = plain_token.partition("|")
    if not sep:
        secret, token_id = plain_token, ""
    if not secret:
        return None
    record = AccessToken.query.filter_by(token_hash=_hash_secret(secret)).first()
    if record is None:
        return None
    if token_id and not hmac.compare_digest(token_id, str(record.id)):
        return None
    return record


def validate(plain_token: str) -> Optional[Authenticated]:
    """Resolve a presented token to its record and owner, or None."""
    record = find_token(plain_token)
    if record is None:
        return None
    user = db.session.get(User, record.user_id)
    if user is None:
        return None
    return Authenticated(record, user)


def revoke(token: Optional[AccessToken]) -> None:
    """Delete a token record. Already-deleted tokens are a no-op."""
    if token is None:
        return
    AccessToken.query.filter_by(id=token.id).delete(synchronize_session=False)
    db.session.commit()


def _hash_secret(secret: str) -> str:
    return sha256(secret.encode("utf-8")).hexdigest()


__all__ = ["Authenticated", "issue", "validate", "revoke", "find_token", "TOKEN_BYTES"]
