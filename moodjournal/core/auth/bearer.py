"""Bearer token resolution for Flask-Login's request loader."""

from __future__ import annotations

from typing import Optional

from flask import Request, g

from moodjournal.core.auth import token_service
from moodjournal.core.auth.models import AccessToken
from moodjournal.core.users.models import User

AUTH_SCHEME = "bearer"


def bearer_token(req: Request) -> Optional[str]:
    header = req.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() != AUTH_SCHEME:
        return None
    value = value.strip()
    return value or None


def load_user_from_request(req: Request) -> Optional[User]:
    """Resolve the request's bearer token; remember the token for logout."""
    plain = bearer_token(req)
    if not plain:
        return None
    authenticated = token_service.validate(plain)
    if authenticated is None:
        return None
    g.access_token = authenticated.token
    return authenticated.user


def current_access_token() -> Optional[AccessToken]:
    return g.get("access_token")
