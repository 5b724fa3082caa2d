"""Authentication service layer: login and registration."""

from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from moodjournal.core.auth import token_service
from moodjournal.core.auth.password import hash_password, verify_password
from moodjournal.core.auth.schemas import RegisterRequest
from moodjournal.core.users.models import User
from moodjournal.core.utils.results import ErrorKind, Result
from moodjournal.extensions import db

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = (
    "The email address is already registered. Please use a different email or log in."
)


def find_user_by_email(email: str) -> User | None:
    normalized = email.strip().lower()
    return User.query.filter(func.lower(User.email) == normalized).first()


def login(email: str, password: str, device_name: str) -> Result[str]:
    """Verify credentials and issue a token for ``device_name``.

    Unknown email and wrong password report different messages; existing
    mobile clients match on them.
    """
    user = find_user_by_email(email)
    if not user:
        return Result.failure(ErrorKind.INVALID_CREDENTIALS, "email doesnt exist", {"login": ["email doesnt exist"]})
    if not verify_password(password, user.password_hash):
        return Result.failure(ErrorKind.INVALID_CREDENTIALS, "wrong password", {"login": ["wrong password"]})
    try:
        token = token_service.issue(user, device_name)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Token issue failed for user %s", user.id)
        return Result.internal("login failed")
    return Result.success(token)


def register(payload: RegisterRequest) -> Result[str]:
    """Create a user and return a fresh token, committed together."""
    if find_user_by_email(payload.email):
        return Result.invalid("email", EMAIL_TAKEN_MESSAGE)

    user = User(
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        firstname=payload.firstname,
        lastname=payload.lastname,
    )
    try:
        db.session.add(user)
        db.session.flush()  # ensure user.id for the token row
        token = token_service.issue(user, payload.device_name)
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.session.rollback()
        return Result.invalid("email", EMAIL_TAKEN_MESSAGE)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Registration failed for %s", payload.email)
        return Result.internal("registration failed")
    logger.info("Registered user %s", user.id)
    return Result.success(token)


__all__ = ["login", "register", "find_user_by_email", "EMAIL_TAKEN_MESSAGE"]
