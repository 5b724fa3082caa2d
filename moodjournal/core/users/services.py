"""User service layer."""

from __future__ import annotations

from typing import Optional

from moodjournal.core.users.models import User
from moodjournal.extensions import db


def get_user(user_id: int | str | None) -> Optional[User]:
    if user_id is None:
        return None
    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None
