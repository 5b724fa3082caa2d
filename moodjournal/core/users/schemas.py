"""Typed schemas for user IO."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from moodjournal.core.users.models import User


class UserResponse(BaseModel):
    # Response should not re-validate persisted emails.
    id: int
    name: str
    email: str
    firstname: str
    lastname: str

    model_config = ConfigDict(from_attributes=True)


def serialize_user(user: "User") -> UserResponse:
    return UserResponse.model_validate(user)
