"""Authentication models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Mapped, mapped_column, relationship

from moodjournal.core.users.models import TimestampMixin
from moodjournal.extensions import db

if TYPE_CHECKING:
    from moodjournal.core.users.models import User


class AccessToken(db.Model, TimestampMixin):
    """Opaque bearer token; only the sha256 of the secret is stored."""

    __tablename__ = "personal_access_token"
    __table_args__ = (db.Index("ix_personal_access_token_user", "user_id"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), nullable=False)
    name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    token_hash: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="tokens")
