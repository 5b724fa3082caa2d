"""Mood reference data."""

from __future__ import annotations

from sqlalchemy.orm import Mapped, mapped_column

from moodjournal.core.users.models import TimestampMixin
from moodjournal.extensions import db


class Mood(db.Model, TimestampMixin):
    __tablename__ = "mood"

    id: Mapped[int] = mapped_column(primary_key=True)
    category: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False)
