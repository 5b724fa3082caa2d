"""Journal mappers for the summary and detail projections."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from moodjournal.domains.journal.schemas.journal_schemas import JournalDetail, JournalSummary
from moodjournal.domains.journal.services.journal_service import JournalRecord

DATE_FORMAT = "%d-%m-%Y"


class ProjectionError(RuntimeError):
    """A stored entry is missing a relation the projection needs."""


def _format_date(value: Optional[datetime]) -> str:
    return value.strftime(DATE_FORMAT) if value else ""


def _resolved(record: JournalRecord) -> tuple[str, int]:
    entry = record.entry
    if record.mood_category is None:
        raise ProjectionError(f"journal {entry.id} references missing mood {entry.mood_id}")
    if record.owner_id is None:
        raise ProjectionError(f"journal {entry.id} references missing user {entry.user_id}")
    return record.mood_category, record.owner_id


def map_summary(record: JournalRecord) -> dict:
    mood, owner_id = _resolved(record)
    entry = record.entry
    return JournalSummary(
        id=entry.id,
        image=entry.image or None,
        title=entry.title,
        description=entry.description,
        mood=mood,
        mood_id=entry.mood_id,
        user_id=owner_id,
        created_at=_format_date(entry.created_at),
    ).model_dump()


def map_detail(record: JournalRecord) -> dict:
    mood, owner_id = _resolved(record)
    entry = record.entry
    return JournalDetail(
        id=entry.id,
        image=entry.image or None,
        title=entry.title,
        description=entry.description,
        mood_id=entry.mood_id,
        mood=mood,
        created_at=_format_date(entry.created_at),
        user_id=owner_id,
    ).model_dump()
