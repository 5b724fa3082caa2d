"""Journal services: owner-scoped CRUD returning explicit results."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import FileStorage

from moodjournal.core.users.models import User
from moodjournal.core.utils.results import Result
from moodjournal.domains.journal.models import JournalEntry, Mood
from moodjournal.domains.journal.services import image_service, mood_service
from moodjournal.extensions import db

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "journal not found"
INVALID_MOOD_MESSAGE = "The selected mood_id is invalid."
UPDATABLE_FIELDS = ("title", "description", "mood_id")


class JournalRecord(NamedTuple):
    """An entry with its relations resolved at load time."""

    entry: JournalEntry
    mood_category: Optional[str]
    owner_id: Optional[int]


def _record_query():
    return (
        db.session.query(JournalEntry, Mood.category, User.id)
        .outerjoin(Mood, Mood.id == JournalEntry.mood_id)
        .outerjoin(User, User.id == JournalEntry.user_id)
    )


def _load_record(entry_id: int) -> Optional[JournalRecord]:
    row = _record_query().filter(JournalEntry.id == entry_id).first()
    return JournalRecord(*row) if row else None


def _owned_entry(user_id: int, entry_id: int) -> Optional[JournalEntry]:
    return JournalEntry.query.filter_by(id=entry_id, user_id=user_id).first()


def list_entries(user_id: int) -> Result[List[JournalRecord]]:
    try:
        rows = (
            _record_query()
            .filter(JournalEntry.user_id == user_id)
            .order_by(JournalEntry.created_at.asc(), JournalEntry.id.asc())
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Listing journals failed for user %s", user_id)
        return Result.internal("could not load journals")
    return Result.success([JournalRecord(*row) for row in rows])


def get_entry(user_id: int, entry_id: int) -> Result[JournalRecord]:
    """Ownership is part of the lookup: foreign ids look exactly like missing ones."""
    try:
        row = (
            _record_query()
            .filter(JournalEntry.id == entry_id, JournalEntry.user_id == user_id)
            .first()
        )
    except SQLAlchemyError:
        logger.exception("Loading journal %s failed", entry_id)
        return Result.internal("could not load journal")
    if row is None:
        return Result.not_found(NOT_FOUND_MESSAGE)
    return Result.success(JournalRecord(*row))


def create_entry(
    user_id: int,
    *,
    title: str,
    description: str,
    mood_id: int,
    image: Optional[FileStorage],
) -> Result[JournalRecord]:
    image_error = image_service.validate_image(image)
    if image_error:
        return Result.invalid("image", image_error)
    if not mood_service.mood_exists(mood_id):
        return Result.invalid("mood_id", INVALID_MOOD_MESSAGE)

    reference = image_service.store_image(image)
    entry = JournalEntry(
        user_id=user_id,
        title=title.strip(),
        description=description.strip(),
        mood_id=mood_id,
        image=reference,
    )
    try:
        db.session.add(entry)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        image_service.discard_image(reference)
        logger.exception("Creating journal failed for user %s", user_id)
        return Result.internal("could not create journal")
    logger.info("Journal %s created by user %s", entry.id, user_id)
    return Result.success(_load_record(entry.id))


def update_entry(user_id: int, entry_id: int, **fields: Any) -> Result[JournalRecord]:
    """Apply a partial update; keys outside title/description/mood_id are ignored."""
    entry = _owned_entry(user_id, entry_id)
    if entry is None:
        return Result.not_found(NOT_FOUND_MESSAGE)

    changes = {key: fields[key] for key in UPDATABLE_FIELDS if key in fields}
    if "mood_id" in changes and not mood_service.mood_exists(changes["mood_id"]):
        return Result.invalid("mood_id", INVALID_MOOD_MESSAGE)
    for key, value in changes.items():
        setattr(entry, key, value.strip() if isinstance(value, str) else value)
    if changes:
        entry.updated_at = datetime.utcnow()
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Updating journal %s failed", entry_id)
        return Result.internal("could not update journal")
    return Result.success(_load_record(entry.id))


def delete_entry(user_id: int, entry_id: int) -> Result[None]:
    entry = _owned_entry(user_id, entry_id)
    if entry is None:
        return Result.not_found("Data not found")
    try:
        db.session.delete(entry)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Deleting journal %s failed", entry_id)
        return Result.internal("could not delete journal")
    # TODO: unlink entry.image with image_service.discard_image after the commit.
    logger.info("Journal %s deleted by user %s", entry_id, user_id)
    return Result.success(None)
