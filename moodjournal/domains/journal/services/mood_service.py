"""Mood lookups and seeding."""

from __future__ import annotations

from typing import Iterable, Optional

from moodjournal.domains.journal.models import Mood
from moodjournal.extensions import db

DEFAULT_MOODS = (
    "happy",
    "sad",
    "angry",
    "anxious",
    "calm",
    "excited",
    "tired",
    "grateful",
)


def get_mood(mood_id: int) -> Optional[Mood]:
    return db.session.get(Mood, mood_id)


def mood_exists(mood_id: int) -> bool:
    return get_mood(mood_id) is not None


def seed_moods(categories: Iterable[str] = DEFAULT_MOODS) -> int:
    """Insert missing categories; returns how many were created."""
    existing = {m.category for m in Mood.query.all()}
    created = 0
    for category in categories:
        label = category.strip().lower()
        if not label or label in existing:
            continue
        db.session.add(Mood(category=label))
        existing.add(label)
        created += 1
    db.session.commit()
    return created
