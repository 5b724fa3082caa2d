"""Journal request/response schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _required_text(v):
    if v is None:
        raise ValueError("may not be null")
    if isinstance(v, str) and not v.strip():
        raise ValueError("may not be blank")
    return v


class JournalEntryCreate(BaseModel):
    title: str = Field(max_length=255)
    description: str
    mood_id: int
    # Accepted for compatibility with older clients; must match the caller.
    user_id: Optional[int] = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def not_blank(cls, v):
        return _required_text(v)


class JournalEntryUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    mood_id: Optional[int] = None

    @field_validator("title", "description", "mood_id", mode="before")
    @classmethod
    def not_blank(cls, v):
        # Supplied fields must carry a value; omitted fields stay untouched.
        return _required_text(v)


class JournalSummary(BaseModel):
    id: int
    image: Optional[str]
    title: str
    description: str
    mood: str
    mood_id: int
    user_id: int
    created_at: str


class JournalDetail(BaseModel):
    id: int
    image: Optional[str]
    title: str
    description: str
    mood_id: int
    mood: str
    created_at: str
    user_id: int
