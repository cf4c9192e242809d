from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel
from sqlmodel import Field, SQLModel
from sqlalchemy import Column, DateTime, JSON


def _new_note_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Note(SQLModel, table=True):
    id: str = Field(default_factory=_new_note_id, primary_key=True)
    title: str
    content: str = ""
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags or []),
            "createdAt": as_utc(self.created_at).isoformat(),
            "updatedAt": as_utc(self.updated_at).isoformat(),
        }


class NotePayload(BaseModel):
    """Request body for creating or updating a note.

    Fields are left untyped so a wrong type is answered with the notes API's
    own 400 error instead of a validation error.
    """
    id: Any = None
    title: Any = None
    content: Any = None
    tags: Any = None
    createdAt: Any = None


class ContentPayload(BaseModel):
    content: str = ""
