"""
tagalog_app.schemas

Transfer objects (Pydantic).

Responsibilities:
- Validate vocabulary entries before they reach the database.
- Provide read models for progress reporting.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class WordIn(BaseModel):
    no: int = Field(ge=1)
    tagalog: str = Field(min_length=1, max_length=255)
    english: str = Field(min_length=1, max_length=255)
    example: str = Field(min_length=1, max_length=255)
    translation: str = Field(min_length=1, max_length=255)
    chunk: str = Field(min_length=1, max_length=255)
    audio1: str | None = Field(default=None, max_length=255)
    audio2: str | None = Field(default=None, max_length=255)


class LessonSummary(BaseModel):
    lesson_number: int
    reviewed: int
    known: int
    unknown: int


class ProgressSnapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    current_page: int
    total_pages: int
    words_completed: int
    total_words: int
    last_accessed: datetime
    created_at: datetime
    updated_at: datetime | None = None
