"""Mood, journal and goal entry models."""
from datetime import datetime
from typing import Literal, Optional, get_args

from pydantic import Field, field_validator

from .base import CamelModel

EntryKind = Literal["quick", "detailed"]
GoalCategory = Literal["mood", "exercise", "sleep", "social", "mindfulness", "other"]

GOAL_CATEGORIES: tuple[str, ...] = get_args(GoalCategory)


class MoodEntry(CamelModel):
    """One mood check-in. At most one is kept per calendar day."""

    mood: int = Field(ge=1, le=5)
    energy: Optional[int] = Field(default=None, ge=1, le=10)
    sleep: Optional[int] = Field(default=None, ge=1, le=10)
    activities: list[str] = Field(default_factory=list)
    notes: str = ""
    date: datetime
    type: EntryKind = "detailed"

    @field_validator("activities")
    @classmethod
    def _dedupe_activities(cls, value: list[str]) -> list[str]:
        seen: list[str] = []
        for tag in value:
            tag = tag.strip().lower()
            if tag and tag not in seen:
                seen.append(tag)
        return seen


class JournalEntry(CamelModel):
    """Free-text journal entry, append-only."""

    title: str
    content: str
    mood: Optional[int] = Field(default=None, ge=1, le=5)
    date: datetime


class Goal(CamelModel):
    """A personal goal that can be ticked off and un-ticked."""

    id: str
    text: str
    category: GoalCategory = "other"
    completed: bool = False
    date: datetime
    completed_date: Optional[datetime] = None
