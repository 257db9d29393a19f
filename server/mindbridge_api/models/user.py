"""User account models."""
from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel
from .entries import Goal, JournalEntry, MoodEntry


class Preferences(CamelModel):
    notifications: bool = True
    dark_mode: bool = False
    public_profile: bool = False
    language: str = "en"
    theme: str = "light"


class UserProfile(CamelModel):
    """Public view of a user record (no credential)."""

    id: str
    name: str
    email: str
    age: Optional[str] = None
    newsletter: bool = False
    join_date: datetime
    last_login: datetime
    login_count: int = 1
    days_active: int = 1


class UserRecord(UserProfile):
    """
    A registered user and everything they have logged.

    The record is the unit of persistence: every ledger write replaces
    the whole record. `version` increases on each write.
    """

    password: str = Field(repr=False)
    mood_entries: list[MoodEntry] = Field(default_factory=list)
    journal_entries: list[JournalEntry] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)
    version: int = 0

    def profile(self) -> UserProfile:
        return UserProfile.model_validate(self.model_dump(include=set(UserProfile.model_fields)))


class RegistrationForm(CamelModel):
    """Sign-up form as submitted; validated by the user store."""

    full_name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    age: Optional[str] = None
    agree_terms: bool = False
    newsletter: bool = False
