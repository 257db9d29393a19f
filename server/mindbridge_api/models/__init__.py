"""Pydantic models for MindBridge records and API responses."""
from .entries import GOAL_CATEGORIES, Goal, JournalEntry, MoodEntry
from .user import Preferences, RegistrationForm, UserProfile, UserRecord
from .session import Session
from .dashboard import ActivityItem, ChartPoint, DashboardSummary

__all__ = [
    "GOAL_CATEGORIES",
    "Goal",
    "JournalEntry",
    "MoodEntry",
    "Preferences",
    "RegistrationForm",
    "UserProfile",
    "UserRecord",
    "Session",
    "ActivityItem",
    "ChartPoint",
    "DashboardSummary",
]
