"""Dashboard summary models."""
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field

from .base import CamelModel
from .entries import MoodEntry

ActivityKind = Literal["mood", "journal", "goal"]


class ChartPoint(CamelModel):
    """One calendar day of the 30-day mood series; mood is None on days without an entry."""

    day: date
    mood: Optional[int] = None


class ActivityItem(CamelModel):
    kind: ActivityKind
    date: datetime
    summary: str
    emoji: str = ""


class DashboardSummary(CamelModel):
    """Everything the dashboard view shows for one user."""

    greeting: str
    todays_mood: Optional[MoodEntry] = None
    weekly_average: Optional[float] = None
    monthly_average: Optional[float] = None
    streak: int = 0
    total_mood_entries: int = 0
    journal_count: int = 0
    goals_completed: int = 0
    goals_total: int = 0
    recent_activity: list[ActivityItem] = Field(default_factory=list)
    chart: list[ChartPoint] = Field(default_factory=list)
