"""Derived mood metrics for the dashboard."""
from datetime import datetime, timedelta
from typing import Optional

from ..models.dashboard import ActivityItem, ChartPoint, DashboardSummary
from ..models.entries import MoodEntry
from ..models.user import UserRecord
from .clock import local_day

CHART_DAYS = 30
STREAK_LOOKBACK_DAYS = 365

MOOD_LABELS = {1: "Poor", 2: "Not Great", 3: "Okay", 4: "Good", 5: "Great"}
MOOD_EMOJIS = {1: "😢", 2: "😔", 3: "😐", 4: "🙂", 5: "😊"}


def mood_label(level: Optional[int]) -> str:
    return MOOD_LABELS.get(level, "Unknown")


def mood_emoji(level: Optional[int]) -> str:
    return MOOD_EMOJIS.get(level, "😐")


def todays_mood(user: UserRecord, now: datetime) -> Optional[MoodEntry]:
    today = local_day(now)
    return next((e for e in user.mood_entries if local_day(e.date) == today), None)


def average_mood(user: UserRecord, window_days: int, now: datetime) -> Optional[float]:
    """Mean mood over entries dated within the last window_days; None when there are none."""
    start = now - timedelta(days=window_days)
    values = [e.mood for e in user.mood_entries if start <= e.date <= now]
    if not values:
        return None
    return sum(values) / len(values)


def weekly_average(user: UserRecord, now: datetime) -> Optional[float]:
    return average_mood(user, 7, now)


def monthly_average(user: UserRecord, now: datetime) -> Optional[float]:
    return average_mood(user, 30, now)


def tracking_streak(user: UserRecord, now: datetime) -> int:
    """Consecutive days with a mood entry, counting back from today."""
    logged_days = {local_day(e.date) for e in user.mood_entries}
    if not logged_days:
        return 0

    today = local_day(now)
    streak = 0
    for offset in range(STREAK_LOOKBACK_DAYS):
        if today - timedelta(days=offset) not in logged_days:
            break
        streak += 1
    return streak


def chart_series(user: UserRecord, now: datetime) -> list[ChartPoint]:
    """One point per day for the last 30 days, oldest first."""
    by_day: dict = {}
    for entry in user.mood_entries:
        by_day.setdefault(local_day(entry.date), entry.mood)

    today = local_day(now)
    return [
        ChartPoint(day=day, mood=by_day.get(day))
        for day in (today - timedelta(days=offset) for offset in range(CHART_DAYS - 1, -1, -1))
    ]


def recent_activity(user: UserRecord, limit: int = 10) -> list[ActivityItem]:
    """Mood, journal and completed-goal events, newest first."""
    items = [
        ActivityItem(
            kind="mood",
            date=e.date,
            summary=f"Logged mood: {mood_label(e.mood)}",
            emoji=mood_emoji(e.mood),
        )
        for e in user.mood_entries
    ]
    items += [
        ActivityItem(kind="journal", date=e.date, summary=f"Journal: {e.title}", emoji="📝")
        for e in user.journal_entries
    ]
    items += [
        ActivityItem(kind="goal", date=g.completed_date, summary=f"Completed goal: {g.text}", emoji="🎯")
        for g in user.goals
        if g.completed and g.completed_date is not None
    ]
    items.sort(key=lambda item: item.date, reverse=True)
    return items[:limit]


def build_dashboard(user: UserRecord, now: datetime) -> DashboardSummary:
    return DashboardSummary(
        greeting=f"Hello, {user.name}!",
        todays_mood=todays_mood(user, now),
        weekly_average=weekly_average(user, now),
        monthly_average=monthly_average(user, now),
        streak=tracking_streak(user, now),
        total_mood_entries=len(user.mood_entries),
        journal_count=len(user.journal_entries),
        goals_completed=sum(1 for g in user.goals if g.completed),
        goals_total=len(user.goals),
        recent_activity=recent_activity(user),
        chart=chart_series(user, now),
    )
