"""Mood check-in routes."""
from datetime import timedelta

from fastapi import APIRouter, Depends, Query
from pydantic import Field

from ..errors import MindBridgeError
from ..models.base import CamelModel
from ..models.entries import MoodEntry
from ..models.user import UserRecord
from ..services.container import MindBridge, get_app_state
from .deps import current_user, to_http_exception

router = APIRouter(prefix="/api/mood", tags=["Mood"])


class MoodRequest(CamelModel):
    mood: int
    energy: int | None = None
    sleep: int | None = None
    activities: list[str] = Field(default_factory=list)
    notes: str = ""


class QuickMoodRequest(CamelModel):
    mood: int


@router.post("", response_model=MoodEntry)
async def save_mood(body: MoodRequest, user: UserRecord = Depends(current_user), state: MindBridge = Depends(get_app_state)):
    """Save a detailed mood entry for today, replacing any earlier one today."""
    try:
        return state.ledger.record_mood(
            user.id, body.mood, energy=body.energy, sleep=body.sleep, activities=body.activities, notes=body.notes
        )
    except MindBridgeError as e:
        raise to_http_exception(e) from e


@router.post("/quick", response_model=MoodEntry)
async def save_quick_mood(body: QuickMoodRequest, user: UserRecord = Depends(current_user), state: MindBridge = Depends(get_app_state)):
    try:
        return state.ledger.quick_mood(user.id, body.mood)
    except MindBridgeError as e:
        raise to_http_exception(e) from e


@router.get("", response_model=list[MoodEntry])
async def get_mood_entries(
    days: int = Query(default=30, ge=1, le=365, description="Number of days of history"),
    user: UserRecord = Depends(current_user),
    state: MindBridge = Depends(get_app_state),
):
    """Mood entries from the last `days` days, newest first."""
    cutoff = state.clock() - timedelta(days=days)
    entries = [e for e in user.mood_entries if e.date >= cutoff]
    return sorted(entries, key=lambda e: e.date, reverse=True)
