"""Journal routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..errors import MindBridgeError
from ..models.base import CamelModel
from ..models.entries import JournalEntry
from ..models.user import UserRecord
from ..services.container import MindBridge, get_app_state
from .deps import current_user, to_http_exception

router = APIRouter(prefix="/api/journal", tags=["Journal"])


class JournalRequest(CamelModel):
    content: str = ""
    title: Optional[str] = None
    mood: Optional[int] = None


@router.post("", response_model=JournalEntry)
async def save_journal_entry(body: JournalRequest, user: UserRecord = Depends(current_user), state: MindBridge = Depends(get_app_state)):
    try:
        return state.ledger.record_journal(user.id, body.content, title=body.title, mood=body.mood)
    except MindBridgeError as e:
        raise to_http_exception(e) from e


@router.get("", response_model=list[JournalEntry])
async def get_journal_entries(
    limit: int = Query(default=20, ge=1, le=200),
    user: UserRecord = Depends(current_user),
):
    """Most recent journal entries first."""
    return sorted(user.journal_entries, key=lambda e: e.date, reverse=True)[:limit]
