"""Goal routes."""
from fastapi import APIRouter, Depends

from ..errors import MindBridgeError
from ..models.base import CamelModel
from ..models.entries import Goal
from ..models.user import UserRecord
from ..services.container import MindBridge, get_app_state
from .deps import current_user, to_http_exception

router = APIRouter(prefix="/api/goals", tags=["Goals"])


class GoalRequest(CamelModel):
    text: str = ""
    category: str = "other"


@router.get("", response_model=list[Goal])
async def get_goals(user: UserRecord = Depends(current_user)):
    return user.goals


@router.post("", response_model=Goal)
async def add_goal(body: GoalRequest, user: UserRecord = Depends(current_user), state: MindBridge = Depends(get_app_state)):
    try:
        return state.ledger.add_goal(user.id, body.text, body.category)
    except MindBridgeError as e:
        raise to_http_exception(e) from e


@router.post("/{goal_id}/toggle", response_model=Goal)
async def toggle_goal(goal_id: str, user: UserRecord = Depends(current_user), state: MindBridge = Depends(get_app_state)):
    try:
        return state.ledger.toggle_goal(user.id, goal_id)
    except MindBridgeError as e:
        raise to_http_exception(e) from e


@router.delete("/{goal_id}")
async def delete_goal(goal_id: str, user: UserRecord = Depends(current_user), state: MindBridge = Depends(get_app_state)):
    try:
        state.ledger.delete_goal(user.id, goal_id)
    except MindBridgeError as e:
        raise to_http_exception(e) from e
    return {"status": "deleted", "goal_id": goal_id}
