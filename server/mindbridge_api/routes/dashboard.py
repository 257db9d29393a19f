"""Dashboard summary and mood chart routes."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from ..models.dashboard import DashboardSummary
from ..models.user import UserRecord
from ..services.chart import render_chart, to_svg
from ..services.container import MindBridge, get_app_state
from ..services.metrics import build_dashboard, chart_series
from .deps import current_user

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardSummary, response_model_by_alias=True)
async def get_dashboard(user: UserRecord = Depends(current_user), state: MindBridge = Depends(get_app_state)):
    """
    Get the dashboard summary for the logged-in user.
    Today's mood, weekly and monthly averages, streak, recent activity and the 30-day series.
    """
    return build_dashboard(user, state.clock())


@router.get("/chart")
async def get_mood_chart(
    width: int = Query(default=600, ge=120, le=2000),
    height: int = Query(default=300, ge=120, le=2000),
    user: UserRecord = Depends(current_user),
    state: MindBridge = Depends(get_app_state),
):
    """30-day series plus the drawing instructions for it."""
    series = chart_series(user, state.clock())
    return {
        "series": [p.to_storage() for p in series],
        "drawing": render_chart(series, width, height).to_dict(),
    }


@router.get("/chart.svg")
async def get_mood_chart_svg(
    width: int = Query(default=600, ge=120, le=2000),
    height: int = Query(default=300, ge=120, le=2000),
    user: UserRecord = Depends(current_user),
    state: MindBridge = Depends(get_app_state),
):
    drawing = render_chart(chart_series(user, state.clock()), width, height)
    return Response(content=to_svg(drawing), media_type="image/svg+xml")
