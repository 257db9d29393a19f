"""Navigation routes: drive the fragment router and read back what it rendered."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field

from ..models.base import CamelModel
from ..navigation import NavigationResult
from ..services.container import MindBridge, get_app_state

router = APIRouter(prefix="/api/navigate", tags=["Navigation"])


class NavigationResponse(CamelModel):
    route: Optional[str] = None
    fragment: str = ""
    changed: bool = False
    title: str = ""
    html: str = ""
    active_link: Optional[str] = None
    effects: list[str] = Field(default_factory=list)
    redirected_from: Optional[str] = None
    error: Optional[str] = None
    chart: Optional[dict] = None


def _response(state: MindBridge, result: Optional[NavigationResult] = None) -> NavigationResponse:
    target = state.navigator.target
    return NavigationResponse(
        route=state.navigator.current_route,
        fragment=state.navigator.fragment,
        changed=result.changed if result else False,
        title=target.title,
        html=target.html,
        active_link=target.active_link,
        effects=list(target.effects),
        redirected_from=result.redirected_from if result else None,
        error=result.error if result else None,
        chart=target.chart.to_dict() if target.chart else None,
    )


@router.get("", response_model=NavigationResponse)
async def get_navigation_state(state: MindBridge = Depends(get_app_state)):
    """What is currently rendered."""
    return _response(state)


@router.post("/link", response_model=NavigationResponse)
async def follow_link(href: str = Query(..., description="Link target, e.g. #about"), state: MindBridge = Depends(get_app_state)):
    """Follow an in-page link; links without a fragment marker leave the state untouched."""
    return _response(state, state.navigator.intercept_link(href))


@router.get("/{fragment}", response_model=NavigationResponse)
async def navigate(fragment: str, state: MindBridge = Depends(get_app_state)):
    return _response(state, state.navigator.navigate(fragment))
