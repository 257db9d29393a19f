"""Registration, login and logout routes."""
import asyncio
import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends

from ..errors import MindBridgeError
from ..models.base import CamelModel
from ..models.session import Session
from ..models.user import RegistrationForm, UserProfile
from ..services.container import MindBridge, get_app_state
from .deps import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


class LoginRequest(CamelModel):
    email: str
    password: str
    remember_me: bool = False


class SessionResponse(CamelModel):
    authenticated: bool
    session_id: Optional[str] = None
    login_time: Optional[datetime] = None
    user: Optional[UserProfile] = None
    redirect: Optional[str] = None


def _session_response(session: Optional[Session], redirect: Optional[str] = None) -> SessionResponse:
    if session is None:
        return SessionResponse(authenticated=False, redirect=redirect)
    return SessionResponse(
        authenticated=True,
        session_id=session.session_id,
        login_time=session.login_time,
        user=session.user.profile(),
        redirect=redirect,
    )


async def _simulated_delay(state: MindBridge) -> None:
    if state.settings.auth_delay_seconds > 0:
        await asyncio.sleep(state.settings.auth_delay_seconds)


@router.post("/register", response_model=SessionResponse)
async def register(form: RegistrationForm, state: MindBridge = Depends(get_app_state)):
    """Create an account and log straight into it."""
    await _simulated_delay(state)
    try:
        session = state.session.register(form)
    except MindBridgeError as e:
        raise to_http_exception(e) from e
    state.navigator.reload_to("dashboard")
    return _session_response(session, redirect="#dashboard")


@router.post("/login", response_model=SessionResponse)
async def login(body: LoginRequest, state: MindBridge = Depends(get_app_state)):
    await _simulated_delay(state)
    try:
        session = state.session.login(body.email, body.password, remember=body.remember_me)
    except MindBridgeError as e:
        raise to_http_exception(e) from e
    state.navigator.reload_to("dashboard")
    return _session_response(session, redirect="#dashboard")


@router.post("/logout", response_model=SessionResponse)
async def logout(state: MindBridge = Depends(get_app_state)):
    state.session.logout()
    state.navigator.reload_to("home")
    return _session_response(None, redirect="#home")


@router.get("/session", response_model=SessionResponse)
async def get_session(state: MindBridge = Depends(get_app_state)):
    """Current session, if one is active."""
    return _session_response(state.session.current())
