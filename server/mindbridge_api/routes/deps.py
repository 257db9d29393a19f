"""Shared helpers for the API routes."""
from fastapi import Depends, HTTPException

from ..errors import (
    AuthError,
    Conflict,
    DuplicateEmail,
    EmptyContent,
    InvalidCredentials,
    MindBridgeError,
    NotFoundError,
    ValidationError,
)
from ..models.user import UserRecord
from ..services.container import MindBridge, get_app_state


def to_http_exception(error: MindBridgeError) -> HTTPException:
    """Map a domain error onto the HTTP status the client should see."""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=400, detail={"message": error.message, "field": error.field})
    if isinstance(error, EmptyContent):
        return HTTPException(status_code=400, detail={"message": str(error)})
    if isinstance(error, InvalidCredentials):
        return HTTPException(status_code=401, detail={"message": str(error)})
    if isinstance(error, (DuplicateEmail, Conflict)):
        return HTTPException(status_code=409, detail={"message": str(error)})
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail={"message": str(error)})
    if isinstance(error, AuthError):
        return HTTPException(status_code=401, detail={"message": str(error)})
    return HTTPException(status_code=500, detail={"message": str(error)})


def current_user(state: MindBridge = Depends(get_app_state)) -> UserRecord:
    """Logged-in user, or 401."""
    user = state.session.current_user() if state.session.is_authenticated() else None
    if user is None:
        raise HTTPException(status_code=401, detail={"message": "Please log in to continue."})
    return user
