"""API route modules."""
from .auth import router as auth_router
from .mood import router as mood_router
from .journal import router as journal_router
from .goals import router as goals_router
from .dashboard import router as dashboard_router
from .navigation import router as navigation_router
from .resources import router as resources_router
from .quotes import router as quotes_router

__all__ = [
    "auth_router",
    "mood_router",
    "journal_router",
    "goals_router",
    "dashboard_router",
    "navigation_router",
    "resources_router",
    "quotes_router",
]
