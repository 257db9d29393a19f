"""Explicitly wired application services.

One `MindBridge` instance owns the storage tiers and hands the same user
store to the session, ledger and navigator. The HTTP layer uses a cached
default instance; tests build their own.
"""
from datetime import timedelta
from functools import lru_cache
from typing import Optional

import httpx

from ..config import Settings, get_settings
from ..database import DatabaseManager
from ..navigation import Navigator, RouteContext, default_routes
from .clock import Clock, now_local
from .ledger import Ledger
from .quotes import QuoteProvider, TranslationTable
from .session_state import SessionState
from .user_store import UserStore


class MindBridge:
    """Storage, accounts, ledger and navigation for one local user agent."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        db: Optional[DatabaseManager] = None,
        clock: Clock = now_local,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self.clock = clock
        self.db = db or DatabaseManager(self.settings)

        self.users = UserStore(self.db.local, clock=clock, hash_iterations=self.settings.password_hash_iterations)
        self.session = SessionState(
            self.db, self.users, clock=clock, ttl=timedelta(hours=self.settings.session_ttl_hours)
        )
        self.ledger = Ledger(self.users, clock=clock, on_change=self.session.refresh_pointer)
        self.navigator = Navigator(default_routes(), RouteContext(session=self.session, clock=clock))

        self.http_client = http_client or httpx.AsyncClient(
            base_url=self.settings.assets_base_url, timeout=httpx.Timeout(self.settings.fetch_timeout)
        )
        self.quotes = QuoteProvider(self.http_client, supported=self.settings.supported_languages)
        self.translations = TranslationTable(
            self.http_client,
            self.db.local,
            supported=self.settings.supported_languages,
            default_language=self.settings.default_language,
        )

    async def aclose(self) -> None:
        await self.http_client.aclose()


@lru_cache
def get_app_state() -> MindBridge:
    return MindBridge()
