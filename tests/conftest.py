"""
Pytest fixtures for MindBridge tests.

Every test gets its own storage under tmp_path, a controllable clock and
an asset server stub, so nothing touches the real data file or network.
"""
import json
from datetime import datetime, timedelta

import httpx
import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

from server.mindbridge_api.config import Settings
from server.mindbridge_api.database import DatabaseManager
from server.mindbridge_api.models.user import RegistrationForm
from server.mindbridge_api.services.container import MindBridge, get_app_state

# Load environment variables
load_dotenv()


class FakeClock:
    """Callable clock that tests can move around."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)

    def set_days_ago(self, base: datetime, days: int) -> None:
        self.now = base - timedelta(days=days)


# Midday keeps day arithmetic away from midnight boundaries
START = datetime(2026, 3, 15, 12, 0, 0).astimezone()

ASSETS = {
    "/text/quotes_en.json": ["Breathe in, breathe out.", "One step at a time."],
    "/text/quotes_db.json": ["Shared quote."],
    "/languages/en.json": {"home": {"motto": "Welcome to MindBridge!"}, "nav": {"home": "Home"}},
    "/languages/hi.json": {"home": {"motto": "माइंडब्रिज में आपका स्वागत है!"}},
}


def asset_handler(assets: dict):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path in assets:
            return httpx.Response(200, content=json.dumps(assets[request.url.path]).encode("utf-8"))
        return httpx.Response(404, text="not found")

    return handler


def make_asset_client(assets: dict | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.MockTransport(asset_handler(ASSETS if assets is None else assets)),
        base_url="http://assets.test",
    )


def registration(email: str = "a@b.com", password: str = "secret1", name: str = "Alex Doe", **overrides) -> RegistrationForm:
    data = {
        "full_name": name,
        "email": email,
        "password": password,
        "confirm_password": password,
        "age": "25-34",
        "agree_terms": True,
    }
    data.update(overrides)
    return RegistrationForm(**data)


@pytest.fixture
def clock():
    return FakeClock(START)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_path=str(tmp_path),
        password_hash_iterations=1000,
        assets_base_url="http://assets.test",
    )


@pytest.fixture
def db(settings):
    return DatabaseManager(settings)


@pytest.fixture
def state(settings, db, clock):
    """Fully wired services on isolated storage."""
    return MindBridge(settings=settings, db=db, clock=clock, http_client=make_asset_client())


@pytest.fixture
def user(state):
    """A registered user; registration leaves no session open."""
    record = state.users.create(registration())
    return record


@pytest.fixture
def logged_in(state, user):
    state.session.login("a@b.com", "secret1", remember=True)
    return state.users.get(user.id)


@pytest.fixture
def client(state):
    """TestClient bound to the isolated services."""
    from server.mindbridge_api.main import app

    app.dependency_overrides[get_app_state] = lambda: state
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
