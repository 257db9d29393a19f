"""Session record model."""
from datetime import datetime, timedelta

from .base import CamelModel
from .user import UserRecord


class Session(CamelModel):
    """Snapshot of the logged-in user plus a session id and login time."""

    session_id: str
    login_time: datetime
    user: UserRecord

    def age(self, now: datetime) -> timedelta:
        return now - self.login_time
