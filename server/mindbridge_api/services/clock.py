"""Local wall-clock helpers shared by the session, ledger and metrics services."""
from datetime import date, datetime
from typing import Callable

Clock = Callable[[], datetime]


def now_local() -> datetime:
    return datetime.now().astimezone()


def local_day(dt: datetime) -> date:
    """Calendar day of dt in local time (naive values are taken as local)."""
    if dt.tzinfo is None:
        return dt.date()
    return dt.astimezone().date()
