"""Session state: who is logged in, and for how long.

Sessions live in one of two tiers: the durable tier when the user asked to
be remembered, otherwise the per-session tier. A session is valid for a
fixed window from its login time; expiry is detected when it is read.
"""
import logging
import secrets
import time
from datetime import timedelta
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from ..database import DatabaseManager, StorageArea
from ..errors import InvalidCredentials, StorageParseError
from ..models.session import Session
from ..models.user import RegistrationForm, UserRecord
from .clock import Clock, local_day, now_local
from .passwords import verify_password
from .user_store import UserStore, normalize_email

logger = logging.getLogger(__name__)

SESSION_KEY = "mindbridge_session"
CURRENT_USER_KEY = "mindbridge_current_user"
DEFAULT_TTL = timedelta(hours=24)


def generate_session_id() -> str:
    return f"session_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


class SessionState:
    """Login, logout and current-user resolution over both storage tiers."""

    def __init__(self, db: DatabaseManager, users: UserStore, clock: Clock = now_local, ttl: timedelta = DEFAULT_TTL):
        self.db = db
        self.users = users
        self.clock = clock
        self.ttl = ttl

    # --- Transitions ---

    def login(self, email: str, password: str, remember: bool = False) -> Session:
        """
        Authenticate and open a session.

        Raises InvalidCredentials when no account matches. On success the
        account's login count and last-login time are updated.
        """
        with self.users.lock:
            user = self.users.find_by_email(normalize_email(email))
            if user is None or not verify_password(password, user.password):
                logger.info("Failed login attempt for %s", normalize_email(email))
                raise InvalidCredentials()

            now = self.clock()
            days_active = user.days_active
            if local_day(now) > local_day(user.last_login):
                days_active += 1

            user = self.users.upsert(
                user.model_copy(
                    update={
                        "last_login": now,
                        "login_count": user.login_count + 1,
                        "days_active": days_active,
                    }
                )
            )

        session = self._open(user, durable=remember)
        logger.info("User %s logged in (remember=%s)", user.id, remember)
        return session

    def register(self, form: RegistrationForm) -> Session:
        """Create an account and log straight into it (durable tier)."""
        user = self.users.create(form)
        return self._open(user, durable=True)

    def logout(self) -> None:
        current = self._read_tier(self.db.local) or self._read_tier(self.db.session)
        self.db.local.remove(SESSION_KEY)
        self.db.session.remove(SESSION_KEY)
        self.db.local.remove(CURRENT_USER_KEY)
        if current is not None:
            logger.info("User %s logged out", current.user.id)

    def _open(self, user: UserRecord, durable: bool) -> Session:
        session = Session(session_id=generate_session_id(), login_time=self.clock(), user=user)
        tier = self.db.local if durable else self.db.session
        other = self.db.session if durable else self.db.local
        other.remove(SESSION_KEY)
        tier.set_json(SESSION_KEY, session.to_storage())
        self.refresh_pointer(user)
        return session

    # --- Queries ---

    def current(self) -> Optional[Session]:
        """Return the active session, or None if absent or expired."""
        for tier in (self.db.local, self.db.session):
            session = self._read_tier(tier)
            if session is None:
                continue
            try:
                expired = session.age(self.clock()) >= self.ttl
            except TypeError:
                # naive timestamp from an older writer; cannot be compared
                expired = True
            if expired:
                logger.info("Session %s expired", session.session_id)
                tier.remove(SESSION_KEY)
                self.db.local.remove(CURRENT_USER_KEY)
                continue
            return session
        return None

    def is_authenticated(self) -> bool:
        return self.current() is not None

    def current_user(self) -> Optional[UserRecord]:
        """
        Fresh copy of the logged-in user.

        Falls back to the legacy current-user pointer only when neither
        tier holds a session record at all. The pointer is a read-side
        mirror for older clients: access gates check is_authenticated()
        first, so a pointer alone never grants a login.
        """
        session = self.current()
        if session is not None:
            return self.users.find_by_id(session.user.id)
        if self._has_session_record():
            return None
        pointer = self.pointer()
        if pointer is None:
            return None
        return self.users.find_by_id(pointer.id)

    # --- Legacy pointer ---

    def pointer(self) -> Optional[UserRecord]:
        try:
            raw = self.db.local.get_json(CURRENT_USER_KEY)
        except StorageParseError as e:
            logger.warning("Ignoring unreadable current-user pointer: %s", e)
            return None
        if raw is None:
            return None
        try:
            return UserRecord.model_validate(raw)
        except PydanticValidationError:
            logger.warning("Ignoring malformed current-user pointer")
            return None

    def refresh_pointer(self, user: UserRecord) -> None:
        """Mirror the latest copy of user into the legacy pointer key."""
        self.db.local.set_json(CURRENT_USER_KEY, user.to_storage())

    def _has_session_record(self) -> bool:
        return any(tier.get(SESSION_KEY) is not None for tier in (self.db.local, self.db.session))

    def _read_tier(self, tier: StorageArea) -> Optional[Session]:
        try:
            raw = tier.get_json(SESSION_KEY)
        except StorageParseError as e:
            logger.warning("Ignoring unreadable session record: %s", e)
            return None
        if raw is None:
            return None
        try:
            return Session.model_validate(raw)
        except PydanticValidationError:
            logger.warning("Ignoring malformed session record")
            return None
