"""User store: every account lives in one JSON array under `mindbridge_users`."""
import logging
import re
import threading
import uuid
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from ..database import StorageArea
from ..errors import Conflict, DuplicateEmail, StorageParseError, UserNotFound, ValidationError
from ..models.user import RegistrationForm, UserRecord
from .clock import Clock, now_local
from .passwords import DEFAULT_ITERATIONS, hash_password

logger = logging.getLogger(__name__)

USERS_KEY = "mindbridge_users"

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def validate_registration(form: RegistrationForm) -> None:
    """Raise ValidationError for the first problem found in a sign-up form."""
    if len(form.full_name.strip()) < MIN_NAME_LENGTH:
        raise ValidationError("Please enter a valid full name.", field="fullName")
    if not EMAIL_PATTERN.match(normalize_email(form.email)):
        raise ValidationError("Please enter a valid email address.", field="email")
    if len(form.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.", field="password"
        )
    if form.password != form.confirm_password:
        raise ValidationError("Passwords do not match.", field="confirmPassword")
    if not form.age:
        raise ValidationError("Please select your age range.", field="age")
    if not form.agree_terms:
        raise ValidationError(
            "Please agree to the Terms of Service and Privacy Policy.", field="agreeTerms"
        )


class UserStore:
    """
    Flat collection of user records persisted as a whole.

    Writes are read-modify-write over the full list and are serialised
    through one lock. `upsert` refuses a record whose version is behind
    the stored one instead of overwriting newer data.
    """

    def __init__(self, storage: StorageArea, clock: Clock = now_local, hash_iterations: int = DEFAULT_ITERATIONS):
        self.storage = storage
        self.clock = clock
        self.hash_iterations = hash_iterations
        self.lock = threading.RLock()

    def load_all(self) -> list[UserRecord]:
        """Load every user; a corrupted blob is treated as an empty store."""
        try:
            raw = self.storage.get_json(USERS_KEY, default=[])
        except StorageParseError as e:
            logger.warning("Ignoring unreadable user store: %s", e)
            return []
        if not isinstance(raw, list):
            logger.warning("Ignoring user store with unexpected type %s", type(raw).__name__)
            return []

        users = []
        for item in raw:
            try:
                users.append(UserRecord.model_validate(item))
            except PydanticValidationError as e:
                logger.warning("Skipping malformed user record: %s", e.errors()[:1])
        return users

    def save_all(self, users: list[UserRecord]) -> None:
        self.storage.set_json(USERS_KEY, [u.to_storage() for u in users])

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        wanted = normalize_email(email)
        return next((u for u in self.load_all() if u.email == wanted), None)

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        return next((u for u in self.load_all() if u.id == user_id), None)

    def get(self, user_id: str) -> UserRecord:
        user = self.find_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user

    def upsert(self, record: UserRecord) -> UserRecord:
        """
        Replace the stored record with the same id, or append a new one.
        Returns the stored copy with its version bumped.
        """
        with self.lock:
            users = self.load_all()
            index = next((i for i, u in enumerate(users) if u.id == record.id), None)
            stored = record.model_copy(update={"version": record.version + 1})
            if index is None:
                users.append(stored)
            else:
                current = users[index].version
                if current != record.version:
                    raise Conflict(record.id, expected=record.version, found=current)
                users[index] = stored
            self.save_all(users)
            return stored

    def create(self, form: RegistrationForm) -> UserRecord:
        """Validate a sign-up form and store the new account."""
        validate_registration(form)
        email = normalize_email(form.email)

        with self.lock:
            if self.find_by_email(email) is not None:
                raise DuplicateEmail(email)

            now = self.clock()
            user = UserRecord(
                id=f"user_{uuid.uuid4().hex[:12]}",
                name=form.full_name.strip(),
                email=email,
                password=hash_password(form.password, iterations=self.hash_iterations),
                age=form.age,
                newsletter=form.newsletter,
                join_date=now,
                last_login=now,
                login_count=1,
                days_active=1,
            )
            stored = self.upsert(user)

        logger.info("Registered user %s", stored.id)
        return stored
