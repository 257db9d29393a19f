"""Domain errors raised by the storage, account and ledger services.

Routes translate these into HTTP responses; the navigator turns render
failures into the generic error view.
"""
from typing import Optional


class MindBridgeError(Exception):
    """Base class for all MindBridge domain errors."""


class ValidationError(MindBridgeError):
    """Malformed input, reported next to the offending form field."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class AuthError(MindBridgeError):
    """Base class for registration and login failures."""


class DuplicateEmail(AuthError):
    def __init__(self, email: str):
        super().__init__("An account with this email already exists.")
        self.email = email


class InvalidCredentials(AuthError):
    def __init__(self):
        super().__init__("Invalid email or password. Please try again.")


class EmptyContent(MindBridgeError):
    """A journal entry or goal was submitted without any text."""


class StorageParseError(MindBridgeError):
    """A persisted blob could not be decoded as JSON."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Stored value for {key!r} is not valid JSON: {reason}")
        self.key = key


class Conflict(MindBridgeError):
    """A write was based on a stale copy of a user record."""

    def __init__(self, user_id: str, expected: int, found: int):
        super().__init__(
            f"User {user_id} was modified concurrently (expected version {expected}, found {found})"
        )
        self.user_id = user_id
        self.expected = expected
        self.found = found


class RouteContentError(MindBridgeError):
    """Raised when a route handler fails while producing its content."""

    def __init__(self, route: str, cause: Exception):
        super().__init__(f"Failed to render route {route!r}: {cause}")
        self.route = route
        self.cause = cause


class NotFoundError(MindBridgeError):
    """Base class for lookups that found nothing."""


class UserNotFound(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class GoalNotFound(NotFoundError):
    def __init__(self, goal_id: str):
        super().__init__(f"Goal not found: {goal_id}")
        self.goal_id = goal_id
