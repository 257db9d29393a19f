"""Per-user ledger of mood check-ins, journal entries and goals.

Every mutation loads the user, changes one nested collection, writes the
whole record back through the user store and refreshes the current-user
pointer.
"""
import logging
import uuid
from typing import Callable, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from ..errors import EmptyContent, GoalNotFound, ValidationError
from ..models.entries import GOAL_CATEGORIES, Goal, JournalEntry, MoodEntry
from ..models.user import UserRecord
from .clock import Clock, local_day, now_local
from .user_store import UserStore

logger = logging.getLogger(__name__)

QUICK_ENERGY = 5
QUICK_SLEEP = 5


def _check_range(name: str, value: Optional[int], low: int, high: int) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ValidationError(f"{name.capitalize()} must be a whole number from {low} to {high}.", field=name)


class Ledger:
    """Mood, journal and goal operations for registered users."""

    def __init__(
        self,
        users: UserStore,
        clock: Clock = now_local,
        on_change: Optional[Callable[[UserRecord], None]] = None,
    ):
        self.users = users
        self.clock = clock
        self.on_change = on_change

    def _apply(self, user_id: str, mutate: Callable[[UserRecord], None]) -> UserRecord:
        with self.users.lock:
            user = self.users.get(user_id)
            mutate(user)
            stored = self.users.upsert(user)
        if self.on_change is not None:
            self.on_change(stored)
        return stored

    # --- Mood ---

    def record_mood(
        self,
        user_id: str,
        mood: int,
        energy: Optional[int] = None,
        sleep: Optional[int] = None,
        activities: Iterable[str] = (),
        notes: str = "",
        kind: str = "detailed",
    ) -> MoodEntry:
        """Save today's mood, replacing any entry already logged today."""
        _check_range("mood", mood, 1, 5)
        _check_range("energy", energy, 1, 10)
        _check_range("sleep", sleep, 1, 10)

        now = self.clock()
        try:
            entry = MoodEntry(
                mood=mood,
                energy=energy,
                sleep=sleep,
                activities=list(activities),
                notes=notes or "",
                date=now,
                type=kind,
            )
        except PydanticValidationError as e:
            first = e.errors()[0]
            raise ValidationError(first["msg"], field=str(first["loc"][0])) from e

        today = local_day(now)

        def mutate(user: UserRecord) -> None:
            user.mood_entries = [e for e in user.mood_entries if local_day(e.date) != today]
            user.mood_entries.append(entry)

        self._apply(user_id, mutate)
        logger.info("Recorded %s mood %d for %s", kind, mood, user_id)
        return entry

    def quick_mood(self, user_id: str, mood: int) -> MoodEntry:
        return self.record_mood(user_id, mood, energy=QUICK_ENERGY, sleep=QUICK_SLEEP, kind="quick")

    # --- Journal ---

    def record_journal(
        self,
        user_id: str,
        content: str,
        title: Optional[str] = None,
        mood: Optional[int] = None,
    ) -> JournalEntry:
        if not content or not content.strip():
            raise EmptyContent("Please write something in your journal entry")
        _check_range("mood", mood, 1, 5)

        now = self.clock()
        entry = JournalEntry(
            title=(title or "").strip() or f"Journal Entry - {now.strftime('%m/%d/%Y')}",
            content=content,
            mood=mood,
            date=now,
        )
        self._apply(user_id, lambda user: user.journal_entries.append(entry))
        logger.info("Recorded journal entry for %s", user_id)
        return entry

    # --- Goals ---

    def add_goal(self, user_id: str, text: str, category: str = "other") -> Goal:
        if not text or not text.strip():
            raise EmptyContent("Please enter a goal")
        if category not in GOAL_CATEGORIES:
            raise ValidationError(
                f"Unknown goal category {category!r}. Must be one of: {', '.join(GOAL_CATEGORIES)}",
                field="category",
            )

        goal = Goal(id=uuid.uuid4().hex, text=text.strip(), category=category, date=self.clock())
        self._apply(user_id, lambda user: user.goals.append(goal))
        logger.info("Added goal %s for %s", goal.id, user_id)
        return goal

    def toggle_goal(self, user_id: str, goal_id: str) -> Goal:
        """Flip a goal's completed flag; the completion time follows the flag."""
        now = self.clock()
        toggled: list[Goal] = []

        def mutate(user: UserRecord) -> None:
            for i, goal in enumerate(user.goals):
                if goal.id == goal_id:
                    completed = not goal.completed
                    user.goals[i] = goal.model_copy(
                        update={"completed": completed, "completed_date": now if completed else None}
                    )
                    toggled.append(user.goals[i])
                    return
            raise GoalNotFound(goal_id)

        self._apply(user_id, mutate)
        return toggled[0]

    def delete_goal(self, user_id: str, goal_id: str) -> None:
        def mutate(user: UserRecord) -> None:
            remaining = [g for g in user.goals if g.id != goal_id]
            if len(remaining) == len(user.goals):
                raise GoalNotFound(goal_id)
            user.goals = remaining

        self._apply(user_id, mutate)
        logger.info("Deleted goal %s for %s", goal_id, user_id)
