"""Tests for dashboard metrics derived from a user's entries."""
from datetime import timedelta

import pytest

from server.mindbridge_api.services.clock import local_day
from server.mindbridge_api.services.metrics import (
    CHART_DAYS,
    build_dashboard,
    chart_series,
    monthly_average,
    mood_emoji,
    mood_label,
    recent_activity,
    todays_mood,
    tracking_streak,
    weekly_average,
)

from conftest import START


def log_moods(state, user_id, clock, moods_by_days_ago: dict[int, int]):
    """Record one mood per listed day offset, then put the clock back at START."""
    for days_ago, mood in moods_by_days_ago.items():
        clock.set_days_ago(START, days_ago)
        state.ledger.record_mood(user_id, mood)
    clock.now = START
    return state.users.get(user_id)


class TestAverages:
    def test_no_entries_gives_none_not_zero(self, user, clock):
        assert weekly_average(user, clock.now) is None
        assert monthly_average(user, clock.now) is None

    def test_window_boundaries(self, state, user, clock):
        record = log_moods(state, user.id, clock, {0: 5, 3: 3, 10: 1, 45: 1})

        assert weekly_average(record, clock.now) == pytest.approx(4.0)
        assert monthly_average(record, clock.now) == pytest.approx(3.0)

    def test_only_old_entries_gives_none(self, state, user, clock):
        record = log_moods(state, user.id, clock, {12: 4})
        assert weekly_average(record, clock.now) is None
        assert monthly_average(record, clock.now) == pytest.approx(4.0)


class TestStreak:
    def test_no_entries(self, user, clock):
        assert tracking_streak(user, clock.now) == 0

    def test_consecutive_days_up_to_first_gap(self, state, user, clock):
        record = log_moods(state, user.id, clock, {0: 3, 1: 4, 2: 2, 4: 5})
        assert tracking_streak(record, clock.now) == 3

    def test_no_entry_today_breaks_streak(self, state, user, clock):
        record = log_moods(state, user.id, clock, {1: 3, 2: 3})
        assert tracking_streak(record, clock.now) == 0


class TestChartSeries:
    def test_thirty_days_oldest_first(self, state, user, clock):
        record = log_moods(state, user.id, clock, {0: 4, 5: 2, 29: 1, 30: 5})
        series = chart_series(record, clock.now)

        assert len(series) == CHART_DAYS
        assert series[-1].day == local_day(START)
        assert series[0].day == local_day(START) - timedelta(days=29)
        assert series[-1].mood == 4
        assert series[-6].mood == 2
        assert series[0].mood == 1
        assert sum(1 for p in series if p.mood is None) == CHART_DAYS - 3

    def test_empty_user_gives_all_gaps(self, user, clock):
        series = chart_series(user, clock.now)
        assert len(series) == CHART_DAYS
        assert all(p.mood is None for p in series)


class TestActivity:
    def test_newest_first_across_kinds(self, state, user, clock):
        clock.set_days_ago(START, 2)
        state.ledger.record_mood(user.id, 2)
        clock.set_days_ago(START, 1)
        state.ledger.record_journal(user.id, "Notes", title="Reflection")
        goal = state.ledger.add_goal(user.id, "Sleep early", "sleep")
        clock.now = START
        state.ledger.toggle_goal(user.id, goal.id)

        items = recent_activity(state.users.get(user.id))

        assert [i.kind for i in items] == ["goal", "journal", "mood"]
        assert items[0].summary == "Completed goal: Sleep early"
        assert items[1].summary == "Journal: Reflection"
        assert items[2].summary == "Logged mood: Not Great"

    def test_limit(self, state, user, clock):
        for n in range(12):
            state.ledger.record_journal(user.id, f"entry {n}")
            clock.advance(minutes=1)
        assert len(recent_activity(state.users.get(user.id), limit=10)) == 10


class TestDashboard:
    def test_labels(self):
        assert mood_label(5) == "Great"
        assert mood_label(1) == "Poor"
        assert mood_label(None) == "Unknown"
        assert mood_emoji(4) == "🙂"

    def test_summary(self, state, user, clock):
        log_moods(state, user.id, clock, {0: 4, 1: 2})
        state.ledger.record_journal(user.id, "hello")
        done = state.ledger.add_goal(user.id, "Walk", "exercise")
        state.ledger.add_goal(user.id, "Call a friend", "social")
        state.ledger.toggle_goal(user.id, done.id)

        summary = build_dashboard(state.users.get(user.id), clock.now)

        assert summary.greeting == "Hello, Alex Doe!"
        assert summary.todays_mood.mood == 4
        assert summary.weekly_average == pytest.approx(3.0)
        assert summary.streak == 2
        assert summary.total_mood_entries == 2
        assert summary.journal_count == 1
        assert summary.goals_completed == 1
        assert summary.goals_total == 2
        assert len(summary.chart) == CHART_DAYS

    def test_todays_mood_absent(self, state, user, clock):
        record = log_moods(state, user.id, clock, {1: 3})
        assert todays_mood(record, clock.now) is None
