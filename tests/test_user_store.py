"""Tests for the user store: registration, lookup and versioned writes."""
import pytest

from server.mindbridge_api.errors import Conflict, DuplicateEmail, ValidationError
from server.mindbridge_api.services.user_store import USERS_KEY, UserStore

from conftest import registration


class TestCreate:
    def test_create_then_find_by_email(self, state):
        created = state.users.create(registration(email="Alex@Example.com"))

        found = state.users.find_by_email("  alex@EXAMPLE.com ")
        assert found is not None
        assert found.id == created.id
        assert found.id.startswith("user_")
        assert found.email == "alex@example.com"

    def test_find_by_id(self, state, user):
        assert state.users.find_by_id(user.id).email == "a@b.com"
        assert state.users.find_by_id("user_missing") is None

    def test_new_user_defaults(self, state, clock):
        created = state.users.create(registration(name="  Sam Lee  "))
        assert created.name == "Sam Lee"
        assert created.login_count == 1
        assert created.days_active == 1
        assert created.join_date == clock.now
        assert created.last_login == clock.now
        assert created.mood_entries == []
        assert created.journal_entries == []
        assert created.goals == []
        assert created.version == 1

    @pytest.mark.parametrize("variant", ["a@b.com", "A@B.COM", "  a@b.com  ", "A@b.Com "])
    def test_duplicate_email_any_casing(self, state, user, variant):
        with pytest.raises(DuplicateEmail):
            state.users.create(registration(email=variant))
        assert len(state.users.load_all()) == 1

    def test_password_is_not_stored_in_plaintext(self, state, user):
        raw = state.db.local.get(USERS_KEY)
        assert "secret1" not in raw
        assert user.password.startswith("pbkdf2_sha256$")


class TestValidation:
    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"full_name": "A"}, "fullName"),
            ({"full_name": "  B "}, "fullName"),
            ({"email": "not-an-email"}, "email"),
            ({"email": "a@b"}, "email"),
            ({"email": "a b@c.com"}, "email"),
            ({"password": "12345", "confirm_password": "12345"}, "password"),
            ({"confirm_password": "different"}, "confirmPassword"),
            ({"age": None}, "age"),
            ({"agree_terms": False}, "agreeTerms"),
        ],
    )
    def test_invalid_form_rejected_before_storage(self, state, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            state.users.create(registration(**overrides))
        assert exc_info.value.field == field
        assert state.db.local.get(USERS_KEY) is None


class TestUpsert:
    def test_upsert_bumps_version(self, state, user):
        stored = state.users.upsert(user.model_copy(update={"name": "Renamed"}))
        assert stored.version == user.version + 1
        assert state.users.get(user.id).name == "Renamed"

    def test_stale_write_conflicts(self, state, user):
        state.users.upsert(user.model_copy(update={"name": "First"}))

        with pytest.raises(Conflict) as exc_info:
            state.users.upsert(user.model_copy(update={"name": "Stale"}))

        assert exc_info.value.found == user.version + 1
        assert state.users.get(user.id).name == "First"


class TestCorruption:
    def test_corrupt_blob_treated_as_empty(self, state):
        state.db.local.set(USERS_KEY, "not valid json {{{{")
        assert state.users.load_all() == []
        assert state.users.find_by_email("a@b.com") is None

    def test_non_list_blob_treated_as_empty(self, state):
        state.db.local.set_json(USERS_KEY, {"oops": True})
        assert state.users.load_all() == []

    def test_malformed_record_skipped(self, state, user):
        raw = state.db.local.get_json(USERS_KEY)
        raw.append({"id": "broken"})
        state.db.local.set_json(USERS_KEY, raw)

        users = state.users.load_all()
        assert [u.id for u in users] == [user.id]

    def test_registration_recovers_from_corrupt_store(self, db, clock):
        db.local.set(USERS_KEY, "][")
        store = UserStore(db.local, clock=clock, hash_iterations=1000)
        created = store.create(registration())
        assert store.find_by_id(created.id) is not None
