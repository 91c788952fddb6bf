"""Unit tests for the account directory.

Tests verify registration, credential checks, session binding and the
default admin seed against in-memory fake stores.
"""

import pytest

from admissions.core.accounts import DEFAULT_ADMIN, AccountDirectory
from admissions.core.models import CURRENT_USER_KEY, USERS_KEY, Registration, User, UserRole
from admissions.tests.fakes import FakeKeyValueStorePort


@pytest.fixture
def store() -> FakeKeyValueStorePort:
    return FakeKeyValueStorePort()


@pytest.fixture
def session() -> FakeKeyValueStorePort:
    return FakeKeyValueStorePort()


@pytest.fixture
def directory(store: FakeKeyValueStorePort, session: FakeKeyValueStorePort) -> AccountDirectory:
    return AccountDirectory(store=store, session=session)


@pytest.fixture
def candidate() -> Registration:
    return Registration(
        name="Asha Rao",
        email="asha@example.com",
        password="s3cret",
        phone="9876543210",
    )


# ============================================================================
# Bootstrap
# ============================================================================


class TestDefaultAdminSeed:
    """The directory seeds exactly one admin on first run."""

    def test_seeds_admin_into_empty_store(
        self, directory: AccountDirectory, store: FakeKeyValueStorePort
    ) -> None:
        users = directory.list_users()
        assert users == [DEFAULT_ADMIN]
        assert store.data[USERS_KEY][0]["email"] == "admin@cgu.edu"
        assert store.data[USERS_KEY][0]["role"] == "ADMIN"

    def test_admin_can_log_in_immediately(self, directory: AccountDirectory) -> None:
        user = directory.login("admin@cgu.edu", "admin123")
        assert user is not None
        assert user.id == "admin-1"
        assert user.role == UserRole.ADMIN

    def test_seed_is_idempotent(
        self, store: FakeKeyValueStorePort, session: FakeKeyValueStorePort
    ) -> None:
        AccountDirectory(store=store, session=session)
        AccountDirectory(store=store, session=session)
        assert store.writes_to(USERS_KEY) == 1
        assert len(store.data[USERS_KEY]) == 1

    def test_does_not_seed_when_users_exist(
        self, store: FakeKeyValueStorePort, session: FakeKeyValueStorePort
    ) -> None:
        existing = User("user-7", "Ravi", "ravi@example.com", "pw", "", UserRole.APPLICANT)
        store.plant(USERS_KEY, [existing.to_dict()])

        directory = AccountDirectory(store=store, session=session)

        assert directory.list_users() == [existing]
        assert store.writes_to(USERS_KEY) == 0

    def test_seeds_over_empty_list(
        self, store: FakeKeyValueStorePort, session: FakeKeyValueStorePort
    ) -> None:
        store.plant(USERS_KEY, [])
        directory = AccountDirectory(store=store, session=session)
        assert directory.list_users() == [DEFAULT_ADMIN]

    def test_seeds_over_corrupt_collection(
        self, store: FakeKeyValueStorePort, session: FakeKeyValueStorePort
    ) -> None:
        store.plant(USERS_KEY, "not-a-list")
        directory = AccountDirectory(store=store, session=session)
        assert directory.list_users() == [DEFAULT_ADMIN]


# ============================================================================
# Registration
# ============================================================================


class TestRegister:
    """Tests for AccountDirectory.register."""

    def test_register_creates_applicant(
        self, directory: AccountDirectory, candidate: Registration
    ) -> None:
        user = directory.register(candidate)

        assert user is not None
        assert user.role == UserRole.APPLICANT
        assert user.email == candidate.email
        assert user.id.startswith("user-")
        assert directory.get_user(user.id) == user

    def test_register_ignores_supplied_role(self, directory: AccountDirectory) -> None:
        candidate = Registration.from_dict(
            {"name": "M", "email": "m@example.com", "password": "pw", "role": "ADMIN"}
        )
        user = directory.register(candidate)
        assert user is not None
        assert user.role == UserRole.APPLICANT

    def test_duplicate_email_rejected(
        self, directory: AccountDirectory, candidate: Registration
    ) -> None:
        assert directory.register(candidate) is not None
        count_before = len(directory.list_users())

        second = directory.register(
            Registration(name="Other", email=candidate.email, password="different")
        )

        assert second is None
        assert len(directory.list_users()) == count_before

    def test_duplicate_check_is_case_sensitive(
        self, directory: AccountDirectory, candidate: Registration
    ) -> None:
        directory.register(candidate)
        upper = Registration(name="Asha", email="ASHA@example.com", password="pw")
        assert directory.register(upper) is not None

    def test_admin_email_cannot_be_registered(self, directory: AccountDirectory) -> None:
        assert directory.register(Registration("X", "admin@cgu.edu", "pw")) is None

    def test_ids_are_unique(self, directory: AccountDirectory) -> None:
        first = directory.register(Registration("A", "a@example.com", "pw"))
        second = directory.register(Registration("B", "b@example.com", "pw"))
        assert first is not None and second is not None
        assert first.id != second.id

    def test_register_persists_collection(
        self,
        directory: AccountDirectory,
        store: FakeKeyValueStorePort,
        candidate: Registration,
    ) -> None:
        user = directory.register(candidate)
        assert user is not None
        stored_emails = [u["email"] for u in store.data[USERS_KEY]]
        assert stored_emails == ["admin@cgu.edu", "asha@example.com"]

    def test_register_does_not_bind_session(
        self, directory: AccountDirectory, candidate: Registration
    ) -> None:
        directory.register(candidate)
        assert directory.get_current_user() is None


# ============================================================================
# Login
# ============================================================================


class TestLogin:
    """Tests for AccountDirectory.login."""

    def test_login_with_valid_credentials(
        self, directory: AccountDirectory, candidate: Registration
    ) -> None:
        registered = directory.register(candidate)
        assert directory.login(candidate.email, candidate.password) == registered

    def test_wrong_password_fails(
        self, directory: AccountDirectory, candidate: Registration
    ) -> None:
        directory.register(candidate)
        assert directory.login(candidate.email, "wrong") is None

    def test_unknown_email_fails(self, directory: AccountDirectory) -> None:
        assert directory.login("nobody@example.com", "admin123") is None

    def test_email_match_is_exact(self, directory: AccountDirectory) -> None:
        assert directory.login("ADMIN@cgu.edu", "admin123") is None


# ============================================================================
# Session
# ============================================================================


class TestSession:
    """Tests for the current-user session pointer."""

    def test_no_current_user_initially(self, directory: AccountDirectory) -> None:
        assert directory.get_current_user() is None

    def test_set_and_get_current_user(
        self, directory: AccountDirectory, session: FakeKeyValueStorePort
    ) -> None:
        directory.set_current_user(DEFAULT_ADMIN)

        assert directory.get_current_user() == DEFAULT_ADMIN
        assert session.data[CURRENT_USER_KEY]["id"] == "admin-1"

    def test_session_does_not_touch_durable_store(
        self, directory: AccountDirectory, store: FakeKeyValueStorePort
    ) -> None:
        directory.set_current_user(DEFAULT_ADMIN)
        assert CURRENT_USER_KEY not in store.data

    def test_set_none_clears_session(
        self, directory: AccountDirectory, session: FakeKeyValueStorePort
    ) -> None:
        directory.set_current_user(DEFAULT_ADMIN)
        directory.set_current_user(None)

        assert directory.get_current_user() is None
        assert CURRENT_USER_KEY not in session.data

    def test_logout_clears_session(self, directory: AccountDirectory) -> None:
        directory.set_current_user(DEFAULT_ADMIN)
        directory.logout()
        assert directory.get_current_user() is None

    def test_unparsable_session_is_ignored(
        self, directory: AccountDirectory, session: FakeKeyValueStorePort
    ) -> None:
        session.plant(CURRENT_USER_KEY, {"name": "no id or email"})
        assert directory.get_current_user() is None

    def test_session_holds_a_value_copy(
        self, directory: AccountDirectory, session: FakeKeyValueStorePort
    ) -> None:
        directory.set_current_user(DEFAULT_ADMIN)
        session.data[CURRENT_USER_KEY]["name"] = "Renamed"

        # The stored record is untouched; only the session copy changed.
        assert directory.get_user("admin-1") == DEFAULT_ADMIN
        current = directory.get_current_user()
        assert current is not None and current.name == "Renamed"


def test_get_user_unknown_id(directory: AccountDirectory) -> None:
    assert directory.get_user("user-missing") is None


def test_malformed_user_records_are_dropped(
    store: FakeKeyValueStorePort, session: FakeKeyValueStorePort
) -> None:
    valid = User("user-2", "Ravi", "ravi@example.com", "pw", "", UserRole.APPLICANT)
    store.plant(USERS_KEY, [{"id": "broken"}, valid.to_dict()])

    directory = AccountDirectory(store=store, session=session)

    assert directory.list_users() == [valid]
