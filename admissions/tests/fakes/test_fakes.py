"""Unit tests for fake adapter implementations.

These tests verify that fake adapters work correctly as test doubles
and can be used confidently in tests of core domain logic.
"""

import pytest

from admissions.core.models import Registration, User, UserRole
from admissions.tests.fakes import FakeAccountDirectoryPort, FakeKeyValueStorePort


class TestFakeKeyValueStorePort:
    def test_tracks_calls(self) -> None:
        store = FakeKeyValueStorePort()
        store.set("k", [1])
        store.get("k")
        store.remove("k")

        assert store.set_calls == [("k", [1])]
        assert store.get_calls == ["k"]
        assert store.remove_calls == ["k"]
        assert store.writes_to("k") == 1

    def test_values_are_copied(self) -> None:
        store = FakeKeyValueStorePort()
        value = [{"id": "a"}]
        store.set("k", value)
        value.append({"id": "b"})

        fetched = store.get("k")
        fetched.append({"id": "c"})

        assert store.get("k") == [{"id": "a"}]

    def test_plant_bypasses_tracking(self) -> None:
        store = FakeKeyValueStorePort()
        store.plant("k", "raw")
        assert store.get("k") == "raw"
        assert store.set_calls == []

    def test_should_fail(self) -> None:
        store = FakeKeyValueStorePort()
        store.should_fail = True
        with pytest.raises(ConnectionError):
            store.get("k")
        with pytest.raises(ConnectionError):
            store.set("k", 1)

    def test_reset(self) -> None:
        store = FakeKeyValueStorePort()
        store.set("k", 1)
        store.should_fail = True
        store.reset()
        assert store.data == {}
        assert store.set_calls == []
        assert store.should_fail is False


class TestFakeAccountDirectoryPort:
    def test_register_and_login(self) -> None:
        directory = FakeAccountDirectoryPort()
        user = directory.register(Registration("A", "a@example.com", "pw"))

        assert user is not None
        assert user.role == UserRole.APPLICANT
        assert directory.login("a@example.com", "pw") == user
        assert directory.register(Registration("B", "a@example.com", "pw")) is None

    def test_session(self) -> None:
        admin = User("admin-1", "Admin", "admin@cgu.edu", "pw", "", UserRole.ADMIN)
        directory = FakeAccountDirectoryPort(users=[admin])

        directory.set_current_user(admin)
        assert directory.get_current_user() == admin
        directory.logout()
        assert directory.get_current_user() is None

    def test_get_user_records_calls(self) -> None:
        directory = FakeAccountDirectoryPort()
        assert directory.get_user("nobody") is None
        assert directory.get_user_calls == ["nobody"]
