"""Fake AccountDirectoryPort implementation for testing."""

from admissions.core.models import Registration, User, UserRole
from admissions.core.ports import AccountDirectoryPort


class FakeAccountDirectoryPort(AccountDirectoryPort):
    """In-memory account directory for testing.

    Holds users in a dict and the session in an attribute, so gate and
    registry tests can arrange users without going through a store.
    """

    def __init__(self, users: list[User] | None = None):
        """Initialize with optional pre-registered users."""
        self.users: dict[str, User] = {u.id: u for u in users or []}
        self.current: User | None = None
        self.get_user_calls: list[str] = []
        self._next_id = 1

    def register(self, candidate: Registration) -> User | None:
        if any(u.email == candidate.email for u in self.users.values()):
            return None
        user = User(
            id=f"fake-user-{self._next_id}",
            name=candidate.name,
            email=candidate.email,
            password=candidate.password,
            phone=candidate.phone,
            role=UserRole.APPLICANT,
        )
        self._next_id += 1
        self.users[user.id] = user
        return user

    def login(self, email: str, password: str) -> User | None:
        for user in self.users.values():
            if user.email == email and user.password == password:
                return user
        return None

    def get_current_user(self) -> User | None:
        return self.current

    def set_current_user(self, user: User | None) -> None:
        self.current = user

    def logout(self) -> None:
        self.current = None

    def list_users(self) -> list[User]:
        return list(self.users.values())

    def get_user(self, user_id: str) -> User | None:
        self.get_user_calls.append(user_id)
        return self.users.get(user_id)
