"""Account directory: implements AccountDirectoryPort.

Owns the user collection in the durable store and the current-user
pointer in the session store. Registration and login failures are
returned as None so the caller can decide how to present them.
"""

import logging
import uuid

from .models import (
    CURRENT_USER_KEY,
    USERS_KEY,
    Registration,
    User,
    UserRole,
)
from .ports import AccountDirectoryPort, KeyValueStorePort
from .records import load_records, save_records

logger = logging.getLogger(__name__)

# Seeded on first run so the portal always has an administrator.
DEFAULT_ADMIN = User(
    id="admin-1",
    name="Admin User",
    email="admin@cgu.edu",
    password="admin123",
    phone="1234567890",
    role=UserRole.ADMIN,
)


def _new_user_id() -> str:
    return f"user-{uuid.uuid4()}"


class AccountDirectory(AccountDirectoryPort):
    """Core implementation of AccountDirectoryPort.

    The session store holds a value copy of the logged-in user. Nothing
    re-reads the user collection to refresh it, so callers must not assume
    the session reflects later changes to the stored record.
    """

    def __init__(self, store: KeyValueStorePort, session: KeyValueStorePort):
        """Initialize the directory and seed the default admin if needed.

        Args:
            store: Durable store holding the user collection.
            session: Session-scoped store holding the current user.
        """
        self.store = store
        self.session = session
        self._seed_default_admin()

    def _seed_default_admin(self) -> None:
        """Create the default admin when no users exist yet."""
        if self._load_users():
            return
        save_records(self.store, USERS_KEY, [DEFAULT_ADMIN])
        logger.info(
            "Seeded default admin account",
            extra={"user_id": DEFAULT_ADMIN.id, "email": DEFAULT_ADMIN.email},
        )

    def _load_users(self) -> list[User]:
        return load_records(self.store, USERS_KEY, User.from_dict)

    def register(self, candidate: Registration) -> User | None:
        """Create an APPLICANT account unless the email is taken.

        Email comparison is exact and case-sensitive.

        Args:
            candidate: Validated registration details.

        Returns:
            The new User, or None if the email is already registered.
        """
        users = self._load_users()
        if any(u.email == candidate.email for u in users):
            logger.info(
                "Registration rejected: email already registered",
                extra={"email": candidate.email},
            )
            return None

        user = User(
            id=_new_user_id(),
            name=candidate.name,
            email=candidate.email,
            password=candidate.password,
            phone=candidate.phone,
            role=UserRole.APPLICANT,
        )
        users.append(user)
        save_records(self.store, USERS_KEY, users)

        logger.info(
            f"User {user.id} registered",
            extra={"user_id": user.id, "email": user.email},
        )
        return user

    def login(self, email: str, password: str) -> User | None:
        """Return the first user matching both email and password."""
        for user in self._load_users():
            if user.email == email and user.password == password:
                logger.info(
                    f"User {user.id} logged in",
                    extra={"user_id": user.id, "role": user.role.value},
                )
                return user

        logger.info("Login failed: invalid credentials", extra={"email": email})
        return None

    def get_current_user(self) -> User | None:
        """Read the session pointer.

        Returns:
            The session's User, or None when the pointer is absent or does
            not parse as a user record.
        """
        raw = self.session.get(CURRENT_USER_KEY)
        if raw is None:
            return None
        try:
            return User.from_dict(raw)
        except ValueError as e:
            logger.warning(f"Ignoring unparsable session user: {e}")
            return None

    def set_current_user(self, user: User | None) -> None:
        """Write or clear the session pointer."""
        if user is None:
            self.session.remove(CURRENT_USER_KEY)
            logger.debug("Session cleared")
            return
        self.session.set(CURRENT_USER_KEY, user.to_dict())
        logger.debug(f"Session bound to user {user.id}", extra={"user_id": user.id})

    def logout(self) -> None:
        """Clear the session pointer."""
        self.set_current_user(None)

    def list_users(self) -> list[User]:
        return self._load_users()

    def get_user(self, user_id: str) -> User | None:
        for user in self._load_users():
            if user.id == user_id:
                return user
        return None
