"""Session and authorization gate.

Single source of truth for "who is logged in" and "what may they do".
Protected registry operations call authorize() themselves instead of
trusting a role claimed by the caller.
"""

import logging

from .models import Registration, User, UserRole
from .ports import AccountDirectoryPort

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Resolves the current user and checks roles against stored records."""

    def __init__(self, directory: AccountDirectoryPort):
        """Initialize the gate.

        Args:
            directory: Account directory owning users and the session.
        """
        self.directory = directory

    def current_user(self) -> User | None:
        """Return the logged-in user, or None."""
        return self.directory.get_current_user()

    @staticmethod
    def is_authorized(user: User | None, required_role: UserRole) -> bool:
        """True iff a user is present and holds the required role."""
        return user is not None and user.role == required_role

    def resolve(self, requestor: User | None) -> User | None:
        """Match a requestor against the directory's stored record.

        Args:
            requestor: User making a request. If None, the current
                session user is used.

        Returns:
            The stored User, or None when there is no requestor, the id is
            unknown, or the requestor differs from the stored record.
        """
        claimed = requestor if requestor is not None else self.current_user()
        if claimed is None:
            logger.debug("No user to resolve")
            return None

        stored = self.directory.get_user(claimed.id)
        if stored is None or stored != claimed:
            logger.warning(
                f"Refusing unrecognized user {claimed.id}",
                extra={
                    "user_id": claimed.id,
                    "claimed_role": claimed.role.value,
                    "stored_role": stored.role.value if stored else None,
                },
            )
            return None
        return stored

    def authorize(self, requestor: User | None, required_role: UserRole) -> bool:
        """Check a requestor's role against the directory's stored record.

        Args:
            requestor: User claiming the permission. If None, the current
                session user is used.
            required_role: Role the operation requires.

        Returns:
            True if the requestor resolves to a stored record holding the
            role. A requestor that does not match its stored record field
            for field (a forged role or password, or an unknown id) is
            refused.
        """
        stored = self.resolve(requestor)
        if stored is None:
            return False

        allowed = self.is_authorized(stored, required_role)
        if not allowed:
            logger.debug(
                f"Authorization refused for user {stored.id}",
                extra={"user_id": stored.id, "required_role": required_role.value},
            )
        return allowed

    def sign_in(self, email: str, password: str) -> User | None:
        """Check credentials and bind the session on success."""
        user = self.directory.login(email, password)
        if user is not None:
            self.directory.set_current_user(user)
        return user

    def sign_up(self, candidate: Registration) -> User | None:
        """Register a new applicant and bind the session on success."""
        user = self.directory.register(candidate)
        if user is not None:
            self.directory.set_current_user(user)
        return user

    def sign_out(self) -> None:
        self.directory.logout()
