"""Port interfaces for the CGU admissions portal.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package (driven ports) or in the core itself (driving ports).

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - KeyValueStorePort: Durable and session-scoped JSON persistence

2. **Driving Ports** (adapters/external systems call into core)
   - AccountDirectoryPort: Registration, credential check, session binding
   - ApplicationRegistryPort: Submission, lookup, admin review
"""

from abc import ABC, abstractmethod
from typing import Any

from .models import (
    Application,
    ApplicationDraft,
    ApplicationStatus,
    Registration,
    StatusSummary,
    User,
)


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class KeyValueStorePort(ABC):
    """Port for a string-keyed store of JSON-serializable values.

    The portal uses two instances: a durable one holding the user and
    application collections, and a session-scoped one holding the
    current user.

    Implementations must handle:
    - Returning None for keys that are absent
    - Returning None (not raising) for values that cannot be decoded
    - Handing out values that are independent of stored state, so
      callers mutating a returned list do not change the store
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Retrieve the value stored under a key.

        Args:
            key: Storage key.

        Returns:
            The decoded JSON value, or None if the key is absent or the
            stored value cannot be decoded.

        Raises:
            Exception: If the underlying medium is unreachable.
        """

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under a key, replacing any
        previous value.

        Args:
            key: Storage key.
            value: JSON-serializable value (dict, list, str, number, bool, None).

        Raises:
            TypeError: If the value is not JSON-serializable.
            Exception: If the underlying medium is unreachable.
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is a no-op.

        Args:
            key: Storage key.
        """


# ============================================================================
# DRIVING PORTS (Adapters/external systems call into core)
# ============================================================================


class AccountDirectoryPort(ABC):
    """Port for user account operations.

    Expected business failures (duplicate email, wrong credentials) are
    reported as None, never raised.
    """

    @abstractmethod
    def register(self, candidate: Registration) -> User | None:
        """Create an APPLICANT account.

        Args:
            candidate: Name, email, password and phone of the new account.

        Returns:
            The new User, or None if the email is already registered.
        """

    @abstractmethod
    def login(self, email: str, password: str) -> User | None:
        """Check credentials.

        Returns:
            The first User whose email and password both match exactly,
            or None.
        """

    @abstractmethod
    def get_current_user(self) -> User | None:
        """Return the user bound to the current session, if any."""

    @abstractmethod
    def set_current_user(self, user: User | None) -> None:
        """Bind a user to the current session, or clear it with None."""

    @abstractmethod
    def logout(self) -> None:
        """Clear the current session."""

    @abstractmethod
    def list_users(self) -> list[User]:
        """Return every registered user in registration order."""

    @abstractmethod
    def get_user(self, user_id: str) -> User | None:
        """Look up a user by id."""


class ApplicationRegistryPort(ABC):
    """Port for application submission and review.

    Admin-only operations take an optional requestor; when omitted the
    current session user is used. Unauthorized calls return an empty
    result rather than raising.
    """

    @abstractmethod
    def submit(self, draft: ApplicationDraft, owner_id: str) -> Application:
        """Persist a new UNDER_REVIEW application owned by owner_id."""

    @abstractmethod
    def get_by_user_id(self, user_id: str) -> Application | None:
        """Return the first application owned by user_id, or None."""

    @abstractmethod
    def list_all(self, requestor: User | None = None) -> list[Application]:
        """Return all applications for an admin, else an empty list."""

    @abstractmethod
    def update_status(
        self,
        application_id: str,
        new_status: ApplicationStatus,
        requestor: User | None = None,
    ) -> Application | None:
        """Set an application's status.

        Returns:
            The updated Application, or None if the requestor is not an
            admin or no application has that id.
        """

    @abstractmethod
    def search(
        self,
        requestor: User | None = None,
        status: ApplicationStatus | None = None,
        term: str = "",
    ) -> list[Application]:
        """Filter applications by status and a free-text term (admin only)."""

    @abstractmethod
    def status_summary(self, requestor: User | None = None) -> StatusSummary:
        """Count applications overall and per status (admin only)."""

    @abstractmethod
    def get_by_id(
        self, application_id: str, requestor: User | None = None
    ) -> Application | None:
        """Return an application visible to the requestor (admin or owner)."""
