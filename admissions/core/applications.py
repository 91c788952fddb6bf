"""Application registry: implements ApplicationRegistryPort.

Owns the application collection. Submission and per-user lookup are open
to any caller; listing, searching, summarizing and status changes are
admin-only and checked through the AuthorizationGate on every call.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime

from .gate import AuthorizationGate
from .models import (
    APPLICATIONS_KEY,
    Application,
    ApplicationDraft,
    ApplicationStatus,
    StatusSummary,
    User,
    UserRole,
)
from .ports import ApplicationRegistryPort, KeyValueStorePort
from .records import load_records, save_records

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _new_application_id() -> str:
    return f"app-{uuid.uuid4()}"


class ApplicationRegistry(ApplicationRegistryPort):
    """Core implementation of ApplicationRegistryPort.

    Every operation is a read-modify-write of the whole collection with
    no locking; the last writer wins.
    """

    def __init__(
        self,
        store: KeyValueStorePort,
        gate: AuthorizationGate,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the registry.

        Args:
            store: Durable store holding the application collection.
            gate: Authorization gate used for admin-only operations.
            clock: Source of submission timestamps.
        """
        self.store = store
        self.gate = gate
        self.clock = clock

    def _load(self) -> list[Application]:
        return load_records(self.store, APPLICATIONS_KEY, Application.from_dict)

    def _is_admin(self, requestor: User | None) -> bool:
        return self.gate.authorize(requestor, UserRole.ADMIN)

    def submit(self, draft: ApplicationDraft, owner_id: str) -> Application:
        """Persist a new application in UNDER_REVIEW.

        One application per user is not enforced here; a second submission
        is appended and logged.

        Args:
            draft: Validated application content.
            owner_id: Id of the submitting user.

        Returns:
            The stored Application.
        """
        applications = self._load()
        if any(a.user_id == owner_id for a in applications):
            logger.warning(
                f"User {owner_id} already has an application; appending another",
                extra={"user_id": owner_id},
            )

        application = Application.from_draft(
            draft,
            application_id=_new_application_id(),
            owner_id=owner_id,
            created_at=self.clock(),
        )
        applications.append(application)
        save_records(self.store, APPLICATIONS_KEY, applications)

        logger.info(
            f"Application {application.id} submitted",
            extra={
                "application_id": application.id,
                "user_id": owner_id,
                "program": application.program,
            },
        )
        return application

    def get_by_user_id(self, user_id: str) -> Application | None:
        """Return the first application owned by user_id."""
        for application in self._load():
            if application.user_id == user_id:
                return application
        return None

    def list_all(self, requestor: User | None = None) -> list[Application]:
        """Return every application, or [] for a non-admin requestor."""
        if not self._is_admin(requestor):
            return []

        applications = self._load()
        logger.debug("Listed applications", extra={"count": len(applications)})
        return applications

    def update_status(
        self,
        application_id: str,
        new_status: ApplicationStatus,
        requestor: User | None = None,
    ) -> Application | None:
        """Overwrite an application's status.

        Any transition is accepted, including to the current status.

        Returns:
            The updated Application, or None when the requestor is not an
            admin or the id is unknown. State is unchanged in both cases.
        """
        if not self._is_admin(requestor):
            return None

        applications = self._load()
        for application in applications:
            if application.id == application_id:
                previous = application.status
                application.set_status(new_status)
                save_records(self.store, APPLICATIONS_KEY, applications)
                logger.info(
                    f"Application {application_id} status set to {new_status.value}",
                    extra={
                        "application_id": application_id,
                        "previous_status": previous.value,
                        "status": new_status.value,
                    },
                )
                return application

        logger.debug(
            f"Application {application_id} not found",
            extra={"application_id": application_id},
        )
        return None

    def search(
        self,
        requestor: User | None = None,
        status: ApplicationStatus | None = None,
        term: str = "",
    ) -> list[Application]:
        """Filter applications for the admin dashboard.

        Args:
            requestor: Admin making the request (session user if None).
            status: Only applications in this status. None means all.
            term: Matched case-insensitively against full name and email,
                and as a substring of the application id. Blank matches all.

        Returns:
            Matching applications in stored order; [] for non-admins.
        """
        if not self._is_admin(requestor):
            return []

        needle = term.strip().lower()

        def matches(application: Application) -> bool:
            if status is not None and application.status != status:
                return False
            if not needle:
                return True
            return (
                needle in application.full_name.lower()
                or needle in application.email.lower()
                or term.strip() in application.id
            )

        return [a for a in self._load() if matches(a)]

    def status_summary(self, requestor: User | None = None) -> StatusSummary:
        """Count applications overall and per status.

        Non-admins get an all-zero summary.
        """
        if not self._is_admin(requestor):
            return StatusSummary.empty()

        applications = self._load()
        counts = {s.value: 0 for s in ApplicationStatus}
        for application in applications:
            counts[application.status.value] += 1
        return StatusSummary(total=len(applications), by_status=counts)

    def get_by_id(
        self, application_id: str, requestor: User | None = None
    ) -> Application | None:
        """Return an application if the requestor is an admin or its owner.

        The requestor is resolved to its stored user record first, so a
        forged User carrying the owner's id is refused.
        """
        claimed = self.gate.resolve(requestor)
        if claimed is None:
            return None

        for application in self._load():
            if application.id != application_id:
                continue
            if application.user_id == claimed.id or self._is_admin(claimed):
                return application
            logger.warning(
                f"User {claimed.id} denied access to application {application_id}",
                extra={"user_id": claimed.id, "application_id": application_id},
            )
            return None
        return None
