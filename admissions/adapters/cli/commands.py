"""CLI command implementations for the admissions portal.

Provides applicant and administrator actions through a command-line
interface.

This adapter maps CLI commands to the account directory, the authorization
gate and the application registry. The core reports expected failures as
None or empty results; this module turns them into user-visible messages.
"""

import logging
from typing import Any

from admissions.core.gate import AuthorizationGate
from admissions.core.models import (
    PROGRAMS,
    Application,
    ApplicationDraft,
    ApplicationStatus,
    Registration,
    User,
    UserRole,
)
from admissions.core.ports import ApplicationRegistryPort

logger = logging.getLogger(__name__)


def _public_user(user: User) -> dict[str, Any]:
    """User fields safe to echo back (no password)."""
    data = user.to_dict()
    data.pop("password", None)
    return data


def _parse_status(value: Any) -> ApplicationStatus | None:
    """Parse a status filter; None and "ALL" mean no filter."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"status must be a string, got {type(value).__name__}")
    if value.upper() == "ALL":
        return None
    try:
        return ApplicationStatus(value.upper())
    except ValueError as e:
        valid = ", ".join(s.value for s in ApplicationStatus)
        raise ValueError(f"Unknown status: {value}. Expected one of: {valid}") from e


class CLICommandHandler:
    """Handles CLI commands by delegating to the portal's core services.

    Every method returns a result dictionary with a "status" of either
    "success" or "error" and never raises for business failures.
    """

    def __init__(self, gate: AuthorizationGate, registry: ApplicationRegistryPort):
        """Initialize the CLI command handler.

        Args:
            gate: Authorization gate owning the session.
            registry: ApplicationRegistryPort implementation.
        """
        self.gate = gate
        self.registry = registry

    @staticmethod
    def _error(operation: str, message: str, **extra: Any) -> dict[str, Any]:
        return {"status": "error", "operation": operation, "message": message, **extra}

    def register(self, registration: dict[str, Any]) -> dict[str, Any]:
        """Create an applicant account and log it in.

        Any id or role in the payload is ignored.
        """
        try:
            candidate = Registration.from_dict(registration)
        except ValueError as e:
            return self._error("register", str(e))

        user = self.gate.sign_up(candidate)
        if user is None:
            return self._error("register", f"Email {candidate.email} is already registered")

        return {
            "status": "success",
            "operation": "register",
            "user": _public_user(user),
            "message": f"Welcome, {user.name}",
        }

    def login(self, email: str, password: str) -> dict[str, Any]:
        user = self.gate.sign_in(email, password)
        if user is None:
            return self._error("login", "Invalid email or password")

        return {
            "status": "success",
            "operation": "login",
            "user": _public_user(user),
            "message": f"Logged in as {user.email}",
        }

    def logout(self) -> dict[str, Any]:
        self.gate.sign_out()
        return {"status": "success", "operation": "logout", "message": "Logged out"}

    def whoami(self) -> dict[str, Any]:
        user = self.gate.current_user()
        if user is None:
            return self._error("whoami", "Not logged in")
        return {"status": "success", "operation": "whoami", "user": _public_user(user)}

    def programs(self) -> dict[str, Any]:
        return {"status": "success", "operation": "programs", "data": list(PROGRAMS)}

    def submit(self, application: dict[str, Any]) -> dict[str, Any]:
        """Submit an application for the logged-in applicant.

        Refuses when the user already has an application on file; the
        registry itself does not enforce this.
        """
        user = self.gate.current_user()
        if user is None:
            return self._error("submit", "Log in to submit an application")

        existing = self.registry.get_by_user_id(user.id)
        if existing is not None:
            return self._error(
                "submit",
                f"You have already submitted application {existing.id}",
                application_id=existing.id,
            )

        try:
            draft = ApplicationDraft.from_dict(application)
        except ValueError as e:
            logger.error(f"Rejected application draft: {e}")
            return self._error("submit", str(e))

        submitted = self.registry.submit(draft, user.id)
        return {
            "status": "success",
            "operation": "submit",
            "application_id": submitted.id,
            "message": "Application submitted and under review",
        }

    def my_application(self, output_format: str = "json") -> dict[str, Any]:
        user = self.gate.current_user()
        if user is None:
            return self._error("my_application", "Not logged in")

        application = self.registry.get_by_user_id(user.id)
        if application is None:
            return self._error("my_application", "No application submitted yet")
        return self._render("my_application", application, output_format)

    def list_applications(
        self,
        status: str | None = None,
        search: str = "",
        output_format: str = "json",
    ) -> dict[str, Any]:
        """List applications for the admin, optionally filtered."""
        user = self.gate.current_user()
        if not self.gate.is_authorized(user, UserRole.ADMIN):
            return self._error("list", "Administrator access required")

        try:
            status_filter = _parse_status(status)
        except ValueError as e:
            return self._error("list", str(e))
        if not isinstance(search, str):
            return self._error("list", "search must be a string")

        applications = self.registry.search(user, status=status_filter, term=search)

        if output_format == "text":
            data: Any = "\n".join(
                f"{a.id}  {a.full_name:<24} {a.program:<28} {a.status.value}"
                for a in applications
            )
        elif output_format == "json":
            data = [a.to_dict() for a in applications]
        else:
            return self._error("list", f"Unsupported format: {output_format}")

        return {
            "status": "success",
            "operation": "list",
            "count": len(applications),
            "data": data,
        }

    def summary(self) -> dict[str, Any]:
        user = self.gate.current_user()
        if not self.gate.is_authorized(user, UserRole.ADMIN):
            return self._error("summary", "Administrator access required")

        summary = self.registry.status_summary(user)
        return {
            "status": "success",
            "operation": "summary",
            "total": summary.total,
            "by_status": dict(summary.by_status),
        }

    def get_application_details(
        self, application_id: str, output_format: str = "json"
    ) -> dict[str, Any]:
        application = self.registry.get_by_id(application_id, self.gate.current_user())
        if application is None:
            return self._error(
                "details",
                f"Application {application_id} not found",
                application_id=application_id,
            )
        return self._render("details", application, output_format)

    def update_status(self, application_id: str, status: str) -> dict[str, Any]:
        """Record an admin decision on an application."""
        try:
            new_status = _parse_status(status)
        except ValueError as e:
            return self._error("update_status", str(e), application_id=application_id)
        if new_status is None:
            return self._error(
                "update_status", "A specific status is required", application_id=application_id
            )

        user = self.gate.current_user()
        if not self.gate.is_authorized(user, UserRole.ADMIN):
            return self._error(
                "update_status",
                "Administrator access required",
                application_id=application_id,
            )

        updated = self.registry.update_status(application_id, new_status, user)
        if updated is None:
            return self._error(
                "update_status",
                f"Application {application_id} not found",
                application_id=application_id,
            )

        return {
            "status": "success",
            "operation": "update_status",
            "application_id": application_id,
            "new_status": updated.status.value,
            "message": f"Application {application_id} marked {updated.status.value}",
        }

    def _render(
        self, operation: str, application: Application, output_format: str
    ) -> dict[str, Any]:
        if output_format == "json":
            data: Any = application.to_dict()
        elif output_format == "text":
            data = self._format_application_as_text(application)
        else:
            return self._error(operation, f"Unsupported format: {output_format}")
        return {"status": "success", "operation": operation, "data": data}

    def _format_application_as_text(self, application: Application) -> str:
        """Format an application as human-readable text.

        Args:
            application: Application to render.

        Returns:
            Formatted text string.
        """
        lines = []

        # Header
        lines.append(f"Application ID: {application.id}")
        lines.append(f"Status: {application.status.value.replace('_', ' ')}")
        lines.append(f"Submitted: {application.created_at.isoformat()}")
        lines.append("")

        # Personal details
        lines.append(f"Full Name: {application.full_name}")
        lines.append(f"Email: {application.email}")
        lines.append(f"Phone: {application.phone}")
        lines.append(f"Address: {application.address}")
        lines.append(f"Date of Birth: {application.date_of_birth}")
        lines.append("")

        lines.append(f"Program: {application.program}")
        lines.append("")

        lines.append("Previous Education:")
        for entry in application.previous_education:
            lines.append(
                f"  - {entry.degree}, {entry.institution} ({entry.grad_year}) {entry.percentage}%"
            )
        lines.append("")

        if application.document_urls:
            lines.append("Documents:")
            for doc in application.document_urls:
                lines.append(f"  - {doc.name}: {doc.url}")
            lines.append("")

        if application.statement:
            lines.append("Statement of Purpose:")
            lines.append(f"  {application.statement}")
            lines.append("")

        return "\n".join(lines)


def run_command(
    handler: CLICommandHandler,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Run a CLI command.

    Entry point for executing CLI commands. Maps command names to handler
    methods.

    Args:
        handler: CLICommandHandler instance.
        command: Command name.
        args: Dictionary of command arguments.

    Returns:
        Dictionary with command result.

    Raises:
        ValueError: If command is not recognized or a required argument
            is missing.
    """

    def required(name: str) -> Any:
        if name not in args:
            raise ValueError(f"Missing required parameter: {name}")
        return args[name]

    if command == "register":
        return handler.register(args)

    elif command == "login":
        return handler.login(required("email"), required("password"))

    elif command == "logout":
        return handler.logout()

    elif command == "whoami":
        return handler.whoami()

    elif command == "programs":
        return handler.programs()

    elif command == "submit":
        return handler.submit(args)

    elif command == "my_application":
        return handler.my_application(args.get("format", "json"))

    elif command == "list":
        return handler.list_applications(
            status=args.get("status"),
            search=args.get("search", ""),
            output_format=args.get("format", "json"),
        )

    elif command == "summary":
        return handler.summary()

    elif command == "details":
        return handler.get_application_details(
            required("application_id"),
            args.get("format", "json"),
        )

    elif command == "update_status":
        return handler.update_status(required("application_id"), required("status"))

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")
