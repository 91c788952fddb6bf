"""Domain models for the CGU admissions portal.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.

Records serialize to the camelCase JSON shape used by the portal's
storage keys, so a collection written by one store adapter can be read
back by any other.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any

# Storage keys shared by every store adapter.
USERS_KEY = "cgu_users"
APPLICATIONS_KEY = "cgu_applications"
CURRENT_USER_KEY = "currentUser"

# Programs offered on the application form.
PROGRAMS: tuple[str, ...] = (
    "B.Tech Computer Science",
    "B.Tech Electronics",
    "B.Sc Mathematics",
    "BBA Business Administration",
    "M.Tech Computer Science",
    "MBA Business Administration",
    "M.Sc Data Science",
    "MA Economics",
    "Ph.D. Computer Science",
    "Ph.D. Engineering",
    "Ph.D. Business Management",
    "Ph.D. Mathematics",
)


def _require_str(data: Mapping[str, Any], key: str) -> str:
    """Fetch a required non-blank string field from untyped data."""
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{key} must be a non-empty string")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> str:
    """Fetch an optional string field, defaulting to an empty string."""
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _require_mapping(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{kind} record must be an object, got {type(data).__name__}")
    return data


def _require_list(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key, [])
    if not isinstance(value, list | tuple):
        raise ValueError(f"{key} must be a list")
    return list(value)


class UserRole(Enum):
    """Roles a portal user can hold."""

    ADMIN = "ADMIN"
    APPLICANT = "APPLICANT"


class ApplicationStatus(Enum):
    """Review states for an application.

    Every application starts UNDER_REVIEW. ACCEPTED and REJECTED are
    terminal only by convention: an administrator may move an
    application between any two states, including to its current one.
    """

    UNDER_REVIEW = "UNDER_REVIEW"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class User:
    """A registered portal account.

    The password is stored as given; the portal performs no hashing.
    """

    id: str
    name: str
    email: str
    password: str
    phone: str
    role: UserRole

    def __post_init__(self) -> None:
        """Validate user invariants on creation."""
        for name in ("id", "email"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty string")
        for name in ("name", "password", "phone"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {type(value).__name__}")
        if not isinstance(self.role, UserRole):
            raise ValueError(f"role must be a UserRole, got {self.role!r}")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "phone": self.phone,
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        """Build a User from stored JSON.

        Raises:
            ValueError: If a required field is missing or malformed.
        """
        data = _require_mapping(data, "user")
        try:
            role = UserRole(data.get("role"))
        except ValueError as e:
            raise ValueError(f"Invalid role: {data.get('role')!r}") from e
        return cls(
            id=_require_str(data, "id"),
            name=_optional_str(data, "name"),
            email=_require_str(data, "email"),
            password=_optional_str(data, "password"),
            phone=_optional_str(data, "phone"),
            role=role,
        )


@dataclass(frozen=True)
class Registration:
    """Candidate account details submitted at sign-up.

    Carries no id or role: both are assigned by the account directory.
    """

    name: str
    email: str
    password: str
    phone: str = ""

    def __post_init__(self) -> None:
        """Validate registration fields on creation."""
        for name in ("name", "email", "password"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty string")
        if not isinstance(self.phone, str):
            raise ValueError(f"phone must be a string, got {type(self.phone).__name__}")

    @classmethod
    def from_dict(cls, data: Any) -> "Registration":
        """Build a Registration from untyped input, ignoring id and role."""
        data = _require_mapping(data, "registration")
        return cls(
            name=_require_str(data, "name"),
            email=_require_str(data, "email"),
            password=_require_str(data, "password"),
            phone=_optional_str(data, "phone"),
        )


@dataclass(frozen=True)
class Education:
    """One previous-education entry on an application."""

    institution: str
    degree: str
    grad_year: str
    percentage: str

    def to_dict(self) -> dict[str, str]:
        return {
            "institution": self.institution,
            "degree": self.degree,
            "gradYear": self.grad_year,
            "percentage": self.percentage,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Education":
        data = _require_mapping(data, "education")
        return cls(
            institution=_optional_str(data, "institution"),
            degree=_optional_str(data, "degree"),
            grad_year=_optional_str(data, "gradYear"),
            percentage=_optional_str(data, "percentage"),
        )


@dataclass(frozen=True)
class DocumentRef:
    """A named reference to an uploaded document."""

    name: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "url": self.url}

    @classmethod
    def from_dict(cls, data: Any) -> "DocumentRef":
        data = _require_mapping(data, "document")
        return cls(name=_optional_str(data, "name"), url=_optional_str(data, "url"))


# Draft fields that must be present and non-blank.
_REQUIRED_DRAFT_FIELDS = (
    "full_name",
    "email",
    "phone",
    "address",
    "date_of_birth",
    "program",
)


def _freeze_sequences(record: Any) -> None:
    """Convert list-valued education and document fields to tuples."""
    if not isinstance(record.previous_education, tuple):
        object.__setattr__(
            record, "previous_education", tuple(record.previous_education)
        )
    if not isinstance(record.document_urls, tuple):
        object.__setattr__(record, "document_urls", tuple(record.document_urls))
    if not record.previous_education:
        raise ValueError("previous_education must contain at least one entry")


@dataclass(frozen=True)
class ApplicationDraft:
    """The applicant-supplied content of an application.

    Everything except id, owner, status and submission time.
    """

    full_name: str
    email: str
    phone: str
    address: str
    date_of_birth: str
    program: str
    previous_education: tuple[Education, ...]  # immutable for frozen dataclass
    document_urls: tuple[DocumentRef, ...] = ()
    statement: str = ""

    def __post_init__(self) -> None:
        """Validate draft invariants and normalize sequences to tuples."""
        for name in _REQUIRED_DRAFT_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty string")
        _freeze_sequences(self)

    @classmethod
    def from_dict(cls, data: Any) -> "ApplicationDraft":
        """Build a draft from the camelCase form payload."""
        data = _require_mapping(data, "application")
        return cls(
            full_name=_require_str(data, "fullName"),
            email=_require_str(data, "email"),
            phone=_require_str(data, "phone"),
            address=_require_str(data, "address"),
            date_of_birth=_require_str(data, "dateOfBirth"),
            program=_require_str(data, "program"),
            previous_education=tuple(
                Education.from_dict(e) for e in _require_list(data, "previousEducation")
            ),
            document_urls=tuple(
                DocumentRef.from_dict(d) for d in _require_list(data, "documentUrls")
            ),
            statement=_optional_str(data, "statement"),
        )


@dataclass
class Application:
    """A submitted admission application.

    Note: This dataclass is intentionally mutable so that an administrator
    decision can update ``status`` in place. No other field changes after
    submission.
    """

    id: str
    user_id: str
    full_name: str
    email: str
    phone: str
    address: str
    date_of_birth: str
    program: str
    previous_education: tuple[Education, ...]
    document_urls: tuple[DocumentRef, ...]
    statement: str
    status: ApplicationStatus
    created_at: datetime

    def __post_init__(self) -> None:
        """Validate application invariants on creation or deserialization."""
        if not self.id or not self.id.strip():
            raise ValueError("id must be a non-empty string")
        if not self.user_id or not self.user_id.strip():
            raise ValueError("user_id must be a non-empty string")
        if not isinstance(self.status, ApplicationStatus):
            raise ValueError(f"status must be an ApplicationStatus, got {self.status!r}")
        _freeze_sequences(self)

    @classmethod
    def from_draft(
        cls,
        draft: ApplicationDraft,
        *,
        application_id: str,
        owner_id: str,
        created_at: datetime,
    ) -> "Application":
        """Create a fresh UNDER_REVIEW application from a draft."""
        return cls(
            id=application_id,
            user_id=owner_id,
            full_name=draft.full_name,
            email=draft.email,
            phone=draft.phone,
            address=draft.address,
            date_of_birth=draft.date_of_birth,
            program=draft.program,
            previous_education=draft.previous_education,
            document_urls=draft.document_urls,
            statement=draft.statement,
            status=ApplicationStatus.UNDER_REVIEW,
            created_at=created_at,
        )

    def set_status(self, status: ApplicationStatus) -> None:
        """Record an administrator decision.

        No transition graph is enforced; setting the current status again
        is allowed.
        """
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "dateOfBirth": self.date_of_birth,
            "program": self.program,
            "previousEducation": [e.to_dict() for e in self.previous_education],
            "documentUrls": [d.to_dict() for d in self.document_urls],
            "statement": self.statement,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Application":
        """Build an Application from stored JSON.

        Raises:
            ValueError: If a required field is missing or malformed.
        """
        data = _require_mapping(data, "application")
        try:
            status = ApplicationStatus(data.get("status"))
        except ValueError as e:
            raise ValueError(f"Invalid status: {data.get('status')!r}") from e
        try:
            created_at = datetime.fromisoformat(_require_str(data, "createdAt"))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid createdAt: {e}") from e

        return cls(
            id=_require_str(data, "id"),
            user_id=_require_str(data, "userId"),
            full_name=_optional_str(data, "fullName"),
            email=_optional_str(data, "email"),
            phone=_optional_str(data, "phone"),
            address=_optional_str(data, "address"),
            date_of_birth=_optional_str(data, "dateOfBirth"),
            program=_optional_str(data, "program"),
            previous_education=tuple(
                Education.from_dict(e) for e in _require_list(data, "previousEducation")
            ),
            document_urls=tuple(
                DocumentRef.from_dict(d) for d in _require_list(data, "documentUrls")
            ),
            statement=_optional_str(data, "statement"),
            status=status,
            created_at=created_at,
        )


@dataclass(frozen=True)
class StatusSummary:
    """Application counts for the admin dashboard."""

    total: int
    by_status: Mapping[str, int] = field(default_factory=dict)  # status -> count

    def __post_init__(self) -> None:
        """Convert the mutable dict to an immutable proxy."""
        object.__setattr__(self, "by_status", MappingProxyType(dict(self.by_status)))

    @classmethod
    def empty(cls) -> "StatusSummary":
        return cls(total=0, by_status={s.value: 0 for s in ApplicationStatus})
