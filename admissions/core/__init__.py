"""Core domain logic for the CGU admissions portal.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .models import (
    PROGRAMS,
    Application,
    ApplicationDraft,
    ApplicationStatus,
    DocumentRef,
    Education,
    Registration,
    StatusSummary,
    User,
    UserRole,
)

__all__ = [
    "PROGRAMS",
    "Application",
    "ApplicationDraft",
    "ApplicationStatus",
    "DocumentRef",
    "Education",
    "Registration",
    "StatusSummary",
    "User",
    "UserRole",
]
