"""Role gate for management operations.

This is a capability check, not authentication: the caller's role arrives
as a plain string (an ``X-User-Role`` style header) and is trusted.
"""

from __future__ import annotations

from enum import Enum

from catalog.domain.exceptions import AccessDenied


class Role(Enum):
    ADMIN = "ADMIN"
    USER = "USER"


def has_access(role: str | None) -> bool:
    """True iff ``role`` names the administrator role (exact match)."""
    return role == Role.ADMIN.value


def require_access(role: str | None) -> None:
    if not has_access(role):
        raise AccessDenied(role)
