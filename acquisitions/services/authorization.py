"""
Authorization policy for user modification and deletion.

Pure decision functions: they only look at the requester and the target id,
never at the database. Rules are evaluated in order and the first denial wins.
"""

from dataclasses import dataclass
from typing import Any

from acquisitions.core.errors import ErrorKind, ServiceError
from acquisitions.schemas.auth import Requester

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Decision:
    """Outcome of a policy check; denials carry the reason and the error kind."""

    allowed: bool
    reason: str | None = None
    kind: ErrorKind | None = None

    def enforce(self) -> None:
        """Raise ServiceError for a denial; no-op when allowed."""
        if not self.allowed:
            raise ServiceError(self.kind or ErrorKind.FORBIDDEN, self.reason or "Forbidden")


ALLOW = Decision(allowed=True)


def _deny(kind: ErrorKind, reason: str) -> Decision:
    return Decision(allowed=False, reason=reason, kind=kind)


def is_admin(requester: Requester | None) -> bool:
    return requester is not None and requester.role == ADMIN_ROLE


def can_modify(
    requester: Requester | None,
    target_id: int,
    has_role_change: bool,
) -> Decision:
    """Decide whether requester may update the user with target_id."""
    if requester is None:
        return _deny(ErrorKind.UNAUTHORIZED, "Authentication required")
    if has_role_change and not is_admin(requester):
        return _deny(ErrorKind.FORBIDDEN, "Only admin users can change roles")
    if not is_admin(requester) and requester.id != target_id:
        return _deny(ErrorKind.FORBIDDEN, "You can only update your own account")
    return ALLOW


def can_delete(requester: Requester | None, target_id: int) -> Decision:
    """Decide whether requester may delete the user with target_id."""
    if requester is None:
        return _deny(ErrorKind.UNAUTHORIZED, "Authentication required")
    if not is_admin(requester) and requester.id != target_id:
        return _deny(ErrorKind.FORBIDDEN, "You can only delete your own account")
    return ALLOW


def sanitize_updates(requester: Requester, updates: dict[str, Any]) -> dict[str, Any]:
    """Drop the role field for non-admin requesters, even after an Allow."""
    sanitized = dict(updates)
    if not is_admin(requester):
        sanitized.pop("role", None)
    return sanitized
