"""User record management: list, fetch, partial update and delete."""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from acquisitions.core.errors import ErrorKind, ServiceError
from acquisitions.models import User
from acquisitions.schemas.auth import UserRecord
from acquisitions.services.auth import to_record

logger = logging.getLogger(__name__)

# Only these columns may be changed through update_user.
UPDATABLE_FIELDS = ("name", "email", "role")


def get_all_users(db: Session) -> list[UserRecord]:
    users = db.query(User).order_by(User.id).all()
    return [to_record(u) for u in users]


def get_user_by_id(db: Session, user_id: int) -> UserRecord | None:
    user = db.get(User, user_id)
    return to_record(user) if user is not None else None


def update_user(db: Session, user_id: int, updates: dict[str, Any]) -> UserRecord:
    """
    Apply name/email/role changes and stamp updated_at.

    An empty update is a no-op that returns the current state. Other keys in
    updates are ignored. Raises NOT_FOUND for a missing user and CONFLICT when
    the new email belongs to someone else.
    """
    user = db.get(User, user_id)
    if user is None:
        raise ServiceError(ErrorKind.NOT_FOUND, "User not found")

    allowed = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS and v is not None}
    if not allowed:
        return to_record(user)

    if "email" in allowed and allowed["email"] != user.email:
        taken = db.query(User.id).filter(User.email == allowed["email"], User.id != user_id).first()
        if taken is not None:
            raise ServiceError(ErrorKind.CONFLICT, "Email already in use")

    for field, value in allowed.items():
        setattr(user, field, value)
    user.updated_at = datetime.now(timezone.utc)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ServiceError(ErrorKind.CONFLICT, "Email already in use") from e
    db.refresh(user)

    logger.info("User updated", extra={"user_id": user_id, "fields": sorted(allowed)})
    return to_record(user)


def delete_user(db: Session, user_id: int) -> None:
    """Delete the user; raises NOT_FOUND when there is no such record."""
    user = db.get(User, user_id)
    if user is None:
        raise ServiceError(ErrorKind.NOT_FOUND, "User not found")
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": user_id})
