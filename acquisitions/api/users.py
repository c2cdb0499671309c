"""User management endpoints: list, fetch, update (self or admin), delete (self or admin)."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from acquisitions.api.deps import get_optional_requester
from acquisitions.api.validation import require_valid
from acquisitions.core.database import get_db
from acquisitions.core.errors import ErrorKind, ServiceError
from acquisitions.schemas.auth import MessageResponse, Requester
from acquisitions.schemas.users import (
    UserIdParams,
    UserResponse,
    UsersListResponse,
    UserUpdateRequest,
)
from acquisitions.services.authorization import can_delete, can_modify, sanitize_updates
from acquisitions.services.users import delete_user, get_all_users, get_user_by_id, update_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(db: Annotated[Session, Depends(get_db)]) -> UsersListResponse:
    """List every user (public projection only)."""
    users = get_all_users(db)
    return UsersListResponse(message="Users fetched successfully", users=users, count=len(users))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Annotated[Session, Depends(get_db)]) -> UserResponse:
    """Fetch one user by id."""
    params = require_valid(UserIdParams, {"id": user_id})
    user = get_user_by_id(db, params.id)
    if user is None:
        raise ServiceError(ErrorKind.NOT_FOUND, "User not found")
    logger.info("User fetched successfully", extra={"user_id": params.id})
    return UserResponse(message="User fetched successfully", user=user)


@router.put("/{user_id}", response_model=UserResponse)
def put_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
    requester: Annotated[Requester | None, Depends(get_optional_requester)],
    payload: Annotated[Any, Body()] = None,
) -> UserResponse:
    """
    Update name, email or role. Non-admins may only update themselves and may
    not change roles; an empty body returns the current record unchanged.
    """
    params = require_valid(UserIdParams, {"id": user_id})
    body = require_valid(UserUpdateRequest, payload if payload is not None else {})
    updates = body.changes()

    can_modify(requester, params.id, has_role_change="role" in updates).enforce()
    updated = update_user(db, params.id, sanitize_updates(requester, updates))

    logger.info("User updated successfully", extra={"user_id": params.id, "by": requester.id})
    return UserResponse(message="User updated successfully", user=updated)


@router.delete("/{user_id}", response_model=MessageResponse)
def remove_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
    requester: Annotated[Requester | None, Depends(get_optional_requester)],
) -> MessageResponse:
    """Delete a user. Non-admins may only delete their own account."""
    params = require_valid(UserIdParams, {"id": user_id})
    can_delete(requester, params.id).enforce()
    delete_user(db, params.id)
    logger.info("User deleted successfully", extra={"user_id": params.id, "by": requester.id})
    return MessageResponse(message="User deleted successfully")
