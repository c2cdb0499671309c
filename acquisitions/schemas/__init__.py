"""Pydantic request/response schemas."""

from acquisitions.schemas.auth import (
    MessageResponse,
    PublicUser,
    Requester,
    SigninRequest,
    SigninResponse,
    SignupRequest,
    SignupResponse,
    UserRecord,
)
from acquisitions.schemas.health import ApiInfoResponse, HealthResponse
from acquisitions.schemas.users import (
    UserIdParams,
    UserResponse,
    UsersListResponse,
    UserUpdateRequest,
)

__all__ = [
    "ApiInfoResponse",
    "HealthResponse",
    "MessageResponse",
    "PublicUser",
    "Requester",
    "SigninRequest",
    "SigninResponse",
    "SignupRequest",
    "SignupResponse",
    "UserIdParams",
    "UserRecord",
    "UserResponse",
    "UsersListResponse",
    "UserUpdateRequest",
]
