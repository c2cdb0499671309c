"""Request/response schemas for user management endpoints."""

from pydantic import BaseModel, Field

from acquisitions.schemas.auth import NormalizedEmail, Role, UserName, UserRecord

# Upper bound of the users.id Integer primary key.
MAX_USER_ID = 2**31 - 1


class UserIdParams(BaseModel):
    """Path parameters for /users/{id}; the id is coerced to a positive 32-bit integer."""

    id: int = Field(..., gt=0, le=MAX_USER_ID, description="User id")


class UserUpdateRequest(BaseModel):
    """Partial update; every field is optional and unknown fields are ignored."""

    name: UserName | None = None
    email: NormalizedEmail | None = None
    role: Role | None = None

    def changes(self) -> dict[str, str]:
        """Fields actually provided (explicit nulls count as absent)."""
        return self.model_dump(exclude_none=True)


class UserResponse(BaseModel):
    message: str
    user: UserRecord


class UsersListResponse(BaseModel):
    """Response for GET /users."""

    message: str
    users: list[UserRecord]
    count: int
