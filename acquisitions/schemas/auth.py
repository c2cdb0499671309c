"""Request/response schemas for auth endpoints and the public user projection."""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
)

EMAIL_MAX_LEN = 255
NAME_MIN_LEN = 2
NAME_MAX_LEN = 255

Role = Literal["user", "admin"]


def _normalize_email(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _check_email_length(value: str) -> str:
    if len(value) > EMAIL_MAX_LEN:
        raise ValueError(f"Email must be at most {EMAIL_MAX_LEN} characters")
    return value


# Trimmed, lowercased, syntax-checked email; lookups and uniqueness rely on this form.
NormalizedEmail = Annotated[
    EmailStr,
    BeforeValidator(_normalize_email),
    AfterValidator(_check_email_length),
]

UserName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN),
]


class SignupRequest(BaseModel):
    """Payload for POST /auth/SignUp."""

    name: UserName = Field(..., description="Display name (2-255 chars)")
    email: NormalizedEmail = Field(..., description="Email, stored lowercase")
    password: str = Field(..., min_length=1, description="Password")
    role: Role = Field(default="user", description="Role; defaults to user")


class SigninRequest(BaseModel):
    """Credentials for POST /auth/SignIn."""

    email: NormalizedEmail = Field(..., description="Email")
    password: str = Field(..., min_length=1, description="Password")


class PublicUser(BaseModel):
    """User fields safe to return to clients (never the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role


class UserRecord(PublicUser):
    """Public projection plus timestamps, serialized as createdAt/updatedAt."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class SignupResponse(BaseModel):
    message: str
    user: PublicUser


class SigninResponse(BaseModel):
    message: str
    user: UserRecord


class MessageResponse(BaseModel):
    """Body for endpoints that only confirm an action."""

    message: str


class Requester(BaseModel):
    """Identity derived from a verified session token for the current request."""

    id: int
    role: Role
