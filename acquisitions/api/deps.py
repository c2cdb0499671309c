"""FastAPI dependencies: app settings, session requester lookup and per-role rate limiting."""

from typing import Annotated

from fastapi import Depends, Request
from pydantic import ValidationError

from acquisitions.core.config import Settings, settings
from acquisitions.core.cookies import read_session_token
from acquisitions.core.errors import ServiceError
from acquisitions.core.rate_limit import RoleRateLimiter
from acquisitions.core.security import decode_access_token
from acquisitions.schemas.auth import Requester


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with (see create_app)."""
    return getattr(request.app.state, "settings", settings)


def get_optional_requester(
    request: Request,
    app_settings: Annotated[Settings, Depends(get_app_settings)],
) -> Requester | None:
    """
    Return the requester from the session cookie, or None.

    A missing, expired or tampered token yields None; routes that need an
    identity let the authorization policy turn that into 401.
    """
    token = read_session_token(request, app_settings)
    if not token:
        return None
    try:
        claims = decode_access_token(token, app_settings)
        return Requester(id=claims["id"], role=claims["role"])
    except (ServiceError, ValidationError):
        return None


def enforce_rate_limit(
    request: Request,
    requester: Annotated[Requester | None, Depends(get_optional_requester)],
) -> None:
    """Count the request against its role's limit; raises RateLimitExceeded when full."""
    limiter: RoleRateLimiter | None = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        return
    client_key = request.client.host if request.client else "unknown"
    limiter.hit(requester.role if requester else None, client_key)
