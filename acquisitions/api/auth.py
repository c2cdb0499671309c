"""Signup, signin and signout endpoints backed by the session cookie."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from acquisitions.api.deps import get_app_settings
from acquisitions.api.validation import require_valid
from acquisitions.core.config import Settings
from acquisitions.core.cookies import attach_session_cookie, clear_session_cookie
from acquisitions.core.database import get_db
from acquisitions.core.errors import ErrorKind, ServiceError
from acquisitions.core.security import create_access_token
from acquisitions.schemas.auth import (
    MessageResponse,
    PublicUser,
    SigninRequest,
    SigninResponse,
    SignupRequest,
    SignupResponse,
)
from acquisitions.services.auth import authenticate_user, create_user

logger = logging.getLogger(__name__)
router = APIRouter()


def _issue_session(response: Response, user: PublicUser, app_settings: Settings) -> None:
    token = create_access_token(
        {"id": user.id, "email": user.email, "role": user.role}, app_settings
    )
    attach_session_cookie(response, token, app_settings)


@router.post("/SignUp", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    app_settings: Annotated[Settings, Depends(get_app_settings)],
    payload: Annotated[Any, Body()] = None,
) -> SignupResponse:
    """Register a user, set the session cookie and return the public user."""
    body = require_valid(SignupRequest, payload)
    user = create_user(
        db,
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    _issue_session(response, user, app_settings)
    logger.info("User registration successful", extra={"user_id": user.id})
    return SignupResponse(message="User registered successfully", user=user)


@router.post("/SignIn", response_model=SigninResponse)
def sign_in(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    app_settings: Annotated[Settings, Depends(get_app_settings)],
    payload: Annotated[Any, Body()] = None,
) -> SigninResponse:
    """
    Authenticate with email and password and set the session cookie.
    Unknown email and wrong password both answer 401 with the same message.
    """
    body = require_valid(SigninRequest, payload)
    try:
        user = authenticate_user(db, email=body.email, password=body.password)
    except ServiceError as e:
        if e.kind in (ErrorKind.NOT_FOUND, ErrorKind.UNAUTHORIZED):
            raise ServiceError(ErrorKind.UNAUTHORIZED, "Invalid email or password") from e
        raise
    _issue_session(response, user, app_settings)
    logger.info("User signed in successfully", extra={"user_id": user.id})
    return SigninResponse(message="User signed in successfully", user=user)


@router.post("/SignOut", response_model=MessageResponse)
def sign_out(
    response: Response,
    app_settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """Clear the session cookie. Issued tokens remain valid until they expire."""
    clear_session_cookie(response, app_settings)
    return MessageResponse(message="User signed out successfully")
