"""Signup and signin: uniqueness check, password hashing, credential verification."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from acquisitions.core.errors import ErrorKind, ServiceError
from acquisitions.core.security import DUMMY_PASSWORD_HASH, hash_password, verify_password
from acquisitions.models import User
from acquisitions.schemas.auth import PublicUser, UserRecord

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def create_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    role: str = "user",
) -> PublicUser:
    """
    Register a new user and return its public projection.

    The email pre-check is a fast path; the unique index on users.email is the
    real guard, so a duplicate-key failure on commit is also reported as Conflict.
    """
    if get_user_by_email(db, email) is not None:
        raise ServiceError(ErrorKind.CONFLICT, "User already exists")

    user = User(
        name=name,
        email=email,
        password=hash_password(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Signup lost a race on a duplicate email", extra={"email": email})
        raise ServiceError(ErrorKind.CONFLICT, "User already exists") from e
    db.refresh(user)

    logger.info("User created", extra={"user_id": user.id, "role": user.role})
    return PublicUser.model_validate(user)


def authenticate_user(db: Session, email: str, password: str) -> UserRecord:
    """
    Verify credentials and return the user with timestamps.

    Raises ServiceError(NOT_FOUND) for an unknown email and
    ServiceError(UNAUTHORIZED) for a wrong password. Both paths run one bcrypt
    verification so response time does not reveal whether the email exists.
    """
    user = get_user_by_email(db, email)
    if user is None:
        verify_password(password, DUMMY_PASSWORD_HASH)
        raise ServiceError(ErrorKind.NOT_FOUND, "User not found")
    if not verify_password(password, user.password):
        raise ServiceError(ErrorKind.UNAUTHORIZED, "Invalid password")

    logger.info("User authenticated", extra={"user_id": user.id})
    return to_record(user)


def to_record(user: User) -> UserRecord:
    """Public projection with timestamps; the password hash is never copied."""
    return UserRecord(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
