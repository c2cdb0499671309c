"""Password hashing and JWT creation/verification for session tokens."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from acquisitions.core.config import Settings, settings
from acquisitions.core.errors import ErrorKind, ServiceError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72

# Claims every session token must carry besides iat/exp.
REQUIRED_CLAIMS = ("id", "email", "role")


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    try:
        salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
        return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")
    except (ValueError, TypeError) as e:
        logger.error("Error hashing password: %s", type(e).__name__)
        raise ServiceError(ErrorKind.INTERNAL, "Error hashing password") from e


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash in constant time.

    Returns False on mismatch. Raises ServiceError(INTERNAL) only when the stored
    hash is malformed.
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError) as e:
        logger.error("Error comparing password: %s", type(e).__name__)
        raise ServiceError(ErrorKind.INTERNAL, "Error comparing password") from e


# Verified against when the email is unknown so signin costs one bcrypt check either way.
DUMMY_PASSWORD_HASH = hash_password("acquisitions-timing-dummy")


def create_access_token(claims: dict[str, Any], app_settings: Settings | None = None) -> str:
    """Create a signed JWT carrying id, email and role, plus iat and exp."""
    app_settings = app_settings or settings
    missing = [name for name in REQUIRED_CLAIMS if claims.get(name) is None]
    if missing:
        raise ValueError(f"Missing token claims: {', '.join(missing)}")
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "id": claims["id"],
        "email": claims["email"],
        "role": claims["role"],
        "iat": now,
        "exp": now + timedelta(minutes=app_settings.JWT_EXPIRE_MINUTES),
    }
    try:
        return jwt.encode(
            payload,
            app_settings.JWT_SECRET.get_secret_value(),
            algorithm=app_settings.JWT_ALGORITHM,
        )
    except jwt.PyJWTError as e:
        logger.error("Error generating JWT token: %s", type(e).__name__)
        raise ServiceError(ErrorKind.INTERNAL, "Failed to generate token") from e


def decode_access_token(token: str, app_settings: Settings | None = None) -> dict[str, Any]:
    """
    Decode and validate a JWT; return its payload (id, email, role, iat, exp).
    Raises ServiceError(UNAUTHORIZED) on a bad signature, malformed token or expiry.
    """
    app_settings = app_settings or settings
    try:
        payload = jwt.decode(
            token,
            app_settings.JWT_SECRET.get_secret_value(),
            algorithms=[app_settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as e:
        logger.info("JWT verification failed: %s", type(e).__name__)
        raise ServiceError(ErrorKind.UNAUTHORIZED, "Failed to authenticate token") from e
    if any(payload.get(name) is None for name in REQUIRED_CLAIMS):
        raise ServiceError(ErrorKind.UNAUTHORIZED, "Failed to authenticate token")
    return payload
