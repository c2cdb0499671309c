"""Session cookie helpers: attach, clear and read the signed session token."""

from fastapi import Request, Response

from acquisitions.core.config import Settings, settings


def _cookie_options(app_settings: Settings) -> dict:
    return {
        "httponly": True,
        "secure": app_settings.secure_cookies,
        "samesite": "strict",
    }


def attach_session_cookie(response: Response, token: str, app_settings: Settings | None = None) -> None:
    """
    Write the JWT as an httpOnly cookie on the response.

    max_age matches the token lifetime so cookie and token expire together.
    """
    app_settings = app_settings or settings
    response.set_cookie(
        app_settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=app_settings.token_expire_seconds,
        **_cookie_options(app_settings),
    )


def clear_session_cookie(response: Response, app_settings: Settings | None = None) -> None:
    """Remove the session cookie. The token itself stays valid until it expires."""
    app_settings = app_settings or settings
    response.delete_cookie(app_settings.SESSION_COOKIE_NAME, **_cookie_options(app_settings))


def read_session_token(request: Request, app_settings: Settings | None = None) -> str | None:
    """Return the session token from the inbound cookies, or None if absent."""
    app_settings = app_settings or settings
    return request.cookies.get(app_settings.SESSION_COOKIE_NAME) or None
