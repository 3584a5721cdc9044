"""
Authentication Gate

Provides FastAPI dependencies that verify the session cookie.
There are no roles: a request is either authenticated or it is not.

Failure responses:
- 401 NOT_AUTHENTICATED: no session cookie
- 401 SESSION_EXPIRED: token past its expiry
- 401 INVALID_SESSION: bad signature or malformed payload
- 500 SERVER_MISCONFIGURED: no signing secret configured
"""

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status

from scholarship_api.core.config import Settings, get_settings
from scholarship_api.core.security import (
    SessionExpiredError,
    SessionTokenError,
    decode_session_token,
)

logger = logging.getLogger(__name__)


class AuthenticationError(HTTPException):
    """Missing, expired or invalid session."""

    def __init__(self, error_code: str, message: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": error_code, "message": message},
        )


@dataclass
class SessionUser:
    """
    The user behind a verified session.

    Attributes:
        id: Provider-scoped user identifier (e.g. "google:123")
        email: Email address, when the provider supplied one
        name: Display name
        expires_at: Session expiry as unix seconds
    """

    id: str
    email: str | None
    name: str | None
    expires_at: int

    def to_payload(self) -> dict:
        return {
            "user": {"id": self.id, "email": self.email, "name": self.name},
            "exp": self.expires_at,
        }


def _validate_session_token(token: str, secret: str) -> SessionUser:
    try:
        payload = decode_session_token(token, secret)
    except SessionExpiredError as e:
        raise AuthenticationError("SESSION_EXPIRED", "Session expired") from e
    except SessionTokenError as e:
        logger.warning("Rejected invalid session token")
        raise AuthenticationError("INVALID_SESSION", "Invalid session") from e

    user = payload["user"]
    return SessionUser(
        id=str(user["id"]),
        email=user.get("email"),
        name=user.get("name") or user.get("email"),
        expires_at=int(payload["exp"]),
    )


async def get_current_session(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> SessionUser:
    """
    FastAPI dependency that returns the authenticated session user.

    Raises:
        AuthenticationError: If the cookie is absent, expired or invalid
        HTTPException 500: If no session secret is configured
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise AuthenticationError("NOT_AUTHENTICATED", "Not authenticated")

    if not settings.session_secret:
        logger.error("SESSION_SECRET is not configured; cannot verify sessions")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "SERVER_MISCONFIGURED", "message": "Server misconfigured"},
        )

    return _validate_session_token(token, settings.session_secret)


async def require_submission_session(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> SessionUser | None:
    """
    Session gate for application submission.

    Enforced only when REQUIRE_SESSION_FOR_SUBMISSION is enabled; otherwise
    anonymous submissions are accepted and None is returned.
    """
    if not settings.require_session_for_submission:
        return None
    return await get_current_session(request, settings)


__all__ = [
    "AuthenticationError",
    "SessionUser",
    "get_current_session",
    "require_submission_session",
]
