"""
Session Token Utilities

Session tokens are HS256-signed JWTs carried in the session cookie:

    {"user": {"id": "...", "email": "...", "name": "..."}, "exp": <unix seconds>}

Tokens are issued by the external sign-in flow; this service only verifies
them. create_session_token exists for scripts and tests.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

SESSION_ALGORITHM = "HS256"
SESSION_LIFETIME = timedelta(days=7)


class SessionTokenError(Exception):
    """Raised when a session token cannot be trusted."""


class SessionExpiredError(SessionTokenError):
    """Raised when a session token is past its expiry."""


def create_session_token(
    user: dict[str, Any],
    secret: str,
    expires_delta: timedelta = SESSION_LIFETIME,
) -> str:
    """Sign a session payload for the given user."""
    expires_at = datetime.now(UTC) + expires_delta
    payload = {"user": user, "exp": int(expires_at.timestamp())}
    return jwt.encode(payload, secret, algorithm=SESSION_ALGORITHM)


def decode_session_token(token: str, secret: str) -> dict[str, Any]:
    """
    Verify a session token and return its payload.

    Args:
        token: Encoded JWT from the session cookie
        secret: Signing secret

    Returns:
        The decoded payload (contains "user" and "exp")

    Raises:
        SessionExpiredError: If the token has expired
        SessionTokenError: If the signature, structure or claims are invalid
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[SESSION_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise SessionExpiredError("Session expired") from e
    except jwt.InvalidTokenError as e:
        raise SessionTokenError("Invalid session") from e

    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        raise SessionTokenError("Invalid session")

    return payload
