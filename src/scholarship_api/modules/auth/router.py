"""Session router."""

import logging

from fastapi import APIRouter, Depends, Response

from scholarship_api.core.auth import SessionUser, get_current_session
from scholarship_api.core.config import Settings, get_settings
from scholarship_api.modules.auth.schemas import SessionResponse, SessionUserInfo, SignOutResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/session", response_model=SessionResponse)
async def get_session(
    session: SessionUser = Depends(get_current_session),
) -> SessionResponse:
    """
    Return the current session.

    Raises:
        HTTPException 401: Missing, expired or invalid session cookie
    """
    return SessionResponse(
        user=SessionUserInfo(id=session.id, email=session.email, name=session.name),
        exp=session.expires_at,
    )


@router.post("/signout", response_model=SignOutResponse)
async def sign_out(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> SignOutResponse:
    """Clear the session cookie."""
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    logger.debug("Session cookie cleared")
    return SignOutResponse()
