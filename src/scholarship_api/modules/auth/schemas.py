"""Session schemas."""

from pydantic import BaseModel


class SessionUserInfo(BaseModel):
    """User claims carried by the session."""

    id: str
    email: str | None = None
    name: str | None = None


class SessionResponse(BaseModel):
    """Current session, in the same shape as the signed token payload."""

    user: SessionUserInfo
    exp: int


class SignOutResponse(BaseModel):
    """Sign-out acknowledgement."""

    ok: bool = True
