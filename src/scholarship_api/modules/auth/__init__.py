"""Session module."""

from scholarship_api.modules.auth.router import router
from scholarship_api.modules.auth.schemas import SessionResponse, SignOutResponse

__all__ = ["router", "SessionResponse", "SignOutResponse"]
