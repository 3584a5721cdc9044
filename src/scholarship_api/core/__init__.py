"""
Core module - Configuration, database, and session verification.
"""

from scholarship_api.core.config import get_settings, settings
from scholarship_api.core.database import Base, close_db, get_db, init_db
from scholarship_api.core.security import create_session_token, decode_session_token

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    # Security
    "create_session_token",
    "decode_session_token",
]
