"""
Users module - User accounts kept for sign-in use.
"""

from scholarship_api.modules.users.models import User
from scholarship_api.modules.users.repository import UserRepository

__all__ = ["User", "UserRepository"]
