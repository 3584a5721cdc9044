"""
User Repository

Database operations for user accounts.
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_api.modules.users.models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user database operations."""

    @staticmethod
    async def create(db: AsyncSession, *, username: str, password: str) -> User:
        """
        Create a new user record.

        The row is flushed but not committed; the caller owns the transaction.

        Args:
            db: Database session
            username: Unique username
            password: Password value to store (hash it before calling)

        Returns:
            Created User instance
        """
        user = User(username=username, password=password)

        db.add(user)
        await db.flush()
        await db.refresh(user)

        logger.info(f"Created user: {user.id} - {user.username}")
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: str | UUID) -> User | None:
        """
        Get a user by ID.

        Args:
            db: Database session
            user_id: User UUID (string form accepted)

        Returns:
            User instance or None if not found or the id is malformed
        """
        if not isinstance(user_id, UUID):
            try:
                user_id = UUID(str(user_id))
            except ValueError:
                return None
        return await db.get(User, user_id)

    @staticmethod
    async def get_by_username(db: AsyncSession, username: str) -> User | None:
        """Get a user by username."""
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    @staticmethod
    async def username_exists(db: AsyncSession, username: str) -> bool:
        """Check if a username is already taken."""
        user = await UserRepository.get_by_username(db, username)
        return user is not None
