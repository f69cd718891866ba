"""Persistence operations for user records."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.user import User


class UserStore:
    """Find/create/save access to the users table for one session.

    Every write is committed immediately so that each call maps to a
    single INSERT or UPDATE.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, user_id: int) -> User | None:
        """Get a user by primary key."""
        return await self.db.get(User, user_id)

    async def find_one(self, **filters: Any) -> User | None:
        """Return the single user matching all filters, or None."""
        result = await self.db.execute(select(User).filter_by(**filters))
        return result.scalar_one_or_none()

    async def create(self, **fields: Any) -> User:
        """Insert a new user."""
        user = User(**fields)
        try:
            self.db.add(user)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(user)
        return user

    async def save(self, user: User) -> User:
        """Persist pending changes on an existing user."""
        try:
            self.db.add(user)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return user
