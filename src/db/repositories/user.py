"""
User repository for data access operations on User entities.
"""

from __future__ import annotations

from sqlalchemy import select

from ..models import User
from .base import BaseRepository


class UserRepository(BaseRepository):
    """Data access helpers for User entities."""

    async def create(self, *, name: str, email: str) -> User:
        """
        Insert a new user and return it with its assigned id.

        Raises ``sqlalchemy.exc.IntegrityError`` when the email collides with
        the unique index on ``users.email``.
        """
        user = User(name=name, email=email)
        self._session.add(user)
        await self._session.flush()
        return user

    async def find_by_email(self, email: str) -> User | None:
        """
        Fetch a user by exact email match.

        Uses the unique index on email for O(log n) lookup.
        """
        return await self._session.scalar(select(User).where(User.email == email))

    async def find_all(self) -> list[User]:
        """Return every user; ordering is left to the backend."""
        result = await self._session.scalars(select(User))
        return list(result)


__all__ = ["UserRepository"]
