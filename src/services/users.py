"""
User service enforcing email uniqueness on registration.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from ..db.models import User
from ..db.repositories.user import UserRepository
from .exceptions import ConflictError

LOGGER = logging.getLogger(__name__)


class UserService:
    """Business rules for User entities."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    async def list_users(self) -> list[User]:
        """Return all users."""
        return await self._repository.find_all()

    async def create_user(self, *, name: str, email: str) -> int:
        """
        Create a user unless the email is already taken and return the new id.

        The lookup and the insert are not isolated from each other, so two
        concurrent requests can both pass the lookup. The unique index on
        ``users.email`` then rejects the second insert, which is reported as
        the same ConflictError.
        """
        existing = await self._repository.find_by_email(email)
        if existing is not None:
            LOGGER.info("Rejected user creation, email already registered (user %d)", existing.id)
            raise ConflictError("User already exists", context={"email": email})

        try:
            user = await self._repository.create(name=name, email=email)
        except IntegrityError as exc:
            LOGGER.warning("Concurrent registration detected for email %s", email)
            raise ConflictError("User already exists", context={"email": email}) from exc

        LOGGER.info("Created user %d", user.id)
        return user.id


__all__ = ["UserService"]
