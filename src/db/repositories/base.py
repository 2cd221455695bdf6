"""
Base repository class with shared utilities.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession


class BaseRepository:
    """
    Base class for all repositories.

    Provides common session handling; subclasses translate domain
    operations into ORM statements against that session.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session


__all__ = ["BaseRepository"]
