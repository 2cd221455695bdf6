"""
Unit tests for UserService uniqueness rules.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.db.models import User
from src.db.repositories import UserRepository
from src.services import ConflictError, UserService


@pytest.fixture
def repository() -> MagicMock:
    repo = MagicMock(spec=UserRepository)
    repo.find_by_email = AsyncMock(return_value=None)
    repo.create = AsyncMock(return_value=User(id=1, name="John", email="john@example.com"))
    repo.find_all = AsyncMock(return_value=[])
    return repo


class TestCreateUser:
    """Tests for the check-then-insert registration path."""

    @pytest.mark.asyncio
    async def test_creates_when_email_is_free(self, repository: MagicMock) -> None:
        user_id = await UserService(repository).create_user(name="John", email="john@example.com")

        assert user_id == 1
        repository.find_by_email.assert_awaited_once_with("john@example.com")
        repository.create.assert_awaited_once_with(name="John", email="john@example.com")

    @pytest.mark.asyncio
    async def test_conflict_when_email_exists(self, repository: MagicMock) -> None:
        repository.find_by_email.return_value = User(id=7, name="Old", email="john@example.com")

        with pytest.raises(ConflictError) as exc_info:
            await UserService(repository).create_user(name="John", email="john@example.com")

        assert exc_info.value.status_code == 409
        assert exc_info.value.context == {"email": "john@example.com"}
        repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unique_violation_on_insert_becomes_conflict(
        self, repository: MagicMock
    ) -> None:
        """A concurrent insert that wins the race surfaces as the same conflict."""
        repository.create.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

        with pytest.raises(ConflictError) as exc_info:
            await UserService(repository).create_user(name="John", email="john@example.com")

        assert isinstance(exc_info.value.__cause__, IntegrityError)


class TestListUsers:
    @pytest.mark.asyncio
    async def test_returns_repository_result(self, repository: MagicMock) -> None:
        users = [User(id=1, name="A", email="a@example.com")]
        repository.find_all.return_value = users

        assert await UserService(repository).list_users() == users
