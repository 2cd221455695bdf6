"""
Unit tests for PostRepository and UserRepository.

Uses an in-memory SQLite database; the production models are portable
(no PostgreSQL-only column types), so no test-specific mirrors are needed.
"""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import Post, User
from src.db.repositories import PostRepository, UserRepository, build_search_conditions
from tests.factories import PostFactory, UserFactory, save


class TestUserRepository:
    """Tests for user persistence and lookups."""

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, db_session: AsyncSession) -> None:
        repo = UserRepository(db_session)

        user = await repo.create(name="John Doe", email="john@example.com")

        assert user.id is not None
        stored = await db_session.get(User, user.id)
        assert stored is not None
        assert (stored.name, stored.email) == ("John Doe", "john@example.com")

    @pytest.mark.asyncio
    async def test_find_by_email_is_exact(self, db_session: AsyncSession) -> None:
        """Lookup is case-sensitive: a differently-cased address does not match."""
        repo = UserRepository(db_session)
        await repo.create(name="John", email="john@example.com")

        assert await repo.find_by_email("john@example.com") is not None
        assert await repo.find_by_email("JOHN@example.com") is None
        assert await repo.find_by_email("missing@example.com") is None

    @pytest.mark.asyncio
    async def test_find_all(self, db_session: AsyncSession) -> None:
        users = [UserFactory.build() for _ in range(3)]
        await save(db_session, *users)

        result = await UserRepository(db_session).find_all()

        assert {user.id for user in result} == {user.id for user in users}

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected_by_unique_index(
        self, db_session: AsyncSession
    ) -> None:
        repo = UserRepository(db_session)
        await repo.create(name="First", email="dup@example.com")

        with pytest.raises(IntegrityError):
            await repo.create(name="Second", email="dup@example.com")


class TestPostRepository:
    """Tests for post persistence and filtered search."""

    @pytest.fixture
    async def authors(self, db_session: AsyncSession) -> tuple[User, User]:
        first, second = UserFactory.build(), UserFactory.build()
        await save(db_session, first, second)
        return first, second

    @pytest.fixture
    async def sample_posts(
        self, db_session: AsyncSession, authors: tuple[User, User]
    ) -> dict[str, Post]:
        """Posts with known titles/contents spread across two authors."""
        first, second = authors
        posts = {
            "title_hit": PostFactory.build(
                title="Post 1 should-return", author_id=first.id, published=True
            ),
            "content_hit": PostFactory.build(
                title="Post 2",
                content="Post 2 content SHOULD-RETURN",
                author_id=first.id,
                published=False,
            ),
            "miss": PostFactory.build(
                title="Post 3", content="unrelated", author_id=second.id, published=True
            ),
            "other_author_hit": PostFactory.build(
                title="should-return too", author_id=second.id, published=False
            ),
        }
        await save(db_session, *posts.values())
        return posts

    @pytest.mark.asyncio
    async def test_create_and_find_by_id(
        self, db_session: AsyncSession, authors: tuple[User, User]
    ) -> None:
        repo = PostRepository(db_session)

        post = await repo.create(
            title="Hello", content=None, author_id=authors[0].id, published=False
        )
        found = await repo.find_by_id(post.id)

        assert found is not None
        assert found.title == "Hello"
        assert found.content is None
        assert found.published is False

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, db_session: AsyncSession) -> None:
        assert await PostRepository(db_session).find_by_id(100) is None

    @pytest.mark.asyncio
    async def test_search_without_filters_returns_all(
        self, db_session: AsyncSession, sample_posts: dict[str, Post]
    ) -> None:
        result = await PostRepository(db_session).search()

        assert len(result) == len(sample_posts)

    @pytest.mark.asyncio
    async def test_search_by_term_matches_title_or_content_case_insensitively(
        self, db_session: AsyncSession, sample_posts: dict[str, Post]
    ) -> None:
        result = await PostRepository(db_session).search(q="should-return")

        expected = {"title_hit", "content_hit", "other_author_hit"}
        assert {post.id for post in result} == {sample_posts[key].id for key in expected}

    @pytest.mark.asyncio
    async def test_search_term_wildcards_are_literal(
        self, db_session: AsyncSession, sample_posts: dict[str, Post]
    ) -> None:
        """A bare % must not act as a LIKE wildcard."""
        assert await PostRepository(db_session).search(q="%") == []

    @pytest.mark.asyncio
    async def test_search_by_author(
        self,
        db_session: AsyncSession,
        authors: tuple[User, User],
        sample_posts: dict[str, Post],
    ) -> None:
        result = await PostRepository(db_session).search(author_id=authors[0].id)

        assert {post.id for post in result} == {
            sample_posts["title_hit"].id,
            sample_posts["content_hit"].id,
        }

    @pytest.mark.asyncio
    async def test_search_by_published_false_is_applied(
        self, db_session: AsyncSession, sample_posts: dict[str, Post]
    ) -> None:
        result = await PostRepository(db_session).search(published=False)

        assert {post.id for post in result} == {
            sample_posts["content_hit"].id,
            sample_posts["other_author_hit"].id,
        }

    @pytest.mark.asyncio
    async def test_combined_filters_intersect(
        self,
        db_session: AsyncSession,
        authors: tuple[User, User],
        sample_posts: dict[str, Post],
    ) -> None:
        repo = PostRepository(db_session)

        by_term = {p.id for p in await repo.search(q="should-return")}
        by_author = {p.id for p in await repo.search(author_id=authors[0].id)}
        by_status = {p.id for p in await repo.search(published=True)}
        combined = await repo.search(q="should-return", author_id=authors[0].id, published=True)

        assert {p.id for p in combined} == by_term & by_author & by_status
        assert [p.id for p in combined] == [sample_posts["title_hit"].id]

    @pytest.mark.asyncio
    async def test_created_post_is_found_by_search(
        self, db_session: AsyncSession, authors: tuple[User, User]
    ) -> None:
        repo = PostRepository(db_session)
        post = await repo.create(
            title="Fresh draft", content="brand new", author_id=authors[1].id, published=False
        )

        result = await repo.search(q="brand new", author_id=authors[1].id, published=False)

        assert [found.id for found in result] == [post.id]


class TestBuildSearchConditions:
    """Tests for predicate construction."""

    def test_no_filters_yield_no_conditions(self) -> None:
        assert build_search_conditions() == []

    def test_each_filter_adds_one_condition(self) -> None:
        conditions = build_search_conditions(q="x", author_id=3, published=False)

        assert len(conditions) == 3

    def test_empty_term_and_zero_author_are_ignored(self) -> None:
        assert build_search_conditions(q="", author_id=0) == []

    def test_published_false_is_kept(self) -> None:
        (condition,) = build_search_conditions(published=False)

        assert "published" in str(condition)

    def test_term_searches_both_columns(self) -> None:
        (condition,) = build_search_conditions(q="needle")
        sql = str(condition)

        assert "posts.title" in sql
        assert "posts.content" in sql
        assert " OR " in sql
