"""
Post repository for data access operations on Post entities.

Search filters are translated into a conjunction of SQLAlchemy predicates:
- ``q``: case-insensitive substring match on title OR content
- ``author_id``: exact match, skipped when falsy
- ``published``: exact match, skipped only when ``None``
"""

from __future__ import annotations

from sqlalchemy import ColumnElement, Select, or_, select

from ..models import Post
from .base import BaseRepository


def build_search_conditions(
    *,
    q: str | None = None,
    author_id: int | None = None,
    published: bool | None = None,
) -> list[ColumnElement[bool]]:
    """Return the WHERE predicates for a post search; an empty list matches everything."""
    conditions: list[ColumnElement[bool]] = []

    if q:
        # autoescape keeps % and _ in the term literal
        conditions.append(
            or_(
                Post.title.icontains(q, autoescape=True),
                Post.content.icontains(q, autoescape=True),
            )
        )

    if author_id:
        conditions.append(Post.author_id == author_id)

    if published is not None:
        conditions.append(Post.published == published)

    return conditions


class PostRepository(BaseRepository):
    """Data access helpers for Post entities."""

    async def create(
        self,
        *,
        title: str,
        author_id: int | None,
        published: bool,
        content: str | None = None,
    ) -> Post:
        """Insert a post and return it with its backend-assigned id."""
        post = Post(title=title, content=content, author_id=author_id, published=published)
        self._session.add(post)
        await self._session.flush()
        return post

    async def find_by_id(self, post_id: int) -> Post | None:
        """Fetch a single post by primary key, or None if absent."""
        return await self._session.get(Post, post_id)

    async def search(
        self,
        *,
        q: str | None = None,
        author_id: int | None = None,
        published: bool | None = None,
    ) -> list[Post]:
        """
        Return posts matching every supplied filter.

        No ORDER BY and no pagination are applied; row order is whatever the
        backend returns.
        """
        stmt: Select[tuple[Post]] = select(Post).where(
            *build_search_conditions(q=q, author_id=author_id, published=published)
        )
        result = await self._session.scalars(stmt)
        return list(result)


__all__ = ["PostRepository", "build_search_conditions"]
