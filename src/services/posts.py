"""
Post service applying server-side defaults before persistence.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..db.models import Post
from ..db.repositories.post import PostRepository
from .exceptions import NotFoundError

LOGGER = logging.getLogger(__name__)


def apply_creation_defaults(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of validated post data with server-controlled fields set.

    New posts always start unpublished, whatever the caller sent.
    """
    return {**data, "published": False}


class PostService:
    """Business rules for Post entities."""

    def __init__(self, repository: PostRepository) -> None:
        self._repository = repository

    async def create_post(self, data: Mapping[str, Any]) -> Post:
        values = apply_creation_defaults(data)
        post = await self._repository.create(
            title=values["title"],
            content=values.get("content"),
            author_id=values.get("author_id"),
            published=values["published"],
        )
        LOGGER.info("Created post %d for author %s", post.id, post.author_id)
        return post

    async def get_post(self, post_id: int) -> Post:
        """Return the post with the given id or raise NotFoundError."""
        post = await self._repository.find_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found", context={"post_id": post_id})
        return post

    async def search(
        self,
        *,
        q: str | None = None,
        author_id: int | None = None,
        published: bool | None = None,
    ) -> list[Post]:
        return await self._repository.search(q=q, author_id=author_id, published=published)


__all__ = ["PostService", "apply_creation_defaults"]
