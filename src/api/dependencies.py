"""
FastAPI dependency injection providers.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, Query
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import Settings, get_settings
from ..db.models import Base
from ..db.repositories import PostRepository, UserRepository
from ..services import PostService, UserService
from .schemas import SearchPostsParams

LOGGER = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Type Aliases for Dependency Injection
# -----------------------------------------------------------------------------

SettingsDep = Annotated[Settings, Depends(get_settings)]


# -----------------------------------------------------------------------------
# Database Session Management
# -----------------------------------------------------------------------------

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _get_engine(settings: Settings) -> AsyncEngine:
    """Create or return cached async engine."""
    global _engine
    if _engine is None:
        url = str(settings.database.url)
        options: dict[str, Any] = {"echo": settings.database.echo}
        # SQLite pools do not take a size
        if not url.startswith("sqlite"):
            options["pool_size"] = settings.database.pool_size
        _engine = create_async_engine(url, **options)
    return _engine


def _get_session_factory(settings: Settings) -> async_sessionmaker[AsyncSession]:
    """Create or return cached session factory."""
    global _session_factory
    if _session_factory is None:
        engine = _get_engine(settings)
        _session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


async def get_db(
    settings: SettingsDep,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a transactional database session.

    The session is committed on success and rolled back on exception.
    """
    factory = _get_session_factory(settings)
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


DbSessionDep = Annotated[AsyncSession, Depends(get_db)]


# -----------------------------------------------------------------------------
# Repository / Service Dependencies
# -----------------------------------------------------------------------------


async def get_post_repository(session: DbSessionDep) -> PostRepository:
    """Provide PostRepository with current session."""
    return PostRepository(session)


async def get_user_repository(session: DbSessionDep) -> UserRepository:
    """Provide UserRepository with current session."""
    return UserRepository(session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


async def get_post_service(repository: PostRepoDep) -> PostService:
    return PostService(repository)


async def get_user_service(repository: UserRepoDep) -> UserService:
    return UserService(repository)


PostServiceDep = Annotated[PostService, Depends(get_post_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]


# -----------------------------------------------------------------------------
# Query Parameters
# -----------------------------------------------------------------------------


async def get_search_params(
    q: Annotated[
        str | None, Query(min_length=1, description="Title/content substring")
    ] = None,
    author_id: Annotated[
        int | None, Query(alias="authorId", gt=0, description="Filter by author ID")
    ] = None,
    published: Annotated[
        str | None, Query(description='Only "true" selects published posts')
    ] = None,
) -> SearchPostsParams:
    """
    Collect post search filters from the query string.

    ``published`` is taken as the raw string so the schema can apply its
    "only the literal true" coercion instead of FastAPI's boolean parsing.
    """
    return SearchPostsParams(q=q, author_id=author_id, published=published)


SearchParamsDep = Annotated[SearchPostsParams, Depends(get_search_params)]


# -----------------------------------------------------------------------------
# Lifecycle Helpers
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan_dependencies(settings: Settings) -> AsyncIterator[None]:
    """
    Context manager for application lifespan.

    Initializes the engine (and schema, when enabled) and disposes it on exit.
    """
    global _engine, _session_factory

    LOGGER.info("Initializing application dependencies...")

    engine = _get_engine(settings)
    _get_session_factory(settings)

    if settings.database.create_schema:
        async with engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)
        LOGGER.info("Database schema ensured.")

    try:
        yield
    finally:
        LOGGER.info("Shutting down application dependencies...")

        if _engine:
            await _engine.dispose()
            _engine = None
            _session_factory = None


# -----------------------------------------------------------------------------
# Health Check Helpers
# -----------------------------------------------------------------------------


async def check_database_health(session: AsyncSession) -> tuple[bool, float]:
    """Check database connectivity and return (healthy, latency_ms)."""
    start = time.perf_counter()
    try:
        await session.execute(text("SELECT 1"))
        latency = (time.perf_counter() - start) * 1000
        return True, latency
    except Exception as exc:
        LOGGER.error("Database health check failed: %s", exc)
        latency = (time.perf_counter() - start) * 1000
        return False, latency


__all__ = [
    "DbSessionDep",
    "PostRepoDep",
    "PostServiceDep",
    "SearchParamsDep",
    "SettingsDep",
    "UserRepoDep",
    "UserServiceDep",
    "check_database_health",
    "get_db",
    "get_post_repository",
    "get_post_service",
    "get_search_params",
    "get_settings",
    "get_user_repository",
    "get_user_service",
    "lifespan_dependencies",
]
