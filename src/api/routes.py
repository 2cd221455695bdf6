"""
API route definitions for users and posts.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from .dependencies import (
    DbSessionDep,
    PostServiceDep,
    SearchParamsDep,
    SettingsDep,
    UserServiceDep,
    check_database_health,
)
from .schemas import (
    ComponentHealth,
    CreatePostRequest,
    CreateUserRequest,
    ErrorResponse,
    HealthResponse,
    HealthStatus,
    PostCreatedResponse,
    PostResponse,
    UserCreatedResponse,
    UserResponse,
)

LOGGER = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Router Definitions
# -----------------------------------------------------------------------------

health_router = APIRouter(tags=["Health"])
users_router = APIRouter(prefix="/users", tags=["Users"])
posts_router = APIRouter(prefix="/posts", tags=["Posts"])


# -----------------------------------------------------------------------------
# Health Endpoints
# -----------------------------------------------------------------------------


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns the health status of the service and its database.",
)
async def health_check(
    settings: SettingsDep,
    session: DbSessionDep,
) -> HealthResponse:
    """Perform health checks on all service dependencies."""
    db_healthy, db_latency = await check_database_health(session)
    database = ComponentHealth(
        name="database",
        status=HealthStatus.HEALTHY if db_healthy else HealthStatus.UNHEALTHY,
        latency_ms=db_latency,
        message=None if db_healthy else "Database connection failed",
    )

    return HealthResponse(
        status=database.status,
        version=settings.app.version,
        environment=settings.app.environment.value,
        components=[database],
    )


# -----------------------------------------------------------------------------
# User Endpoints
# -----------------------------------------------------------------------------


@users_router.post(
    "",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    responses={
        201: {"description": "User created"},
        400: {"model": ErrorResponse, "description": "Invalid payload"},
        409: {"model": ErrorResponse, "description": "E-mail already registered"},
    },
)
async def create_user(body: CreateUserRequest, service: UserServiceDep) -> UserCreatedResponse:
    """Create a user if the e-mail is not yet registered."""
    user_id = await service.create_user(name=body.name, email=str(body.email))
    return UserCreatedResponse(user_id=user_id)


@users_router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
)
async def list_users(service: UserServiceDep) -> list[UserResponse]:
    users = await service.list_users()
    return [UserResponse.model_validate(user) for user in users]


# -----------------------------------------------------------------------------
# Posts Endpoints
# -----------------------------------------------------------------------------


@posts_router.post(
    "",
    response_model=PostCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create post",
    description="Create an unpublished post.",
    responses={
        201: {"description": "Post created"},
        400: {"model": ErrorResponse, "description": "Invalid payload"},
    },
)
async def create_post(body: CreatePostRequest, service: PostServiceDep) -> PostCreatedResponse:
    """Create a post; ``published`` is always false on creation."""
    post = await service.create_post(body.model_dump())
    return PostCreatedResponse(post_id=post.id)


@posts_router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get post by ID",
    description="Retrieve a single post by its unique identifier.",
    responses={
        200: {"description": "Successfully retrieved post"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
async def get_post(post_id: int, service: PostServiceDep) -> PostResponse:
    """Retrieve a single post by ID."""
    post = await service.get_post(post_id)
    return PostResponse.model_validate(post)


@posts_router.get(
    "",
    response_model=list[PostResponse],
    summary="Search posts",
    description="List posts matching every supplied filter.",
    responses={
        200: {"description": "Matching posts"},
        400: {"model": ErrorResponse, "description": "Invalid query parameters"},
    },
)
async def search_posts(filters: SearchParamsDep, service: PostServiceDep) -> list[PostResponse]:
    """Search posts by text, author and published status."""
    posts = await service.search(
        q=filters.q,
        author_id=filters.author_id,
        published=filters.published,
    )
    return [PostResponse.model_validate(post) for post in posts]


__all__ = [
    "health_router",
    "posts_router",
    "users_router",
]
