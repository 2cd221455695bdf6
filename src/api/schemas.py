"""
Pydantic schemas for API request/response serialization.

Wire names are camelCase; unknown request fields are ignored rather than
rejected.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator
from pydantic.alias_generators import to_camel

MAX_FIELD_LENGTH = 255


class ApiModel(BaseModel):
    """Base model exposing camelCase aliases while accepting field names in code."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------------------------------------------------------
# User Schemas
# -----------------------------------------------------------------------------


class CreateUserRequest(ApiModel):
    """Request body for registering a user."""

    name: str = Field(
        ..., min_length=1, max_length=MAX_FIELD_LENGTH, description="Display name."
    )
    email: str = Field(
        ..., max_length=MAX_FIELD_LENGTH, description="Unique e-mail address."
    )

    @field_validator("email")
    @classmethod
    def check_email_syntax(cls, v: str) -> str:
        """Validate address syntax but keep the value exactly as submitted."""
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(f"invalid email address: {exc}") from exc
        return v


class UserResponse(ApiModel):
    """Schema returned when listing users."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique user identifier.")
    name: str = Field(..., description="Display name.")
    email: str = Field(..., description="E-mail address.")


class UserCreatedResponse(ApiModel):
    """Response after a user is registered."""

    user_id: int = Field(..., description="Identifier assigned to the new user.")


# -----------------------------------------------------------------------------
# Post Schemas
# -----------------------------------------------------------------------------


class CreatePostRequest(ApiModel):
    """Request body for creating a post.

    ``published`` is not accepted here; new posts always start unpublished.
    """

    title: str = Field(..., min_length=1, max_length=MAX_FIELD_LENGTH, description="Post title.")
    content: str | None = Field(
        default=None, max_length=MAX_FIELD_LENGTH, description="Post body."
    )
    author_id: PositiveInt | None = Field(default=None, description="Author user ID.")


class SearchPostsParams(ApiModel):
    """Query parameters for searching posts."""

    q: str | None = Field(
        default=None, min_length=1, description="Case-insensitive title/content substring."
    )
    author_id: PositiveInt | None = Field(default=None, description="Filter by author ID.")
    published: bool | None = Field(default=None, description="Filter by published status.")

    @field_validator("published", mode="before")
    @classmethod
    def coerce_published(cls, v: Any) -> Any:
        """Only the literal string "true" means True; any other supplied value is False."""
        if v is None or isinstance(v, bool):
            return v
        return v == "true"


class PostResponse(ApiModel):
    """Schema returned when fetching a single post or list item."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique post identifier.")
    title: str = Field(..., description="Post title.")
    content: str | None = Field(default=None, description="Post body.")
    published: bool = Field(..., description="Whether the post is published.")
    author_id: int | None = Field(default=None, description="Author user ID.")


class PostCreatedResponse(ApiModel):
    """Response after a post is created."""

    post_id: int = Field(..., description="Identifier assigned to the new post.")


# -----------------------------------------------------------------------------
# Health / Status Schemas
# -----------------------------------------------------------------------------


class HealthStatus(str, Enum):
    """Service health status values."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class ComponentHealth(ApiModel):
    """Health status for a single component."""

    name: str = Field(..., description="Component name.")
    status: HealthStatus = Field(..., description="Component status.")
    latency_ms: float | None = Field(default=None, description="Response latency in milliseconds.")
    message: str | None = Field(default=None, description="Optional status message.")


class HealthResponse(ApiModel):
    """Aggregated health check response."""

    status: HealthStatus = Field(..., description="Overall service status.")
    version: str = Field(..., description="Application version.")
    environment: str = Field(..., description="Deployment environment.")
    components: list[ComponentHealth] = Field(
        default_factory=list,
        description="Individual component health statuses.",
    )


# -----------------------------------------------------------------------------
# Error Schemas
# -----------------------------------------------------------------------------


class ErrorDetail(ApiModel):
    """Structured error detail."""

    field: str | None = Field(default=None, description="Field that caused the error.")
    message: str = Field(..., description="Human-readable error message.")
    code: str | None = Field(default=None, description="Machine-readable error code.")


class ErrorResponse(ApiModel):
    """Standard error response format."""

    status_code: int = Field(..., description="HTTP status code.")
    error: str = Field(..., description="Error type or category.")
    message: str = Field(..., description="Human-readable error description.")
    details: list[ErrorDetail] = Field(
        default_factory=list,
        description="Detailed error information.",
    )
    request_id: str | None = Field(default=None, description="Request trace ID for debugging.")


__all__ = [
    "ApiModel",
    "ComponentHealth",
    "CreatePostRequest",
    "CreateUserRequest",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "HealthStatus",
    "PostCreatedResponse",
    "PostResponse",
    "SearchPostsParams",
    "UserCreatedResponse",
    "UserResponse",
]
