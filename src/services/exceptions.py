"""
Custom exception hierarchy for service-layer failures.
"""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base exception for business-rule violations surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}


class NotFoundError(ServiceError):
    """Raised when a requested entity does not exist."""

    status_code = 404


class ConflictError(ServiceError):
    """Raised when a write would violate a uniqueness rule."""

    status_code = 409


__all__ = ["ConflictError", "NotFoundError", "ServiceError"]
