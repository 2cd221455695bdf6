"""
Service layer holding business rules between the API and the repositories.
"""

from .exceptions import ConflictError, NotFoundError, ServiceError
from .posts import PostService, apply_creation_defaults
from .users import UserService

__all__ = [
    "ConflictError",
    "NotFoundError",
    "PostService",
    "ServiceError",
    "UserService",
    "apply_creation_defaults",
]
