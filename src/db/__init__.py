"""
Database toolkit exposing ORM models and repositories.
"""

from .models import Base, Post, User
from .repositories import BaseRepository, PostRepository, UserRepository

__all__ = [
    "Base",
    "BaseRepository",
    "Post",
    "PostRepository",
    "User",
    "UserRepository",
]
