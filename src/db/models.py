"""
SQLAlchemy ORM models for users and their posts.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Integer, String, text
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
Identifier = BigInteger().with_variant(Integer(), "sqlite")


class Base(AsyncAttrs, DeclarativeBase):
    """Declarative base that enables async-friendly ORM operations."""

    pass


class User(Base):
    """Registered author of posts."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Identifier, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    posts: Mapped[list[Post]] = relationship("Post", back_populates="author")

    __table_args__ = (
        # Backs the application-level uniqueness check on email
        Index("uq_users_email", "email", unique=True),
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"


class Post(Base):
    """Blog post written by a user."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Identifier, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str | None] = mapped_column(String(255), nullable=True)
    published: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )
    author_id: Mapped[int] = mapped_column(
        Identifier,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    author: Mapped[User] = relationship("User", back_populates="posts")

    __table_args__ = (
        Index("ix_posts_author_id", "author_id"),
        Index("ix_posts_published", "published"),
    )

    def __repr__(self) -> str:
        return f"Post(id={self.id!r}, title={self.title!r}, published={self.published!r})"


__all__ = ["Base", "Post", "User"]
