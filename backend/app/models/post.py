"""
Postboard Backend: Post SQLAlchemy Models
==========================================

What:  ORM models for the `posts` and `post_tags` tables.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads these for migrations.
Who:   Used by PostService for CRUD operations and by Alembic for schema management.

Table Design:
    posts
        - id: integer primary key assigned by the database, never rewritten
        - slug: unique, the lookup key of GET /api/posts/{slug}
        - title / body / category: descriptive payload, passed through as-is
        - created_at / updated_at: UTC timestamps
    post_tags
        - one row per tag occurrence, ordered by position, deleted with the post

    Column types are the portable SQLAlchemy ones so the same models run on
    PostgreSQL (asyncpg) and on the SQLite databases used by the test suite.
"""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """
    A blog post.

    Lifecycle:
        1. Created by POST /api/posts (database assigns `id`)
        2. Read by slug, category, tag or as part of the full listing
        3. Replaced field-by-field by an update (everything except `id`)
        4. Deleted by id; its tags go with it

    `tag_links` is loaded eagerly with "selectin" so `tags` can be read after
    any query without a lazy load (which async sessions do not allow).
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    slug: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="URL identifier, unique among posts",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    # TEXT: no artificial length limit on post bodies
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")

    category: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="",
        comment="Single category used by GET /api/posts/category/{category}",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    tag_links: Mapped[List["PostTag"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PostTag.position",
    )

    __table_args__ = (
        Index("idx_posts_category", "category"),
        Index("idx_posts_created_at", created_at.desc()),
    )

    @property
    def tags(self) -> List[str]:
        """Tag names in the order they were submitted."""
        return [link.tag for link in self.tag_links]

    @tags.setter
    def tags(self, names: List[str]) -> None:
        # Rows are reused slot by slot; surplus rows are orphaned and deleted.
        existing = list(self.tag_links)
        links = []
        for index, name in enumerate(names):
            link = existing[index] if index < len(existing) else PostTag()
            link.tag = name
            link.position = index
            links.append(link)
        self.tag_links = links

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, slug='{self.slug}')>"


class PostTag(Base):
    """One tag attached to one post."""

    __tablename__ = "post_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    tag: Mapped[str] = mapped_column(String(100), nullable=False)
    # Keeps tags in submission order so a read returns what was written
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    post: Mapped[Post] = relationship(back_populates="tag_links")

    __table_args__ = (
        Index("idx_post_tags_tag", "tag"),
    )

    def __repr__(self) -> str:
        return f"<PostTag(post_id={self.post_id}, tag='{self.tag}')>"
