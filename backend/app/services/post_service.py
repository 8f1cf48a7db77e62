"""
Postboard Backend: Post Service (Data Access)
==============================================

What:  Every persistence operation the post endpoints need.
Why:   Keeps SQL out of the route handlers; each handler makes exactly one
       call into this module per request.
How:   Methods receive the per-request AsyncSession (injected by FastAPI),
       run one query or one write, and return Pydantic response models.
Who:   Called by app.routes.posts.

Outcome Contract:
    Listing and mutating methods return their value or raise:
        NotFoundError  - update/delete target id does not exist
        DatabaseError  - anything else the store reports (duplicate slug,
                         connection failure, ...), message embeds the cause
    get_by_slug never raises; it returns a SlugLookup tagged FOUND,
    NOT_FOUND or ERROR so "no such post" stays distinct from "query failed".

    Writes commit before returning, so a failed commit surfaces as
    DatabaseError while the handler can still answer with it. On any failure
    the session is rolled back before the error leaves this module.
"""

import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.post import Post, PostTag
from app.schemas.post import PostCreate, PostResponse, PostUpdate

logger = logging.getLogger(__name__)


class LookupStatus(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class SlugLookup:
    """
    Result of a lookup by slug.

    Exactly one of the shapes below is produced:
        SlugLookup(FOUND, post=<PostResponse>)
        SlugLookup(NOT_FOUND)
        SlugLookup(ERROR, error="<description>")
    """
    status: LookupStatus
    post: Optional[PostResponse] = None
    error: Optional[str] = None

    @classmethod
    def found(cls, post: PostResponse) -> "SlugLookup":
        return cls(status=LookupStatus.FOUND, post=post)

    @classmethod
    def not_found(cls) -> "SlugLookup":
        return cls(status=LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: str) -> "SlugLookup":
        return cls(status=LookupStatus.ERROR, error=error)


def describe_failure(exc: BaseException) -> str:
    """
    Human-readable description of a store failure.

    SQLAlchemy wraps driver errors; the wrapped `orig` carries the useful
    text ("UNIQUE constraint failed: posts.slug") without the SQL statement
    and parameters SQLAlchemy appends to its own message.
    """
    orig = getattr(exc, "orig", None)
    text = str(orig if orig is not None else exc).strip()
    return text or type(exc).__name__


class PostService:
    """
    Stateless data-access layer for posts.

    Responsibilities:
        - get_all / get_by_category / get_by_tag: listings, newest first
        - get_by_slug: three-way lookup
        - insert / update / delete: single-row writes
    """

    # ── Reads ─────────────────────────────────────────────────────────────

    async def get_all(self, db: AsyncSession) -> List[PostResponse]:
        return await self._list(db, select(Post), "all")

    async def get_by_category(self, db: AsyncSession, category: str) -> List[PostResponse]:
        return await self._list(
            db, select(Post).where(Post.category == category), f"category={category!r}"
        )

    async def get_by_tag(self, db: AsyncSession, tag: str) -> List[PostResponse]:
        # A tag may repeat within one post; the subquery keeps each post once
        tagged = select(PostTag.post_id).where(PostTag.tag == tag)
        query = select(Post).where(Post.id.in_(tagged))
        return await self._list(db, query, f"tag={tag!r}")

    async def _list(self, db: AsyncSession, query, label: str) -> List[PostResponse]:
        """
        Runs a listing query ordered newest first.

        A failure raises DatabaseError; an empty list only ever means the
        query succeeded and matched nothing.
        """
        query = query.order_by(desc(Post.created_at), desc(Post.id))
        try:
            result = await db.execute(query)
            posts = result.scalars().all()
            return [PostResponse.model_validate(post) for post in posts]
        except Exception as e:
            logger.error("Database error listing posts (%s): %s", label, str(e), exc_info=True)
            await self._rollback(db)
            raise DatabaseError(
                message=describe_failure(e),
                context={"query": label, "error_type": type(e).__name__},
            )

    async def get_by_slug(self, db: AsyncSession, slug: str) -> SlugLookup:
        """
        Look up a single post by slug.

        Query plan:
            SELECT * FROM posts WHERE slug = :slug
            → unique index on slug
        """
        try:
            result = await db.execute(select(Post).where(Post.slug == slug))
            post = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching post %r: %s", slug, str(e), exc_info=True)
            await self._rollback(db)
            return SlugLookup.failed(describe_failure(e))

        if post is None:
            return SlugLookup.not_found()
        return SlugLookup.found(PostResponse.model_validate(post))

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert(self, db: AsyncSession, data: PostCreate) -> PostResponse:
        """
        Insert a new post; the database assigns its id.

        Raises:
            DatabaseError: constraint violation (e.g. duplicate slug) or any
                           other store failure
        """
        now = datetime.now(timezone.utc)
        post = Post(
            slug=data.slug,
            title=data.title,
            body=data.body,
            category=data.category,
            created_at=now,
            updated_at=now,
        )
        post.tags = data.tags
        try:
            db.add(post)
            await db.flush()  # Assigns id
            await db.commit()
        except Exception as e:
            logger.warning("Insert of post %r failed: %s", data.slug, str(e))
            await self._rollback(db)
            raise DatabaseError(
                message=describe_failure(e),
                context={"slug": data.slug, "error_type": type(e).__name__},
            )

        logger.info("Post created: id=%s slug=%s", post.id, post.slug)
        return PostResponse.model_validate(post)

    async def update(self, db: AsyncSession, data: PostUpdate) -> PostResponse:
        """
        Replace every field of post `data.id` except the id itself.

        Raises:
            NotFoundError: no post has that id
            DatabaseError: constraint violation or other store failure
        """
        try:
            result = await db.execute(select(Post).where(Post.id == data.id))
            post = result.scalar_one_or_none()
            if post is None:
                raise NotFoundError(resource="post", resource_id=str(data.id))

            post.slug = data.slug
            post.title = data.title
            post.body = data.body
            post.category = data.category
            post.tags = data.tags
            post.updated_at = datetime.now(timezone.utc)
            await db.flush()
            await db.commit()
        except NotFoundError:
            await self._rollback(db)
            raise
        except Exception as e:
            logger.warning("Update of post %s failed: %s", data.id, str(e))
            await self._rollback(db)
            raise DatabaseError(
                message=describe_failure(e),
                context={"post_id": data.id, "error_type": type(e).__name__},
            )

        logger.info("Post updated: id=%s slug=%s", post.id, post.slug)
        return PostResponse.model_validate(post)

    async def delete(self, db: AsyncSession, post_id: int) -> None:
        """
        Delete post `post_id` and its tags.

        Tags are removed explicitly rather than through ON DELETE CASCADE,
        which SQLite only honours with foreign keys switched on.

        Raises:
            NotFoundError: no post has that id
            DatabaseError: any store failure
        """
        try:
            await db.execute(delete(PostTag).where(PostTag.post_id == post_id))
            result = await db.execute(delete(Post).where(Post.id == post_id))
            if result.rowcount == 0:
                raise NotFoundError(resource="post", resource_id=str(post_id))
            await db.commit()
        except NotFoundError:
            await self._rollback(db)
            raise
        except Exception as e:
            logger.warning("Delete of post %s failed: %s", post_id, str(e))
            await self._rollback(db)
            raise DatabaseError(
                message=describe_failure(e),
                context={"post_id": post_id, "error_type": type(e).__name__},
            )

        logger.info("Post deleted: id=%s", post_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _rollback(self, db: AsyncSession) -> None:
        """Roll back after a failure; a failing rollback is logged, not raised."""
        try:
            await db.rollback()
        except Exception:
            logger.error("Rollback failed after store error", exc_info=True)


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
