"""
Postboard Backend: Post Route Handlers
=======================================

What:  The seven post endpoints: three listings, lookup by slug, add,
       update and delete.
Why:   Translates HTTP requests into one data-access call each and the
       call's outcome into a status code plus a JSON body.
How:   Parse input → call post_service → map the outcome.

Status Mapping:
    listings   success 200 {"posts": [...]}   store failure 500 {"error": ...}
    lookup     found 200 Post, missing 404 (empty body), failure 500 {"error": ...}
    mutations  success 200 {"message": ...}   store failure 400 {"error": ...}
    any body that does not decode             400 {"error": ...} (global handler)

Mutating store failures answer 400, not 500: a duplicate slug or an
unknown id is something the caller can correct.

Update and delete take the target id from the body, not the path.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import PostboardError
from app.responses import decode_body, error_response
from app.schemas.post import (
    ErrorResponse,
    MessageResponse,
    PostCreate,
    PostDelete,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from app.services.post_service import LookupStatus, post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Posts"])

_LIST_RESPONSES = {
    200: {"description": "Matching posts", "model": PostListResponse},
    500: {"description": "Store failure", "model": ErrorResponse},
}

_MUTATION_RESPONSES = {
    200: {"description": "Action succeeded", "model": MessageResponse},
    400: {"description": "Undecodable body or store failure", "model": ErrorResponse},
    413: {"description": "Body exceeds MAX_BODY_SIZE", "model": ErrorResponse},
}


# ══════════════════════════════════════════════════════════════════════════
# Listings
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/posts",
    response_model=PostListResponse,
    responses=_LIST_RESPONSES,
    summary="List all posts",
)
async def get_all_posts(db: AsyncSession = Depends(get_db_session)):
    try:
        posts = await post_service.get_all(db)
    except PostboardError as e:
        return error_response(500, f"Failed to fetch posts: {e.message}")
    return PostListResponse(posts=posts)


@router.get(
    "/posts/category/{category}",
    response_model=PostListResponse,
    responses=_LIST_RESPONSES,
    summary="List posts in a category",
)
async def get_posts_by_category(category: str, db: AsyncSession = Depends(get_db_session)):
    try:
        posts = await post_service.get_by_category(db, category)
    except PostboardError as e:
        return error_response(500, f"Failed to fetch posts: {e.message}")
    return PostListResponse(posts=posts)


@router.get(
    "/posts/tag/{tag}",
    response_model=PostListResponse,
    responses=_LIST_RESPONSES,
    summary="List posts carrying a tag",
)
async def get_posts_by_tag(tag: str, db: AsyncSession = Depends(get_db_session)):
    try:
        posts = await post_service.get_by_tag(db, tag)
    except PostboardError as e:
        return error_response(500, f"Failed to fetch posts: {e.message}")
    return PostListResponse(posts=posts)


# ══════════════════════════════════════════════════════════════════════════
# Lookup
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/posts/{slug}",
    response_model=PostResponse,
    responses={
        200: {"description": "The post", "model": PostResponse},
        404: {"description": "No post has this slug (empty body)"},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Get a single post by slug",
)
async def get_post(slug: str, db: AsyncSession = Depends(get_db_session)):
    """
    Return the post whose slug is `slug`.

    A missing post is a valid empty result (404, no body); only a failed
    query produces the error envelope.
    """
    lookup = await post_service.get_by_slug(db, slug)

    if lookup.status is LookupStatus.FOUND:
        return lookup.post
    if lookup.status is LookupStatus.NOT_FOUND:
        return Response(status_code=404)
    return error_response(500, f"Failed to fetch post: {lookup.error}")


# ══════════════════════════════════════════════════════════════════════════
# Mutations
# ══════════════════════════════════════════════════════════════════════════


@router.post(
    "/posts",
    response_model=MessageResponse,
    responses=_MUTATION_RESPONSES,
    summary="Add a post",
)
async def add_post(request: Request, db: AsyncSession = Depends(get_db_session)):
    """
    Create a post from the JSON body.

    The body is fully decoded before the store is touched; any `id` in it
    is ignored since the store assigns one.
    """
    data = await decode_body(request, PostCreate)

    try:
        await post_service.insert(db, data)
    except PostboardError as e:
        return error_response(400, f"Failed to add post: {e.message}")
    return MessageResponse(message="Post added successfully")


@router.delete(
    "/posts",
    response_model=MessageResponse,
    responses=_MUTATION_RESPONSES,
    summary="Delete a post (id in body)",
)
@router.post(
    "/posts/delete",
    response_model=MessageResponse,
    responses=_MUTATION_RESPONSES,
    summary="Delete a post (id in body, POST form)",
)
async def delete_post(request: Request, db: AsyncSession = Depends(get_db_session)):
    data = await decode_body(request, PostDelete)

    try:
        await post_service.delete(db, data.id)
    except PostboardError as e:
        return error_response(400, f"Failed to delete post: {e.message}")
    return MessageResponse(message="Post deleted successfully")


@router.put(
    "/posts",
    response_model=MessageResponse,
    responses=_MUTATION_RESPONSES,
    summary="Replace a post (id in body)",
)
@router.post(
    "/posts/update",
    response_model=MessageResponse,
    responses=_MUTATION_RESPONSES,
    summary="Replace a post (id in body, POST form)",
)
async def update_post(request: Request, db: AsyncSession = Depends(get_db_session)):
    """
    Replace every field of the post identified by the body's `id`.

    The id only selects the row; it is never rewritten.
    """
    data = await decode_body(request, PostUpdate)

    try:
        await post_service.update(db, data)
    except PostboardError as e:
        return error_response(400, f"Failed to update post: {e.message}")
    return MessageResponse(message="Post updated successfully")
