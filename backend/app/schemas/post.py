"""
Postboard Backend: Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the JSON contract of the post endpoints.
Why:   Strict input validation, lossless serialization, and OpenAPI docs.
How:   Routes decode raw bodies into the request models themselves (so that
       decoding failures become `{"error": ...}` with 400 instead of FastAPI's
       422 shape) and return the response models directly.

Envelope contract (relied on by every client):
    success of retrieval → the Post, or {"posts": [...]}
    success of action    → {"message": "..."}
    failure              → {"error": "..."}
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Shared Fields
# ══════════════════════════════════════════════════════════════════════════


class PostFields(BaseModel):
    """
    Descriptive fields common to every Post payload.

    Title, body, category and tags are opaque: they are stored exactly as
    sent. Tags keep their order, their whitespace and any duplicates.
    """
    slug: str = Field(min_length=1, max_length=255, description="Unique URL identifier")
    title: str = Field(max_length=255, description="Post title")
    body: str = Field(default="", description="Post content, passed through unchanged")
    category: str = Field(default="", max_length=100, description="Post category")
    tags: List[str] = Field(default_factory=list, description="Tag names")

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        """Slugs are path segments: no surrounding or inner whitespace, no slashes."""
        if any(ch.isspace() for ch in v) or "/" in v:
            raise ValueError("slug must not contain whitespace or '/'")
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        """Only the column width is checked; tags are otherwise kept verbatim."""
        for tag in v:
            if len(tag) > 100:
                raise ValueError(f"tag '{tag[:20]}...' exceeds 100 characters")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PostCreate(PostFields):
    """
    Body of POST /api/posts.

    Unknown keys are ignored, so a full Post (including a client-side `id`
    or timestamps) is accepted; the store assigns the real `id`.
    """
    model_config = ConfigDict(extra="ignore")


class PostUpdate(PostFields):
    """
    Body of PUT /api/posts: a full Post including the `id` of the target.

    The `id` selects the row; it is never written back.
    """
    id: int = Field(ge=1, description="Identifier of the post to replace")

    model_config = ConfigDict(extra="ignore")


class PostDelete(BaseModel):
    """Body of DELETE /api/posts. Only `id` is read; a full Post is accepted."""
    id: int = Field(ge=1, description="Identifier of the post to delete")

    model_config = ConfigDict(extra="ignore")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(PostFields):
    """
    A Post as stored. Returned by GET /api/posts/{slug} and inside listings.

    Key names match the request models, so a response body can be sent back
    as an update body unchanged.
    """
    id: int = Field(description="Store-assigned identifier")
    created_at: datetime = Field(description="Creation time (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last update time (UTC ISO 8601)")

    model_config = ConfigDict(from_attributes=True)


class PostListResponse(BaseModel):
    """`{"posts": [...]}`, returned by every listing endpoint."""
    posts: List[PostResponse] = Field(description="Matching posts, newest first")


class MessageResponse(BaseModel):
    """`{"message": "..."}`, returned by add/update/delete on success."""
    message: str = Field(description="Human-readable success message")


class ErrorResponse(BaseModel):
    """
    The error envelope: `{"error": "<message>"}`.

    A single key holding a human-readable string. No error codes, no
    details object; the message embeds the underlying failure description.
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
