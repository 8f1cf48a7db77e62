"""Create posts and post_tags tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

Mirrors app/models/post.py. Column types are portable so the same revision
applies to PostgreSQL and SQLite.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "slug",
            sa.String(255),
            nullable=False,
            comment="URL identifier, unique among posts",
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column(
            "category",
            sa.String(100),
            nullable=False,
            comment="Single category used by GET /api/posts/category/{category}",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index("idx_posts_category", "posts", ["category"])
    op.create_index("idx_posts_created_at", "posts", [sa.text("created_at DESC")])

    op.create_table(
        "post_tags",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("tag", sa.String(100), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_post_tags_tag", "post_tags", ["tag"])


def downgrade() -> None:
    """Drops both tables. Destructive: all posts are lost."""
    op.drop_index("idx_post_tags_tag", table_name="post_tags")
    op.drop_table("post_tags")
    op.drop_index("idx_posts_created_at", table_name="posts")
    op.drop_index("idx_posts_category", table_name="posts")
    op.drop_table("posts")
