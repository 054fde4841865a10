"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-01-01 00:00:00
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("profile_picture", sa.String(500), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("subscribed_cats", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "cats",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("personality_tags", sa.JSON(), nullable=False),
        sa.Column("appearance", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_cats_name", "cats", ["name"])
    op.create_index("ix_cats_location", "cats", ["location"])

    op.create_table(
        "cat_images",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "cat_id",
            sa.String(36),
            sa.ForeignKey("cats.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content_type", sa.String(50), nullable=False),
        sa.Column("data", sa.LargeBinary(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_cat_images_cat_id", "cat_images", ["cat_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "cat_id",
            sa.String(36),
            sa.ForeignKey("cats.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("seen", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_cat_id", "notifications", ["cat_id"])

    op.create_table(
        "polls",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("question", sa.String(500), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "answers",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "poll_id",
            sa.String(36),
            sa.ForeignKey("polls.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("text", sa.String(1000), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_answers_poll_id", "answers", ["poll_id"])


def downgrade() -> None:
    op.drop_table("answers")
    op.drop_table("polls")
    op.drop_table("notifications")
    op.drop_table("cat_images")
    op.drop_index("ix_cats_location", table_name="cats")
    op.drop_index("ix_cats_name", table_name="cats")
    op.drop_table("cats")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
