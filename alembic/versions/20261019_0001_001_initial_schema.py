"""Initial schema for users, channels, videos, campaigns, revenue and tasks.

Tables:
    - users: staff accounts with role (admin/manager/employee)
    - youtube_channels: tracked channels with encrypted OAuth tokens
    - video_categories, videos: content catalogue
    - adsense_campaigns, ad_revenues: campaigns and daily revenue
    - tasks, task_comments: internal workflow with threaded comments

Enum columns store lowercase values (e.g. 'in_progress').

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

user_role = sa.Enum("admin", "manager", "employee", name="userrole")
video_status = sa.Enum("draft", "scheduled", "published", "archived", name="videostatus")
campaign_status = sa.Enum("draft", "active", "paused", "completed", name="campaignstatus")
task_status = sa.Enum("todo", "in_progress", "review", "done", "cancelled", name="taskstatus")
task_priority = sa.Enum("low", "normal", "high", "urgent", name="taskpriority")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    """Create all tables, constraints and indexes."""
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(150), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", user_role, nullable=False, server_default="employee"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "youtube_channels",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("youtube_channel_id", sa.String(64), nullable=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("subscriber_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("oauth_access_token_encrypted", sa.LargeBinary(), nullable=True),
        sa.Column("oauth_refresh_token_encrypted", sa.LargeBinary(), nullable=True),
        sa.Column("oauth_token_expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("youtube_channel_id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="SET NULL"),
        sa.CheckConstraint("subscriber_count >= 0", name="ck_youtube_channels_subscribers"),
    )
    op.create_index("ix_youtube_channels_owner_id", "youtube_channels", ["owner_id"])
    op.create_index("ix_youtube_channels_is_active", "youtube_channels", ["is_active"])

    op.create_table(
        "video_categories",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "videos",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("channel_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("category_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("youtube_video_id", sa.String(32), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", video_status, nullable=False, server_default="draft"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("youtube_video_id"),
        sa.ForeignKeyConstraint(["channel_id"], ["youtube_channels.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["category_id"], ["video_categories.id"], ondelete="SET NULL"),
        sa.CheckConstraint("view_count >= 0", name="ck_videos_view_count"),
        sa.CheckConstraint("like_count >= 0", name="ck_videos_like_count"),
    )
    op.create_index("ix_videos_category_id", "videos", ["category_id"])
    op.create_index("ix_videos_status", "videos", ["status"])
    op.create_index("ix_videos_channel_id_status", "videos", ["channel_id", "status"])

    op.create_table(
        "adsense_campaigns",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("channel_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("budget", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", campaign_status, nullable=False, server_default="draft"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["channel_id"], ["youtube_channels.id"], ondelete="SET NULL"),
        sa.CheckConstraint("budget >= 0", name="ck_adsense_campaigns_budget"),
        sa.CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_adsense_campaigns_date_range",
        ),
    )
    op.create_index("ix_adsense_campaigns_channel_id", "adsense_campaigns", ["channel_id"])
    op.create_index("ix_adsense_campaigns_status", "adsense_campaigns", ["status"])

    op.create_table(
        "ad_revenues",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("campaign_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("revenue_date", sa.Date(), nullable=False),
        sa.Column("impressions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("clicks", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("earnings", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["campaign_id"], ["adsense_campaigns.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("campaign_id", "revenue_date", name="uq_ad_revenues_campaign_date"),
        sa.CheckConstraint("impressions >= 0", name="ck_ad_revenues_impressions"),
        sa.CheckConstraint("clicks >= 0", name="ck_ad_revenues_clicks"),
        sa.CheckConstraint("clicks <= impressions", name="ck_ad_revenues_clicks_le_impressions"),
        sa.CheckConstraint("earnings >= 0", name="ck_ad_revenues_earnings"),
    )
    op.create_index("ix_ad_revenues_revenue_date", "ad_revenues", ["revenue_date"])

    op.create_table(
        "tasks",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", task_status, nullable=False, server_default="todo"),
        sa.Column("priority", task_priority, nullable=False, server_default="normal"),
        sa.Column("assignee_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("created_by_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("video_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["assignee_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by_id"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["video_id"], ["videos.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_tasks_status", "tasks", ["status"])
    op.create_index("ix_tasks_assignee_id", "tasks", ["assignee_id"])
    op.create_index("ix_tasks_assignee_id_status", "tasks", ["assignee_id", "status"])

    op.create_table(
        "task_comments",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("task_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("author_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("parent_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["parent_id"], ["task_comments.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_task_comments_task_id", "task_comments", ["task_id"])


def downgrade() -> None:
    """Drop all tables and enum types."""
    op.drop_table("task_comments")
    op.drop_table("tasks")
    op.drop_table("ad_revenues")
    op.drop_table("adsense_campaigns")
    op.drop_table("videos")
    op.drop_table("video_categories")
    op.drop_table("youtube_channels")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in (task_priority, task_status, campaign_status, video_status, user_role):
        enum_type.drop(bind, checkfirst=True)
