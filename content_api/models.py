"""SQLAlchemy 2.0 ORM models.

This module contains all SQLAlchemy models for the YouTube Content API.
All models use the Mapped[type] annotation pattern required by SQLAlchemy 2.0.

Entity overview:
    User ──< YouTubeChannel ──< Video >── VideoCategory
                    │
                    └──< AdSenseCampaign ──< AdRevenue
    User ──< Task ──< TaskComment (threaded via parent_id)

Encrypted Fields Pattern:
    OAuth tokens for linked YouTube channels are stored encrypted using
    Fernet symmetric encryption. Encrypted columns follow the naming convention
    `{field}_encrypted` and use LargeBinary type since Fernet outputs bytes.

    NEVER expose encrypted fields or password hashes in __repr__, response
    schemas, or log statements.
"""

import enum
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, validates

from content_api.exceptions import InvalidStateTransitionError


def utcnow() -> datetime:
    """Get current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


def _enum_column(enum_cls: type[enum.Enum], name: str) -> Enum:
    # Store enum.value (lowercase) rather than enum.name
    return Enum(
        enum_cls,
        native_enum=True,
        name=name,
        values_callable=lambda x: [e.value for e in x],
    )


class UserRole(enum.Enum):
    """Roles used for endpoint authorization.

    admin: full access including user management
    manager: manages campaigns, revenue and task assignment
    employee: works on tasks and content
    """

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class VideoStatus(enum.Enum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class CampaignStatus(enum.Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class TaskStatus(enum.Enum):
    """Work-item workflow.

    Happy path: todo → in_progress → review → done
    Rework: review → in_progress, in_progress → todo
    Reopen: done → in_progress
    Cancellation: todo/in_progress → cancelled, restored via cancelled → todo
    """

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"
    CANCELLED = "cancelled"


OPEN_TASK_STATUSES = [TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.REVIEW]


class TaskPriority(enum.Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )


class User(TimestampMixin, Base):
    """Application user (staff member).

    Attributes:
        id: Internal UUID primary key.
        email: Login identifier, stored lowercase, unique.
        full_name: Display name.
        password_hash: PBKDF2 hash (see content_api.utils.passwords).
        role: Authorization role.
        is_active: Inactive users cannot log in.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        _enum_column(UserRole, "userrole"),
        nullable=False,
        default=UserRole.EMPLOYEE,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    channels: Mapped[list["YouTubeChannel"]] = relationship(
        "YouTubeChannel", back_populates="owner"
    )
    assigned_tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="assignee", foreign_keys="Task.assignee_id"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, email={self.email!r}, role={self.role!r})>"


class YouTubeChannel(TimestampMixin, Base):
    """Tracked YouTube channel.

    Attributes:
        youtube_channel_id: YouTube's channel identifier (UC...). Nullable
            until the channel is linked through Google OAuth.
        owner_id: Staff member responsible for the channel.
        oauth_access_token_encrypted: Fernet-encrypted Google access token.
        oauth_refresh_token_encrypted: Fernet-encrypted Google refresh token.
        oauth_token_expires_at: Expiry of the stored access token.
    """

    __tablename__ = "youtube_channels"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    youtube_channel_id: Mapped[str | None] = mapped_column(
        String(64),
        unique=True,
        nullable=True,
    )
    name: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    owner_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    subscriber_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
    )

    # Use OAuthService for encrypt/decrypt - NEVER read these directly
    oauth_access_token_encrypted: Mapped[bytes | None] = mapped_column(
        LargeBinary,
        nullable=True,
    )
    oauth_refresh_token_encrypted: Mapped[bytes | None] = mapped_column(
        LargeBinary,
        nullable=True,
    )
    oauth_token_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    owner: Mapped["User | None"] = relationship("User", back_populates="channels")
    videos: Mapped[list["Video"]] = relationship("Video", back_populates="channel")
    campaigns: Mapped[list["AdSenseCampaign"]] = relationship(
        "AdSenseCampaign", back_populates="channel"
    )

    __table_args__ = (
        CheckConstraint("subscriber_count >= 0", name="ck_youtube_channels_subscribers"),
    )

    @property
    def is_oauth_linked(self) -> bool:
        return self.oauth_refresh_token_encrypted is not None

    def __repr__(self) -> str:
        return (
            f"<YouTubeChannel(id={self.id!r}, name={self.name!r}, "
            f"youtube_channel_id={self.youtube_channel_id!r})>"
        )


class VideoCategory(Base):
    """Classification taxonomy for videos."""

    __tablename__ = "video_categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    videos: Mapped[list["Video"]] = relationship("Video", back_populates="category")

    def __repr__(self) -> str:
        return f"<VideoCategory(id={self.id!r}, name={self.name!r})>"


class Video(TimestampMixin, Base):
    """A video belonging to a channel.

    Foreign Keys:
        channel_id references youtube_channels.id with ondelete='RESTRICT'
        (a channel with videos cannot be deleted).
        category_id references video_categories.id with ondelete='SET NULL'.
    """

    __tablename__ = "videos"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    channel_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("youtube_channels.id", ondelete="RESTRICT"),
        nullable=False,
    )
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("video_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    youtube_video_id: Mapped[str | None] = mapped_column(
        String(32),
        unique=True,
        nullable=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    status: Mapped[VideoStatus] = mapped_column(
        _enum_column(VideoStatus, "videostatus"),
        nullable=False,
        default=VideoStatus.DRAFT,
        index=True,
    )
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    view_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    like_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    channel: Mapped["YouTubeChannel"] = relationship("YouTubeChannel", back_populates="videos")
    category: Mapped["VideoCategory | None"] = relationship(
        "VideoCategory", back_populates="videos"
    )

    __table_args__ = (
        Index("ix_videos_channel_id_status", "channel_id", "status"),
        CheckConstraint("view_count >= 0", name="ck_videos_view_count"),
        CheckConstraint("like_count >= 0", name="ck_videos_like_count"),
    )

    def __repr__(self) -> str:
        return f"<Video(id={self.id!r}, title={self.title!r}, status={self.status!r})>"


class AdSenseCampaign(TimestampMixin, Base):
    """AdSense campaign, optionally tied to a channel.

    Attributes:
        budget: Planned spend (two decimal places).
        start_date / end_date: Campaign window; end_date may be open.
    """

    __tablename__ = "adsense_campaigns"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
    )
    channel_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("youtube_channels.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    budget: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0.00"),
    )
    start_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    end_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )
    status: Mapped[CampaignStatus] = mapped_column(
        _enum_column(CampaignStatus, "campaignstatus"),
        nullable=False,
        default=CampaignStatus.DRAFT,
        index=True,
    )

    channel: Mapped["YouTubeChannel | None"] = relationship(
        "YouTubeChannel", back_populates="campaigns"
    )
    revenues: Mapped[list["AdRevenue"]] = relationship(
        "AdRevenue",
        back_populates="campaign",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("budget >= 0", name="ck_adsense_campaigns_budget"),
        CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_adsense_campaigns_date_range",
        ),
    )

    def __repr__(self) -> str:
        return f"<AdSenseCampaign(id={self.id!r}, name={self.name!r}, status={self.status!r})>"


class AdRevenue(Base):
    """Daily revenue entry for a campaign (one row per campaign per day)."""

    __tablename__ = "ad_revenues"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    campaign_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("adsense_campaigns.id", ondelete="CASCADE"),
        nullable=False,
    )
    revenue_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    impressions: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    clicks: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    earnings: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0.00"),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    campaign: Mapped["AdSenseCampaign"] = relationship(
        "AdSenseCampaign", back_populates="revenues"
    )

    __table_args__ = (
        UniqueConstraint("campaign_id", "revenue_date", name="uq_ad_revenues_campaign_date"),
        Index("ix_ad_revenues_revenue_date", "revenue_date"),
        CheckConstraint("impressions >= 0", name="ck_ad_revenues_impressions"),
        CheckConstraint("clicks >= 0", name="ck_ad_revenues_clicks"),
        CheckConstraint("clicks <= impressions", name="ck_ad_revenues_clicks_le_impressions"),
        CheckConstraint("earnings >= 0", name="ck_ad_revenues_earnings"),
    )

    def __repr__(self) -> str:
        return (
            f"<AdRevenue(campaign_id={self.campaign_id!r}, revenue_date={self.revenue_date!r}, "
            f"earnings={self.earnings!r})>"
        )


class Task(TimestampMixin, Base):
    """Internal work item (content production, review, campaign work).

    Status changes are validated against VALID_TRANSITIONS by the
    ``validate_status_change`` hook; invalid assignments raise
    InvalidStateTransitionError before anything reaches the database.

    Foreign Keys:
        assignee_id references users.id with ondelete='SET NULL'.
        created_by_id references users.id with ondelete='RESTRICT'.
        video_id references videos.id with ondelete='SET NULL'.
    """

    __tablename__ = "tasks"

    VALID_TRANSITIONS = {
        TaskStatus.TODO: [TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED],
        TaskStatus.IN_PROGRESS: [TaskStatus.REVIEW, TaskStatus.TODO, TaskStatus.CANCELLED],
        TaskStatus.REVIEW: [TaskStatus.DONE, TaskStatus.IN_PROGRESS],
        TaskStatus.DONE: [TaskStatus.IN_PROGRESS],
        TaskStatus.CANCELLED: [TaskStatus.TODO],
    }

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    status: Mapped[TaskStatus] = mapped_column(
        _enum_column(TaskStatus, "taskstatus"),
        nullable=False,
        default=TaskStatus.TODO,
        index=True,
    )
    priority: Mapped[TaskPriority] = mapped_column(
        _enum_column(TaskPriority, "taskpriority"),
        nullable=False,
        default=TaskPriority.NORMAL,
    )
    assignee_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_by_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    video_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("videos.id", ondelete="SET NULL"),
        nullable=True,
    )
    due_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    assignee: Mapped["User | None"] = relationship(
        "User", back_populates="assigned_tasks", foreign_keys=[assignee_id]
    )
    created_by: Mapped["User"] = relationship("User", foreign_keys=[created_by_id])
    video: Mapped["Video | None"] = relationship("Video")
    comments: Mapped[list["TaskComment"]] = relationship(
        "TaskComment",
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TaskComment.created_at",
    )

    __table_args__ = (Index("ix_tasks_assignee_id_status", "assignee_id", "status"),)

    @validates("status")
    def validate_status_change(self, key: str, value: TaskStatus) -> TaskStatus:
        """Validate status transition.

        Validation is skipped on initial creation (status is None) and for
        no-op assignments of the current status.

        Raises:
            InvalidStateTransitionError: If the transition is not listed in
                VALID_TRANSITIONS.
        """
        if self.status is None or self.status == value:
            return value

        allowed_transitions = self.VALID_TRANSITIONS.get(self.status, [])
        if value not in allowed_transitions:
            raise InvalidStateTransitionError(
                f"Invalid transition: {self.status.value} → {value.value}",
                from_status=self.status,
                to_status=value,
            )

        return value

    @property
    def is_overdue(self) -> bool:
        if self.due_date is None or self.status in (TaskStatus.DONE, TaskStatus.CANCELLED):
            return False
        return self.due_date < utcnow().date()

    def __repr__(self) -> str:
        return (
            f"<Task(id={self.id!r}, title={self.title!r}, status={self.status!r}, "
            f"assignee_id={self.assignee_id!r})>"
        )


class TaskComment(Base):
    """Comment on a task. Replies point at their parent comment."""

    __tablename__ = "task_comments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    task_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("task_comments.id", ondelete="CASCADE"),
        nullable=True,
    )
    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    task: Mapped["Task"] = relationship("Task", back_populates="comments")
    author: Mapped["User"] = relationship("User")

    def __repr__(self) -> str:
        return f"<TaskComment(id={self.id!r}, task_id={self.task_id!r})>"
