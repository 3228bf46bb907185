"""Pydantic schemas for Task and TaskComment validation and serialization.

Schema Naming Convention:
    - TaskCreate: POST /api/tasks
    - TaskUpdate: PUT /api/tasks/{id} (partial; status has its own endpoint)
    - TaskStatusChange / TaskAssign: workflow actions
    - TaskResponse / CommentResponse: serialized from the ORM models
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from content_api.models import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    """Schema for creating a task.

    Tasks always start in ``todo``; the creator is taken from the bearer
    token, not the payload.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    priority: TaskPriority = Field(
        default=TaskPriority.NORMAL,
        description="Task priority (low/normal/high/urgent). Default: normal.",
    )
    assignee_id: UUID | None = None
    video_id: UUID | None = None
    due_date: date | None = None


class TaskUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    priority: TaskPriority | None = None
    video_id: UUID | None = None
    due_date: date | None = None


class TaskStatusChange(BaseModel):
    status: TaskStatus = Field(..., description="Target status; must be a valid transition")


class TaskAssign(BaseModel):
    assignee_id: UUID | None = Field(..., description="User to assign, or null to unassign")


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    assignee_id: UUID | None
    created_by_id: UUID
    video_id: UUID | None
    due_date: date | None
    completed_at: datetime | None
    is_overdue: bool
    created_at: datetime
    updated_at: datetime


class CommentCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    body: str = Field(..., min_length=1, max_length=4000)
    parent_id: UUID | None = Field(default=None, description="Comment being replied to")


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    task_id: UUID
    author_id: UUID
    parent_id: UUID | None
    body: str
    created_at: datetime
