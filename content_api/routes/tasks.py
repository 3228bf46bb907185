"""Task workflow routes.

- GET/POST /api/tasks, GET /api/tasks/mine
- GET/PUT/DELETE /api/tasks/{id}
- POST /api/tasks/{id}/status (state machine transition)
- POST /api/tasks/{id}/assign
- GET/POST /api/tasks/{id}/comments
"""

import uuid

from fastapi import APIRouter, Depends, Query, status

from content_api.auth import AuthenticatedUser, get_current_user
from content_api.dependencies import get_task_service
from content_api.models import TaskStatus
from content_api.schemas.task import (
    CommentCreate,
    CommentResponse,
    TaskAssign,
    TaskCreate,
    TaskResponse,
    TaskStatusChange,
    TaskUpdate,
)
from content_api.services import TaskService

router = APIRouter(
    prefix="/api/tasks", tags=["tasks"], dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    status_filter: TaskStatus | None = Query(default=None, alias="status"),
    assignee_id: uuid.UUID | None = None,
    video_id: uuid.UUID | None = None,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
    service: TaskService = Depends(get_task_service),
) -> list:
    return await service.list_tasks(
        status=status_filter,
        assignee_id=assignee_id,
        video_id=video_id,
        offset=offset,
        limit=limit,
    )


@router.get("/mine", response_model=list[TaskResponse])
async def my_tasks(
    user: AuthenticatedUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> list:
    """Open tasks (todo, in progress, review) assigned to the caller."""
    return await service.list_open_tasks_for(user.id)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return await service.create_task(data, created_by_id=user.id)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: uuid.UUID, service: TaskService = Depends(get_task_service)):
    return await service.get_task(task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: uuid.UUID, data: TaskUpdate, service: TaskService = Depends(get_task_service)
):
    return await service.update_task(task_id, data)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> None:
    await service.delete_task(task_id, user_id=user.id, role=user.role)


@router.post("/{task_id}/status", response_model=TaskResponse)
async def change_task_status(
    task_id: uuid.UUID,
    data: TaskStatusChange,
    service: TaskService = Depends(get_task_service),
):
    return await service.change_status(task_id, data.status)


@router.post("/{task_id}/assign", response_model=TaskResponse)
async def assign_task(
    task_id: uuid.UUID, data: TaskAssign, service: TaskService = Depends(get_task_service)
):
    return await service.assign_task(task_id, data.assignee_id)


@router.get("/{task_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    task_id: uuid.UUID, service: TaskService = Depends(get_task_service)
) -> list:
    return await service.list_comments(task_id)


@router.post(
    "/{task_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED
)
async def add_comment(
    task_id: uuid.UUID,
    data: CommentCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    return await service.add_comment(task_id, author_id=user.id, data=data)
