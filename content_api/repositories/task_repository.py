"""Task and task comment queries."""

import uuid

from sqlalchemy import case, select
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.models import OPEN_TASK_STATUSES, Task, TaskComment, TaskPriority, TaskStatus
from content_api.repositories.base import DEFAULT_PAGE_SIZE, Repository

# urgent first, low last
_PRIORITY_ORDER = case(
    (Task.priority == TaskPriority.URGENT, 0),
    (Task.priority == TaskPriority.HIGH, 1),
    (Task.priority == TaskPriority.NORMAL, 2),
    else_=3,
)


class TaskRepository(Repository[Task]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Task, session)

    async def search(
        self,
        status: TaskStatus | None = None,
        assignee_id: uuid.UUID | None = None,
        video_id: uuid.UUID | None = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[Task]:
        """List tasks by priority (urgent first), then due date, then age."""
        filters = []
        if status is not None:
            filters.append(Task.status == status)
        if assignee_id is not None:
            filters.append(Task.assignee_id == assignee_id)
        if video_id is not None:
            filters.append(Task.video_id == video_id)

        return await self.list_all(
            offset=offset,
            limit=limit,
            filters=filters,
            order_by=[_PRIORITY_ORDER, Task.due_date.is_(None), Task.due_date, Task.created_at],
        )

    async def get_open_for_assignee(self, assignee_id: uuid.UUID) -> list[Task]:
        result = await self.session.execute(
            select(Task)
            .where(
                Task.assignee_id == assignee_id,
                Task.status.in_(OPEN_TASK_STATUSES),
            )
            .order_by(_PRIORITY_ORDER, Task.created_at)
        )
        return list(result.scalars().all())


class TaskCommentRepository(Repository[TaskComment]):
    entity_name = "TaskComment"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(TaskComment, session)

    async def list_for_task(self, task_id: uuid.UUID) -> list[TaskComment]:
        """All comments on a task in posting order (replies carry parent_id)."""
        result = await self.session.execute(
            select(TaskComment)
            .where(TaskComment.task_id == task_id)
            .order_by(TaskComment.created_at, TaskComment.id)
        )
        return list(result.scalars().all())
