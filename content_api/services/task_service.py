"""Task workflow: creation, assignment, status transitions and comments.

Status transitions are enforced by ``Task.validate_status_change``; this
service adds the side effects:
- entering ``done`` stamps ``completed_at``
- leaving ``done`` (reopen) clears it

Architecture:
- Assignees must be active users
- Comment replies must belong to the same task as their parent
- Only the creator, an admin or a manager may delete a task
"""

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from content_api.models import (
    Task,
    TaskComment,
    TaskStatus,
    User,
    UserRole,
    Video,
    utcnow,
)
from content_api.repositories import (
    Repository,
    TaskCommentRepository,
    TaskRepository,
    UserRepository,
)
from content_api.schemas.task import CommentCreate, TaskCreate, TaskUpdate

log = structlog.get_logger(__name__)

TASK_ADMIN_ROLES = (UserRole.ADMIN, UserRole.MANAGER)


class TaskService:
    def __init__(self, session: AsyncSession) -> None:
        self.tasks = TaskRepository(session)
        self.comments = TaskCommentRepository(session)
        self.users = UserRepository(session)
        self.videos = Repository(Video, session)

    async def _get_assignable_user(self, user_id: uuid.UUID) -> User:
        user = await self.users.get_or_raise(user_id)
        if not user.is_active:
            raise ConflictError(f"User is inactive and cannot be assigned: {user_id}")
        return user

    async def list_tasks(
        self,
        status: TaskStatus | None = None,
        assignee_id: uuid.UUID | None = None,
        video_id: uuid.UUID | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> list[Task]:
        return await self.tasks.search(
            status=status,
            assignee_id=assignee_id,
            video_id=video_id,
            offset=offset,
            limit=limit,
        )

    async def list_open_tasks_for(self, user_id: uuid.UUID) -> list[Task]:
        return await self.tasks.get_open_for_assignee(user_id)

    async def get_task(self, task_id: uuid.UUID) -> Task:
        return await self.tasks.get_or_raise(task_id)

    async def create_task(self, data: TaskCreate, created_by_id: uuid.UUID) -> Task:
        """Create a task in ``todo``.

        Raises:
            NotFoundError: If the assignee or video does not exist.
            ConflictError: If the assignee is inactive.
        """
        if data.assignee_id is not None:
            await self._get_assignable_user(data.assignee_id)
        if data.video_id is not None:
            await self.videos.get_or_raise(data.video_id)

        task = await self.tasks.add(
            Task(**data.model_dump(), status=TaskStatus.TODO, created_by_id=created_by_id)
        )
        log.info(
            "task_created",
            task_id=str(task.id),
            created_by=str(created_by_id),
            assignee_id=str(task.assignee_id) if task.assignee_id else None,
            priority=task.priority.value,
        )
        return task

    async def update_task(self, task_id: uuid.UUID, data: TaskUpdate) -> Task:
        task = await self.tasks.get_or_raise(task_id)
        values = data.model_dump(exclude_unset=True)
        for required in ("title", "priority"):
            if values.get(required, ...) is None:
                values.pop(required)
        if values.get("video_id") is not None:
            await self.videos.get_or_raise(values["video_id"])
        return await self.tasks.update(task, values)

    async def change_status(self, task_id: uuid.UUID, status: TaskStatus) -> Task:
        """Move a task to a new status.

        Raises:
            InvalidStateTransitionError: If the transition is not allowed.
        """
        task = await self.tasks.get_or_raise(task_id)
        previous = task.status

        values: dict = {"status": status}
        if status == TaskStatus.DONE:
            values["completed_at"] = utcnow()
        elif previous == TaskStatus.DONE:
            values["completed_at"] = None

        task = await self.tasks.update(task, values)
        log.info(
            "task_status_changed",
            task_id=str(task.id),
            from_status=previous.value,
            to_status=status.value,
        )
        return task

    async def assign_task(self, task_id: uuid.UUID, assignee_id: uuid.UUID | None) -> Task:
        task = await self.tasks.get_or_raise(task_id)
        if assignee_id is not None:
            await self._get_assignable_user(assignee_id)

        task = await self.tasks.update(task, {"assignee_id": assignee_id})
        log.info(
            "task_assigned",
            task_id=str(task.id),
            assignee_id=str(assignee_id) if assignee_id else None,
        )
        return task

    async def delete_task(self, task_id: uuid.UUID, user_id: uuid.UUID, role: UserRole) -> None:
        """Delete a task and its comments.

        Raises:
            PermissionDeniedError: If the caller is neither the creator nor
                an admin or manager.
        """
        task = await self.tasks.get_or_raise(task_id)
        if task.created_by_id != user_id and role not in TASK_ADMIN_ROLES:
            raise PermissionDeniedError("Only the creator or a manager can delete this task")
        await self.tasks.delete(task)
        log.info("task_deleted", task_id=str(task_id), deleted_by=str(user_id))

    async def list_comments(self, task_id: uuid.UUID) -> list[TaskComment]:
        await self.tasks.get_or_raise(task_id)
        return await self.comments.list_for_task(task_id)

    async def add_comment(
        self, task_id: uuid.UUID, author_id: uuid.UUID, data: CommentCreate
    ) -> TaskComment:
        """Post a comment or a reply.

        Raises:
            NotFoundError: If the task, or the parent comment on this task,
                does not exist.
        """
        await self.tasks.get_or_raise(task_id)
        if data.parent_id is not None:
            parent = await self.comments.get(data.parent_id)
            if parent is None or parent.task_id != task_id:
                raise NotFoundError("TaskComment", data.parent_id)

        comment = await self.comments.add(
            TaskComment(
                task_id=task_id,
                author_id=author_id,
                parent_id=data.parent_id,
                body=data.body,
            )
        )
        log.info("task_comment_added", task_id=str(task_id), comment_id=str(comment.id))
        return comment
