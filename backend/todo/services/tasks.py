import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from todo.core.errors import AccessDenied, NotFound, ValidationError
from todo.models.task import Task
from todo.schemas.task import TaskUpdate
from todo.schemas.user import SessionIdentity
from todo.stores.tasks import TaskStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def authorize_task_access(task: Task, identity: SessionIdentity) -> Task:
    """Raise AccessDenied unless `identity` owns `task`."""
    if task.user_id != identity.user_id:
        logger.warning(
            "User id=%s denied access to task id=%s owned by user id=%s",
            identity.user_id, task.id, task.user_id
        )
        raise AccessDenied()
    return task


class TaskService:
    """
    Task CRUD for a single owner at a time.

    Ownership is not checked here; callers go through authorize_task_access
    before handing a task id to a mutating method.
    """

    def __init__(self, db: AsyncSession, clock: Clock = datetime.now):
        self.db = db
        self.clock = clock
        self.tasks = TaskStore(db)

    def _stamp(self, task: Task) -> None:
        now = self.clock()
        if task.updated_at is not None and now <= task.updated_at:
            now = task.updated_at + timedelta(microseconds=1)
        task.updated_at = now

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    @staticmethod
    def _clean_title(title: Optional[str]) -> str:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        return title

    async def create_task(
        self,
        owner_id: int,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[datetime] = None,
        reminder_time: Optional[datetime] = None,
    ) -> Task:
        now = self.clock()
        task = Task(
            title=self._clean_title(title),
            description=description or None,
            completed=False,
            due_date=due_date,
            reminder_time=reminder_time,
            created_at=now,
            updated_at=now,
            user_id=owner_id,
        )
        self.tasks.add(task)
        await self._commit()
        await self.db.refresh(task)
        logger.info("Created task id=%s for user id=%s", task.id, owner_id)
        return task

    async def get_task_by_id(self, task_id: int) -> Task:
        task = await self.tasks.get(task_id)
        if task is None:
            raise NotFound(f"Task not found with id: {task_id}")
        return task

    async def update_task(self, task_id: int, changes: TaskUpdate) -> Task:
        task = await self.get_task_by_id(task_id)
        title = self._clean_title(changes.title)

        task.title = title
        task.description = changes.description or None
        task.completed = changes.completed
        task.due_date = changes.due_date
        task.reminder_time = changes.reminder_time
        self._stamp(task)

        await self._commit()
        await self.db.refresh(task)
        logger.info("Updated task id=%s", task.id)
        return task

    async def toggle_completion(self, task_id: int) -> Task:
        task = await self.get_task_by_id(task_id)
        changes = TaskUpdate(
            title=task.title,
            description=task.description,
            completed=not task.completed,
            due_date=task.due_date,
            reminder_time=task.reminder_time,
        )
        return await self.update_task(task_id, changes)

    async def delete_task(self, task_id: int) -> None:
        task = await self.get_task_by_id(task_id)
        await self.tasks.delete(task)
        await self._commit()
        logger.info("Deleted task id=%s", task_id)

    async def get_tasks_by_user(
        self, owner_id: int, ordered: bool = False, completed: Optional[bool] = None
    ) -> List[Task]:
        if ordered:
            tasks = await self.tasks.list_by_owner_ordered(owner_id)
            if completed is not None:
                tasks = [t for t in tasks if t.completed == completed]
            return tasks
        return await self.tasks.list_by_owner(owner_id, completed=completed)

    async def get_upcoming_tasks(self, owner_id: int) -> List[Task]:
        return await self.tasks.list_upcoming(owner_id)

    async def get_due_reminders(self, owner_id: Optional[int] = None) -> List[Task]:
        """Incomplete tasks whose reminder time is before now, across all users unless `owner_id` is given."""
        return await self.tasks.list_due_reminders(self.clock(), owner_id=owner_id)
