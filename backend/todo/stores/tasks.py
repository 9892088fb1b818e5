from datetime import datetime
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from todo.models.task import Task

class TaskStore:
    """Queries over the tasks table. Committing is left to the caller."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, task_id: int) -> Optional[Task]:
        return await self.db.get(Task, task_id)

    def add(self, task: Task) -> None:
        self.db.add(task)

    async def delete(self, task: Task) -> None:
        await self.db.delete(task)

    async def list_by_owner(self, owner_id: int, completed: Optional[bool] = None) -> List[Task]:
        query = select(Task).where(Task.user_id == owner_id)
        if completed is not None:
            query = query.where(Task.completed == completed)
        result = await self.db.execute(query.order_by(Task.id))
        return list(result.scalars().all())

    async def list_by_owner_ordered(self, owner_id: int) -> List[Task]:
        result = await self.db.execute(
            select(Task).where(Task.user_id == owner_id).order_by(Task.created_at.desc(), Task.id.desc())
        )
        return list(result.scalars().all())

    async def list_upcoming(self, owner_id: int) -> List[Task]:
        result = await self.db.execute(
            select(Task).where(
                Task.user_id == owner_id,
                Task.due_date.is_not(None)
            ).order_by(Task.due_date.asc())
        )
        return list(result.scalars().all())

    async def list_due_reminders(self, before: datetime, owner_id: Optional[int] = None) -> List[Task]:
        query = select(Task).where(
            Task.reminder_time.is_not(None),
            Task.reminder_time < before,
            Task.completed.is_(False)
        )
        if owner_id is not None:
            query = query.where(Task.user_id == owner_id)
        result = await self.db.execute(query.order_by(Task.reminder_time))
        return list(result.scalars().all())
