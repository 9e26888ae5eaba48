"""
Task repository - database operations for Task.
"""

from datetime import datetime, time, timedelta, timezone
from typing import List, Optional

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from task_management.models.task import Task
from task_management.utils.time import as_utc, utc_now


def _apply_filters(
    query: Select,
    state_id: Optional[int] = None,
    due_date: Optional[datetime] = None,
) -> Select:
    """
    Filter on state and on the calendar day of the due date.

    The day is the one written by the caller, in the caller's offset; a
    naive value names a UTC day.
    """
    if state_id is not None:
        query = query.where(Task.state_id == state_id)
    if due_date is not None:
        local_start = datetime.combine(due_date.date(), time.min, tzinfo=due_date.tzinfo or timezone.utc)
        # Stored due dates are UTC
        day_start = as_utc(local_start)
        query = query.where(
            Task.due_date >= day_start,
            Task.due_date < day_start + timedelta(days=1),
        )
    return query


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(
        self,
        page: int = 1,
        page_size: int = 10,
        state_id: Optional[int] = None,
        due_date: Optional[datetime] = None,
    ) -> List[Task]:
        """List tasks newest first, one page at a time."""
        query = _apply_filters(
            select(Task).options(joinedload(Task.state)),
            state_id=state_id,
            due_date=due_date,
        )
        query = (
            query.order_by(Task.created_at.desc(), Task.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count(
        self,
        state_id: Optional[int] = None,
        due_date: Optional[datetime] = None,
    ) -> int:
        """Count tasks matching the same filters as list()."""
        query = _apply_filters(
            select(func.count()).select_from(Task),
            state_id=state_id,
            due_date=due_date,
        )
        result = await self.db.execute(query)
        return result.scalar_one()

    async def get_by_id(self, task_id: int) -> Optional[Task]:
        """Get a task by ID together with its state."""
        result = await self.db.execute(
            select(Task)
            .options(joinedload(Task.state))
            .where(Task.id == task_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(self, task: Task) -> Task:
        """Insert a new task; both timestamps are set to the same instant."""
        now = utc_now()
        task.created_at = now
        task.updated_at = now
        self.db.add(task)
        await self.db.flush()
        return task

    async def update(self, task: Task) -> Task:
        """Persist changes to a loaded task and refresh updated_at."""
        task.updated_at = utc_now()
        await self.db.flush()
        return task

    async def delete(self, task_id: int) -> bool:
        """Delete a task. Returns False when it does not exist."""
        result = await self.db.execute(delete(Task).where(Task.id == task_id))
        return result.rowcount > 0
