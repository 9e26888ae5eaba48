"""
Task business logic service.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from task_management.errors import StateNotFoundError, TaskNotFoundError
from task_management.models.state import State
from task_management.models.task import Task
from task_management.repositories.state_repository import StateRepository
from task_management.repositories.task_repository import TaskRepository
from task_management.utils.time import as_utc

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class TaskPage:
    items: List[Task]
    total_count: int
    page: int
    page_size: int


@dataclass
class TaskData:
    """Values written to a task on create or full update."""

    title: str
    state_id: int
    description: Optional[str] = None
    due_date: Optional[datetime] = None


def normalize_paging(page: int, page_size: int) -> tuple[int, int]:
    """Pages start at 1; page size is clamped to [1, MAX_PAGE_SIZE]."""
    return max(page, 1), min(max(page_size, 1), MAX_PAGE_SIZE)


class TaskService:
    """Service for task business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = TaskRepository(db)
        self.state_repository = StateRepository(db)

    async def list_tasks(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        state_id: Optional[int] = None,
        due_date: Optional[datetime] = None,
    ) -> TaskPage:
        """
        List tasks newest first with pagination metadata.

        The page and the total are read by two separate queries, so the count
        can drift from the items if rows change in between.
        """
        page, page_size = normalize_paging(page, page_size)
        items = await self.repository.list(
            page=page,
            page_size=page_size,
            state_id=state_id,
            due_date=due_date,
        )
        total_count = await self.repository.count(state_id=state_id, due_date=due_date)
        return TaskPage(items=items, total_count=total_count, page=page, page_size=page_size)

    async def get_task(self, task_id: int) -> Optional[Task]:
        """Get a task by ID."""
        return await self.repository.get_by_id(task_id)

    async def _require_state(self, state_id: int) -> State:
        state = await self.state_repository.get_by_id(state_id)
        if state is None:
            raise StateNotFoundError(state_id)
        return state

    async def create_task(self, data: TaskData) -> Task:
        """
        Create a task in an existing state.

        Raises:
            StateNotFoundError: the referenced state does not exist
        """
        state = await self._require_state(data.state_id)

        task = Task(
            title=data.title,
            description=data.description,
            due_date=as_utc(data.due_date) if data.due_date else None,
            state=state,
        )
        try:
            task = await self.repository.create(task)
        except IntegrityError as exc:
            # The state was deleted between the lookup and the insert
            raise StateNotFoundError(data.state_id) from exc

        logger.info("Created task %s in state %s", task.id, state.id)
        return task

    async def update_task(self, task_id: int, data: TaskData) -> Task:
        """
        Replace a task's title, description, due date and state.

        Raises:
            TaskNotFoundError: no task with that ID
            StateNotFoundError: the referenced state does not exist
        """
        task = await self.repository.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        state = await self._require_state(data.state_id)

        task.title = data.title
        task.description = data.description
        task.due_date = as_utc(data.due_date) if data.due_date else None
        task.state = state
        try:
            return await self.repository.update(task)
        except IntegrityError as exc:
            raise StateNotFoundError(data.state_id) from exc

    async def delete_task(self, task_id: int) -> bool:
        """Delete a task. Returns False when it does not exist."""
        deleted = await self.repository.delete(task_id)
        if deleted:
            logger.info("Deleted task %s", task_id)
        return deleted

    async def list_states(self) -> List[State]:
        """States available for assignment, ordered by name."""
        return await self.state_repository.list()
