"""
Explicit conversions from ORM entities to response schemas.
"""

from typing import Iterable, List, TYPE_CHECKING

from task_management.models.state import State
from task_management.models.task import Task
from task_management.schemas.base import PagedResult
from task_management.schemas.state import StateRead
from task_management.schemas.task import TaskRead

if TYPE_CHECKING:
    from task_management.services.task_service import TaskPage


def to_state_read(state: State) -> StateRead:
    return StateRead(
        id=state.id,
        name=state.name,
        created_at=state.created_at,
        updated_at=state.updated_at,
    )


def to_state_reads(states: Iterable[State]) -> List[StateRead]:
    return [to_state_read(state) for state in states]


def to_task_read(task: Task) -> TaskRead:
    """The task's state must already be loaded."""
    return TaskRead(
        id=task.id,
        title=task.title,
        description=task.description,
        due_date=task.due_date,
        state_id=task.state_id,
        state_name=task.state.name,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def to_task_page(page: "TaskPage") -> PagedResult[TaskRead]:
    return PagedResult[TaskRead](
        items=[to_task_read(task) for task in page.items],
        total_count=page.total_count,
        page=page.page,
        page_size=page.page_size,
    )
