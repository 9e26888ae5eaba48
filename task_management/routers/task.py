"""
Task router - API endpoints for tasks.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_management.core.dependencies import get_current_user, get_db
from task_management.errors import InvalidInputError, StateNotFoundError, TaskNotFoundError
from task_management.schemas.base import PagedResult
from task_management.schemas.mappers import to_state_reads, to_task_page, to_task_read
from task_management.schemas.state import StateRead
from task_management.schemas.task import TaskInput, TaskRead
from task_management.services.task_service import DEFAULT_PAGE_SIZE, TaskData, TaskService
from task_management.validators import ensure_valid, validate_task_input

router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
    dependencies=[Depends(get_current_user)],
)


def _task_data(data: TaskInput) -> TaskData:
    ensure_valid(validate_task_input(data))
    return TaskData(
        title=data.title,
        description=data.description,
        due_date=data.due_date,
        state_id=data.state_id,
    )


@router.get("", response_model=PagedResult[TaskRead])
async def list_tasks(
    db: AsyncSession = Depends(get_db),
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    state_id: Optional[int] = Query(None, alias="stateId"),
    due_date: Optional[datetime] = Query(None, alias="dueDate"),
):
    """
    List tasks newest first, one page at a time.

    Filters: stateId (exact), dueDate (same calendar day, time ignored). The
    day is taken in the offset dueDate is written in; without one it is a UTC day.
    page below 1 is treated as 1; pageSize is clamped to 1-100.
    """
    service = TaskService(db)
    result = await service.list_tasks(
        page=page,
        page_size=page_size,
        state_id=state_id,
        due_date=due_date,
    )
    return to_task_page(result)


# Declared before /{task_id} so "states" is not parsed as an ID
@router.get("/states", response_model=List[StateRead])
async def list_task_states(db: AsyncSession = Depends(get_db)):
    """States that can be assigned to tasks (same data as GET /states)."""
    service = TaskService(db)
    return to_state_reads(await service.list_states())


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(task_id: int, db: AsyncSession = Depends(get_db)):
    """Get a task by ID."""
    service = TaskService(db)
    task = await service.get_task(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return to_task_read(task)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(data: TaskInput, db: AsyncSession = Depends(get_db)):
    """Create a new task. The referenced state must exist."""
    service = TaskService(db)
    try:
        task = await service.create_task(_task_data(data))
    except StateNotFoundError as exc:
        # An unknown state is a problem with the request body here
        raise InvalidInputError(exc.message) from exc
    await db.commit()
    return to_task_read(task)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(task_id: int, data: TaskInput, db: AsyncSession = Depends(get_db)):
    """Replace a task's title, description, due date and state."""
    service = TaskService(db)
    task = await service.update_task(task_id, _task_data(data))
    await db.commit()
    return to_task_read(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a task permanently."""
    service = TaskService(db)
    if not await service.delete_task(task_id):
        raise TaskNotFoundError(task_id)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
