"""
State router - API endpoints for task states.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_management.core.dependencies import get_current_user, get_db
from task_management.errors import StateNotFoundError
from task_management.schemas.mappers import to_state_read, to_state_reads
from task_management.schemas.state import StateInput, StateRead
from task_management.services.state_service import StateService
from task_management.validators import ensure_valid, validate_state_input

router = APIRouter(
    prefix="/states",
    tags=["States"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[StateRead])
async def list_states(db: AsyncSession = Depends(get_db)):
    """List all states ordered by name."""
    service = StateService(db)
    return to_state_reads(await service.list_states())


@router.get("/{state_id}", response_model=StateRead)
async def get_state(state_id: int, db: AsyncSession = Depends(get_db)):
    """Get a state by ID."""
    service = StateService(db)
    state = await service.get_state(state_id)
    if state is None:
        raise StateNotFoundError(state_id)
    return to_state_read(state)


@router.post("", response_model=StateRead, status_code=status.HTTP_201_CREATED)
async def create_state(data: StateInput, db: AsyncSession = Depends(get_db)):
    """Create a state. Names are unique ignoring case."""
    ensure_valid(validate_state_input(data))
    service = StateService(db)
    state = await service.create_state(data.name)
    await db.commit()
    return to_state_read(state)


@router.put("/{state_id}", response_model=StateRead)
async def update_state(state_id: int, data: StateInput, db: AsyncSession = Depends(get_db)):
    """Rename a state."""
    ensure_valid(validate_state_input(data))
    service = StateService(db)
    state = await service.update_state(state_id, data.name)
    await db.commit()
    return to_state_read(state)


@router.delete("/{state_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_state(state_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a state that no task uses."""
    service = StateService(db)
    if not await service.delete_state(state_id):
        raise StateNotFoundError(state_id)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
