"""
State repository - database operations for State.
"""

from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from task_management.models.state import State
from task_management.models.task import Task
from task_management.utils.time import utc_now


class StateRepository:
    """Repository for State database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[State]:
        """List all states ordered by name."""
        result = await self.db.execute(select(State).order_by(State.name.asc(), State.id.asc()))
        return list(result.scalars().all())

    async def get_by_id(self, state_id: int) -> Optional[State]:
        """Get a state by ID."""
        return await self.db.get(State, state_id)

    async def create(self, state: State) -> State:
        """Insert a new state; both timestamps are set to the same instant."""
        now = utc_now()
        state.created_at = now
        state.updated_at = now
        self.db.add(state)
        await self.db.flush()
        return state

    async def update(self, state: State) -> State:
        """Persist changes to a loaded state and refresh updated_at."""
        state.updated_at = utc_now()
        await self.db.flush()
        return state

    async def delete(self, state_id: int) -> bool:
        """Delete a state. Returns False when it does not exist."""
        result = await self.db.execute(delete(State).where(State.id == state_id))
        return result.rowcount > 0

    async def name_exists(self, name: str) -> bool:
        """Case-insensitive exact match on the state name."""
        result = await self.db.execute(
            select(select(State.id).where(func.lower(State.name) == name.lower()).exists())
        )
        return bool(result.scalar())

    async def has_tasks(self, state_id: int) -> bool:
        """True when at least one task references the state."""
        result = await self.db.execute(
            select(select(Task.id).where(Task.state_id == state_id).exists())
        )
        return bool(result.scalar())
