"""
State business logic service.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from task_management.errors import StateInUseError, StateNameConflictError, StateNotFoundError
from task_management.models.state import State
from task_management.repositories.state_repository import StateRepository

logger = logging.getLogger(__name__)


class StateService:
    """Service for state business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = StateRepository(db)

    async def list_states(self) -> List[State]:
        """List states ordered by name."""
        return await self.repository.list()

    async def get_state(self, state_id: int) -> Optional[State]:
        """Get a state by ID."""
        return await self.repository.get_by_id(state_id)

    async def create_state(self, name: str) -> State:
        """
        Create a state.

        Raises:
            StateNameConflictError: a state with the same name (ignoring case) exists
        """
        name = name.strip()
        if await self.repository.name_exists(name):
            raise StateNameConflictError(name)

        try:
            state = await self.repository.create(State(name=name))
        except IntegrityError as exc:
            # Lost a race with a concurrent insert of the same name
            raise StateNameConflictError(name) from exc

        logger.info("Created state %s (%r)", state.id, state.name)
        return state

    async def update_state(self, state_id: int, name: str) -> State:
        """
        Rename a state.

        Raises:
            StateNotFoundError: no state with that ID
            StateNameConflictError: another state already owns the name
        """
        name = name.strip()
        state = await self.repository.get_by_id(state_id)
        if state is None:
            raise StateNotFoundError(state_id)

        # Renaming to a case variant of its own name is allowed
        if state.name.lower() != name.lower() and await self.repository.name_exists(name):
            raise StateNameConflictError(name)

        state.name = name
        try:
            return await self.repository.update(state)
        except IntegrityError as exc:
            raise StateNameConflictError(name) from exc

    async def delete_state(self, state_id: int) -> bool:
        """
        Delete a state.

        Returns False when the state does not exist.

        Raises:
            StateInUseError: tasks still reference the state
        """
        state = await self.repository.get_by_id(state_id)
        if state is None:
            return False

        if await self.repository.has_tasks(state_id):
            raise StateInUseError(state_id)

        try:
            deleted = await self.repository.delete(state_id)
        except IntegrityError as exc:
            # A task was assigned between the check and the delete
            raise StateInUseError(state_id) from exc

        logger.info("Deleted state %s", state_id)
        return deleted
