"""State service rules on a real (SQLite) database."""

import pytest

from task_management.errors import StateInUseError, StateNameConflictError, StateNotFoundError
from task_management.models.state import State
from task_management.repositories.state_repository import StateRepository
from task_management.services.state_service import StateService
from task_management.services.task_service import TaskData, TaskService


async def test_create_state_trims_name_and_sets_timestamps(db_session):
    service = StateService(db_session)

    state = await service.create_state("  Pendiente ")
    await db_session.commit()

    assert state.id is not None
    assert state.name == "Pendiente"
    assert state.created_at == state.updated_at


async def test_state_names_are_unique_ignoring_case(db_session):
    service = StateService(db_session)
    await service.create_state("Pendiente")
    await db_session.commit()

    with pytest.raises(StateNameConflictError):
        await service.create_state("pendiente")


async def test_concurrent_duplicate_is_reported_as_conflict(db_session, monkeypatch):
    service = StateService(db_session)
    await service.create_state("Pendiente")
    await db_session.commit()

    async def name_is_free(self, name):
        return False

    monkeypatch.setattr(StateRepository, "name_exists", name_is_free)

    with pytest.raises(StateNameConflictError):
        await service.create_state("PENDIENTE")
    await db_session.rollback()

    assert [state.name for state in await service.list_states()] == ["Pendiente"]


async def test_list_states_is_ordered_by_name(db_session):
    service = StateService(db_session)
    for name in ("Pendiente", "Completado", "En Progreso"):
        await service.create_state(name)
    await db_session.commit()

    assert [state.name for state in await service.list_states()] == ["Completado", "En Progreso", "Pendiente"]


async def test_update_state_renames(db_session):
    service = StateService(db_session)
    state = await service.create_state("Pendiente")
    await db_session.commit()

    updated = await service.update_state(state.id, "Bloqueado")
    await db_session.commit()

    assert updated.name == "Bloqueado"
    assert (await service.get_state(state.id)).name == "Bloqueado"


async def test_update_state_allows_case_change_of_own_name(db_session):
    service = StateService(db_session)
    state = await service.create_state("pendiente")
    await db_session.commit()

    updated = await service.update_state(state.id, "Pendiente")
    assert updated.name == "Pendiente"


async def test_update_state_rejects_name_of_other_state(db_session):
    service = StateService(db_session)
    await service.create_state("Pendiente")
    other = await service.create_state("Completado")
    await db_session.commit()

    with pytest.raises(StateNameConflictError):
        await service.update_state(other.id, "PENDIENTE")


async def test_update_missing_state_raises_not_found(db_session):
    with pytest.raises(StateNotFoundError):
        await StateService(db_session).update_state(999, "Nuevo")


async def test_delete_unused_state(db_session):
    service = StateService(db_session)
    state = await service.create_state("Pendiente")
    await db_session.commit()

    assert await service.delete_state(state.id)
    await db_session.commit()
    assert await service.get_state(state.id) is None


async def test_delete_missing_state_returns_false(db_session):
    assert not await StateService(db_session).delete_state(999)


async def test_delete_state_in_use_raises_conflict_and_keeps_it(db_session):
    service = StateService(db_session)
    state = await service.create_state("Pendiente")
    await TaskService(db_session).create_task(TaskData(title="Write report", state_id=state.id))
    await db_session.commit()

    with pytest.raises(StateInUseError):
        await service.delete_state(state.id)

    assert await db_session.get(State, state.id) is not None


async def test_foreign_key_violation_on_delete_is_reported_as_in_use(db_session, monkeypatch):
    service = StateService(db_session)
    state = await service.create_state("Pendiente")
    await TaskService(db_session).create_task(TaskData(title="Write report", state_id=state.id))
    await db_session.commit()

    async def no_tasks(self, state_id):
        return False

    monkeypatch.setattr(StateRepository, "has_tasks", no_tasks)

    state_id = state.id
    with pytest.raises(StateInUseError):
        await service.delete_state(state_id)
    # rollback expires every loaded instance
    await db_session.rollback()

    assert await service.get_state(state_id) is not None
