"""Tests for ProcessApplicationService and its DTOs."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from bpm_core.application.dtos import (
    AddStepRequest,
    AdvanceExecutionRequest,
    CreateProcessRequest,
    ProcessExecutionDTO,
    StartExecutionRequest,
)
from bpm_core.application.services import ProcessApplicationService
from bpm_core.data.uow import create_uow
from bpm_core.domain.entities import Department, User
from bpm_core.domain.enums import ExecutionStatus
from bpm_core.domain.exceptions import ConflictError, NotFoundError, ValidationError
from bpm_core.infrastructure.adapters.persistence import InMemoryUnitOfWork


@pytest.fixture
def service(store):
    return ProcessApplicationService(lambda: InMemoryUnitOfWork(store))


async def build_onboarding(service):
    process = await service.create_process(CreateProcessRequest(name="Onboarding", department_id=1))
    first = await service.add_step(process.id, AddStepRequest(name="Collect documents", order=1))
    second = await service.add_step(process.id, AddStepRequest(name="Manager approval", order=2))
    return process, first, second


# =============================================================================
# Commands
# =============================================================================

@pytest.mark.asyncio
async def test_create_process_returns_dto(service):
    dto = await service.create_process(
        CreateProcessRequest(name="Onboarding", department_id=1, created_by_id=1)
    )

    assert dto.id == 1
    assert dto.name == "Onboarding"
    assert dto.department_id == 1
    assert dto.steps == []


@pytest.mark.asyncio
async def test_full_lifecycle(service):
    process, first, second = await build_onboarding(service)

    started = await service.start_execution(process.id, StartExecutionRequest(step_id=first.id, user_id=1))
    assert started.status == "Started"
    assert started.status_value == ExecutionStatus.STARTED

    following = await service.advance(started.id, AdvanceExecutionRequest(remarks="done"))
    assert following.step_id == second.id
    assert following.status == "Started"

    finished = await service.advance(following.id, AdvanceExecutionRequest())
    assert finished is None

    executions = await service.list_executions(process.id)
    assert [e.status for e in executions] == ["Completed", "Completed"]
    assert executions[0].remarks == "done"


@pytest.mark.asyncio
async def test_complete_and_cancel(service):
    process, first, second = await build_onboarding(service)
    a = await service.start_execution(process.id, StartExecutionRequest(step_id=first.id))
    b = await service.start_execution(process.id, StartExecutionRequest(step_id=second.id))

    completed = await service.complete_execution(a.id, "ok")
    cancelled = await service.cancel_execution(b.id, "stop")

    assert completed.status == "Completed"
    assert completed.remarks == "ok"
    assert cancelled.status == "Cancelled"
    assert cancelled.completed_at is not None


@pytest.mark.asyncio
async def test_duplicate_order_conflict_leaves_state(service):
    process, _, _ = await build_onboarding(service)

    with pytest.raises(ConflictError):
        await service.add_step(process.id, AddStepRequest(name="Again", order=2))

    steps = await service.list_steps(process.id)
    assert [s.order for s in steps] == [1, 2]


@pytest.mark.asyncio
async def test_domain_errors_propagate(service, store):
    process, first, _ = await build_onboarding(service)

    with pytest.raises(ValidationError, match="User is inactive."):
        await service.start_execution(process.id, StartExecutionRequest(step_id=first.id, user_id=2))
    with pytest.raises(NotFoundError):
        await service.complete_execution(99)

    assert store.tables["process_executions"] == {}


# =============================================================================
# Queries
# =============================================================================

@pytest.mark.asyncio
async def test_get_process_includes_ordered_steps(service):
    process = await service.create_process(CreateProcessRequest(name="Sparse"))
    await service.add_step(process.id, AddStepRequest(name="Later", order=20))
    await service.add_step(process.id, AddStepRequest(name="Sooner", order=10))

    dto = await service.get_process(process.id)

    assert [s.name for s in dto.steps] == ["Sooner", "Later"]


@pytest.mark.asyncio
async def test_get_process_not_found(service):
    with pytest.raises(NotFoundError) as exc_info:
        await service.get_process(1)
    assert exc_info.value.entity == "Process"


@pytest.mark.asyncio
async def test_list_processes_by_department(service):
    await service.create_process(CreateProcessRequest(name="Onboarding", department_id=1))
    await service.create_process(CreateProcessRequest(name="Unowned"))

    assert len(await service.list_processes()) == 2
    assert [p.name for p in await service.list_processes(department_id=1)] == ["Onboarding"]


# =============================================================================
# SQLAlchemy backed
# =============================================================================

@pytest.mark.asyncio
async def test_service_over_sqlalchemy(test_session_factory):
    async with create_uow(test_session_factory) as uow:
        await uow.departments.insert(Department("Human Resources"))
        await uow.users.insert(User("alice", department_id=1))
        await uow.commit()

    service = ProcessApplicationService.from_session_factory(test_session_factory)
    process, first, second = await build_onboarding(service)
    started = await service.start_execution(process.id, StartExecutionRequest(step_id=first.id, user_id=1))
    following = await service.advance(started.id, AdvanceExecutionRequest(user_id=1))

    assert following.step_id == second.id
    reloaded = await service.get_process(process.id)
    assert [s.id for s in reloaded.steps] == [first.id, second.id]
    statuses = {e.id: e.status for e in await service.list_executions(process.id)}
    assert statuses == {started.id: "Completed", following.id: "Started"}


# =============================================================================
# DTOs
# =============================================================================

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize("raw, label", [
    ("completed", "Completed"),
    (" STARTED ", "Started"),
    (0, "Pending"),
    ("3", "Cancelled"),
    (ExecutionStatus.CANCELLED, "Cancelled"),
])
def test_execution_dto_canonical_status(raw, label):
    dto = ProcessExecutionDTO(id=1, process_id=1, step_id=1, status=raw, created_at=NOW)
    assert dto.status == label


@pytest.mark.parametrize("raw", ["Paused", 7, ""])
def test_execution_dto_rejects_unknown_status(raw):
    with pytest.raises(PydanticValidationError):
        ProcessExecutionDTO(id=1, process_id=1, step_id=1, status=raw, created_at=NOW)


def test_requests_validate_ids():
    with pytest.raises(PydanticValidationError):
        StartExecutionRequest(step_id=0)
    with pytest.raises(PydanticValidationError):
        AddStepRequest(name="X", order=-1)
