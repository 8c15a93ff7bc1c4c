"""Application service for process operations."""

from typing import Callable, List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from bpm_core.application.dtos.process_dto import (
    AddStepRequest,
    AdvanceExecutionRequest,
    CreateProcessRequest,
    ProcessDTO,
    ProcessExecutionDTO,
    ProcessStepDTO,
    StartExecutionRequest,
)
from bpm_core.data.uow import create_uow
from bpm_core.domain.exceptions import NotFoundError
from bpm_core.domain.repositories import UnitOfWork
from bpm_core.domain.services import ProcessOrchestrator
from bpm_core.infrastructure.logging import get_logger


logger = get_logger(__name__)


class ProcessApplicationService:
    """
    Application service for process definitions and executions.

    Responsibilities:
    - Open one unit of work per call (rolled back on any error)
    - Delegate lifecycle rules to ProcessOrchestrator
    - Transform domain entities to DTOs
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        """Initialize process application service.

        Args:
            uow_factory: Zero-argument callable returning a fresh UnitOfWork
        """
        self._uow_factory = uow_factory

    @classmethod
    def from_session_factory(cls, session_factory: async_sessionmaker) -> "ProcessApplicationService":
        """Build a service backed by SQLAlchemy units of work."""
        return cls(lambda: create_uow(session_factory))

    # =========================================================================
    # COMMANDS
    # =========================================================================

    async def create_process(self, request: CreateProcessRequest) -> ProcessDTO:
        async with self._uow_factory() as uow:
            process = await ProcessOrchestrator(uow).create_process(
                name=request.name,
                department_id=request.department_id,
                description=request.description,
                created_by_id=request.created_by_id,
            )
            return ProcessDTO.from_entity(process)

    async def add_step(self, process_id: int, request: AddStepRequest) -> ProcessStepDTO:
        async with self._uow_factory() as uow:
            step = await ProcessOrchestrator(uow).add_step(
                process_id=process_id,
                step_name=request.name,
                order=request.order,
                assigned_role_id=request.assigned_role_id,
            )
            return ProcessStepDTO.from_entity(step)

    async def start_execution(
        self, process_id: int, request: StartExecutionRequest
    ) -> ProcessExecutionDTO:
        async with self._uow_factory() as uow:
            execution = await ProcessOrchestrator(uow).start_execution(
                process_id=process_id,
                step_id=request.step_id,
                user_id=request.user_id,
            )
            return ProcessExecutionDTO.from_entity(execution)

    async def complete_execution(
        self, execution_id: int, remarks: Optional[str] = None
    ) -> ProcessExecutionDTO:
        async with self._uow_factory() as uow:
            execution = await ProcessOrchestrator(uow).complete_execution(execution_id, remarks)
            return ProcessExecutionDTO.from_entity(execution)

    async def cancel_execution(
        self, execution_id: int, remarks: Optional[str] = None
    ) -> ProcessExecutionDTO:
        async with self._uow_factory() as uow:
            execution = await ProcessOrchestrator(uow).cancel_execution(execution_id, remarks)
            return ProcessExecutionDTO.from_entity(execution)

    async def advance(
        self, execution_id: int, request: AdvanceExecutionRequest
    ) -> Optional[ProcessExecutionDTO]:
        """Complete an execution and start the next step.

        Returns:
            DTO of the new execution, or None when the process is finished
        """
        async with self._uow_factory() as uow:
            following = await ProcessOrchestrator(uow).advance_to_next_step(
                execution_id,
                user_id=request.user_id,
                complete_remarks=request.remarks,
            )
            if following is None:
                logger.info(f"Execution {execution_id} was the last step of its process")
                return None
            return ProcessExecutionDTO.from_entity(following)

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_process(self, process_id: int) -> ProcessDTO:
        async with self._uow_factory() as uow:
            process = await uow.processes.get_by_id(process_id)
            if process is None:
                raise NotFoundError("Process")
            return ProcessDTO.from_entity(process)

    async def list_processes(self, department_id: Optional[int] = None) -> List[ProcessDTO]:
        async with self._uow_factory() as uow:
            if department_id is None:
                processes = await uow.processes.get_all()
            else:
                processes = await uow.processes.get_by_department(department_id)
            return [ProcessDTO.from_entity(p) for p in processes]

    async def list_steps(self, process_id: int) -> List[ProcessStepDTO]:
        async with self._uow_factory() as uow:
            steps = await uow.process_steps.get_by_process_id(process_id)
            return [ProcessStepDTO.from_entity(s) for s in sorted(steps, key=lambda s: s.order)]

    async def list_executions(self, process_id: int) -> List[ProcessExecutionDTO]:
        async with self._uow_factory() as uow:
            executions = await uow.process_executions.get_by_process(process_id)
            return [ProcessExecutionDTO.from_entity(e) for e in executions]
