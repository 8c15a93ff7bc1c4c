"""
Process Orchestrator.

Stateless domain service that sequences operations across processes,
steps and executions through the persistence boundary.

Every operation follows the same shape:
1. Load what it needs through the unit of work
2. Validate (all checks before any write is staged)
3. Stage inserts/updates
4. Commit (last step, so a failure leaves nothing behind)
"""
import logging
from typing import List, Optional

from ..entities import Process, ProcessExecution, ProcessStep
from ..exceptions import ConflictError, NotFoundError, ValidationError
from ..repositories import UnitOfWork
from ..entities.base import require_text


logger = logging.getLogger(__name__)


class ProcessOrchestrator:
    """
    Coordinates the process/step/execution lifecycle.

    The unit of work is supplied by the caller, which owns its scope
    (``async with uow``) and therefore rollback on failure.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    # =========================================================================
    # DEFINITION
    # =========================================================================

    async def create_process(
        self,
        name: str,
        department_id: Optional[int] = None,
        description: Optional[str] = None,
        created_by_id: Optional[int] = None,
    ) -> Process:
        """
        Create a process definition.

        Raises:
            ValidationError: Empty name
            NotFoundError: Unknown department or creating user
        """
        require_text(name, "Process name is required.")

        if department_id is not None:
            if await self.uow.departments.get_by_id(department_id) is None:
                raise NotFoundError("Department")

        if created_by_id is not None:
            if await self.uow.users.get_by_id(created_by_id) is None:
                raise NotFoundError("CreatedBy user")

        process = Process.create(name, department_id, description, created_by_id)
        await self.uow.processes.insert(process)
        await self.uow.commit()

        logger.info(f"Process created: id={process.id} name={process.name!r}")
        return process

    async def add_step(
        self,
        process_id: int,
        step_name: str,
        order: int,
        assigned_role_id: Optional[int] = None,
    ) -> ProcessStep:
        """
        Append a step to a persisted process.

        Order uniqueness is checked against persisted steps, not the
        loaded aggregate, so a stale aggregate cannot let a duplicate in.

        Raises:
            ValidationError: Empty step name or negative order
            NotFoundError: Unknown process or role
            ConflictError: Order already used by another step
        """
        require_text(step_name, "Step name is required.")

        process = await self.uow.processes.get_by_id(process_id)
        if process is None:
            raise NotFoundError("Process")

        if assigned_role_id is not None:
            if await self.uow.roles.get_by_id(assigned_role_id) is None:
                raise NotFoundError("Role")

        existing = await self.uow.process_steps.get_by_process_id(process_id)
        if any(s.order == order for s in existing):
            logger.warning(f"Duplicate step order {order} rejected for process {process_id}")
            raise ConflictError(
                f"A step with order {order} already exists for process {process_id}."
            )

        step = ProcessStep(process.id, step_name, order, assigned_role_id)
        await self.uow.process_steps.insert(step)
        await self.uow.commit()

        logger.info(f"Step added: id={step.id} process={process_id} order={order}")
        return step

    # =========================================================================
    # EXECUTION
    # =========================================================================

    async def start_execution(
        self,
        process_id: int,
        step_id: int,
        user_id: Optional[int] = None,
    ) -> ProcessExecution:
        """
        Start an execution of one step.

        Raises:
            NotFoundError: Unknown process, step or user
            ValidationError: Step belongs to another process, or user inactive
        """
        process = await self.uow.processes.get_by_id(process_id)
        if process is None:
            raise NotFoundError("Process")

        step = await self.uow.process_steps.get_by_id(step_id)
        if step is None:
            raise NotFoundError("Step")
        if step.process_id != process_id:
            raise ValidationError(
                f"Step {step_id} does not belong to process {process_id}."
            )

        await self._check_user(user_id)

        execution = ProcessExecution(process_id, step.id, user_id)
        execution.start()
        await self.uow.process_executions.insert(execution)
        await self.uow.commit()

        logger.info(
            f"Execution started: id={execution.id} process={process_id} step={step.id}"
        )
        return execution

    async def complete_execution(
        self, execution_id: int, remarks: Optional[str] = None
    ) -> ProcessExecution:
        """
        Complete an execution.

        Raises:
            NotFoundError: Unknown execution
            ValidationError: Execution is cancelled or already completed
        """
        execution = await self._get_execution(execution_id)
        execution.complete(remarks)
        await self.uow.process_executions.update(execution)
        await self.uow.commit()

        logger.info(f"Execution completed: id={execution.id}")
        return execution

    async def cancel_execution(
        self, execution_id: int, remarks: Optional[str] = None
    ) -> ProcessExecution:
        """
        Cancel an execution.

        Raises:
            NotFoundError: Unknown execution
            ValidationError: Execution is completed or already cancelled
        """
        execution = await self._get_execution(execution_id)
        execution.cancel(remarks)
        await self.uow.process_executions.update(execution)
        await self.uow.commit()

        logger.info(f"Execution cancelled: id={execution.id}")
        return execution

    async def advance_to_next_step(
        self,
        current_execution_id: int,
        user_id: Optional[int] = None,
        complete_remarks: Optional[str] = None,
    ) -> Optional[ProcessExecution]:
        """
        Complete the current execution and start the next step, if any.

        The next step is the one with the smallest order strictly greater
        than the current step's order.

        Returns:
            The new STARTED execution, or None at the end of the process

        Raises:
            NotFoundError: Unknown execution or user, or the current step
                is no longer in the process definition
            ValidationError: Current execution cannot be completed, or
                user inactive
        """
        current = await self._get_execution(current_execution_id)
        await self._check_user(user_id)

        steps = self._sorted(await self.uow.process_steps.get_by_process_id(current.process_id))
        current_step = next((s for s in steps if s.id == current.step_id), None)
        if current_step is None:
            logger.error(
                f"Execution {current.id} references step {current.step_id} "
                f"missing from process {current.process_id}"
            )
            raise NotFoundError("Step", "Current step not found in process definition.")

        current.complete(complete_remarks)
        await self.uow.process_executions.update(current)

        next_step = next((s for s in steps if s.order > current_step.order), None)
        if next_step is None:
            await self.uow.commit()
            logger.info(
                f"Execution {current.id} completed; process {current.process_id} has no next step"
            )
            return None

        following = ProcessExecution(current.process_id, next_step.id, user_id)
        following.start()
        await self.uow.process_executions.insert(following)
        await self.uow.commit()

        logger.info(
            f"Advanced process {current.process_id}: step {current_step.id} -> {next_step.id} "
            f"(execution {current.id} -> {following.id})"
        )
        return following

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _get_execution(self, execution_id: int) -> ProcessExecution:
        execution = await self.uow.process_executions.get_by_id(execution_id)
        if execution is None:
            raise NotFoundError("Execution")
        return execution

    async def _check_user(self, user_id: Optional[int]) -> None:
        if user_id is None:
            return
        user = await self.uow.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User")
        if not user.is_active:
            logger.warning(f"Inactive user {user_id} rejected")
            raise ValidationError("User is inactive.")

    @staticmethod
    def _sorted(steps: List[ProcessStep]) -> List[ProcessStep]:
        return sorted(steps, key=lambda s: s.order)
