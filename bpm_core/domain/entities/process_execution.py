"""
Process execution state machine.

States::

    PENDING --start--> STARTED --complete--> COMPLETED
       |                  |
       +----complete------+
       |                  |
       +-----cancel-------+--cancel--> CANCELLED

COMPLETED and CANCELLED are terminal: no transition leaves them.

Completing a PENDING execution is allowed and backfills ``started_at``
with the completion moment ("started on the fly"): completing a step
implies it was started.

Cancellation writes its timestamp into ``completed_at``; both terminal
states share that slot.
"""
from datetime import datetime
from typing import Optional, Union

from ..enums import ExecutionStatus
from ..exceptions import ValidationError
from .base import BaseEntity, optional_text, require_positive_id, utcnow


class ProcessExecution(BaseEntity):
    """One traversal of one step by a process run."""

    def __init__(self, process_id: int, step_id: int, user_id: Optional[int] = None) -> None:
        super().__init__()
        self._process_id = require_positive_id(process_id, "Invalid process id.")
        self._step_id = require_positive_id(step_id, "Invalid step id.")
        self._user_id = user_id
        self._status = ExecutionStatus.PENDING
        self._started_at: Optional[datetime] = None
        self._completed_at: Optional[datetime] = None
        self._remarks: Optional[str] = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def process_id(self) -> int:
        return self._process_id

    @property
    def step_id(self) -> int:
        return self._step_id

    @property
    def user_id(self) -> Optional[int]:
        return self._user_id

    @property
    def status(self) -> ExecutionStatus:
        return self._status

    @property
    def started_at(self) -> Optional[datetime]:
        return self._started_at

    @property
    def completed_at(self) -> Optional[datetime]:
        return self._completed_at

    @property
    def remarks(self) -> Optional[str]:
        return self._remarks

    @property
    def is_terminal(self) -> bool:
        return self._status.is_terminal

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, user_id: Optional[int] = None, started_at: Optional[datetime] = None) -> None:
        """
        Move to STARTED.

        ``started_at`` is only written if not already set.

        Raises:
            ValidationError: If the execution is completed or cancelled
        """
        if self._status == ExecutionStatus.COMPLETED:
            raise ValidationError("Cannot start a completed execution.")
        if self._status == ExecutionStatus.CANCELLED:
            raise ValidationError("Cannot start a cancelled execution.")

        if user_id is not None:
            self._user_id = user_id
        self._status = ExecutionStatus.STARTED
        if self._started_at is None:
            self._started_at = started_at or utcnow()
        self.touch()

    def complete(self, remarks: Optional[str] = None, completed_at: Optional[datetime] = None) -> None:
        """
        Move to COMPLETED, backfilling ``started_at`` if never started.

        Raises:
            ValidationError: If cancelled, already completed, or the
                completion time precedes ``started_at``
        """
        if self._status == ExecutionStatus.CANCELLED:
            raise ValidationError("Cannot complete a cancelled execution.")
        if self._status == ExecutionStatus.COMPLETED:
            raise ValidationError("Execution already completed.")

        moment = completed_at or utcnow()
        self._check_order(self._started_at, moment)

        if self._started_at is None:
            self._started_at = moment
        self._status = ExecutionStatus.COMPLETED
        self._completed_at = moment
        self._remarks = optional_text(remarks)
        self.touch()

    def cancel(self, remarks: Optional[str] = None, cancelled_at: Optional[datetime] = None) -> None:
        """
        Move to CANCELLED. The cancellation time lands in ``completed_at``.

        Raises:
            ValidationError: If completed, already cancelled, or the
                cancellation time precedes ``started_at``
        """
        if self._status == ExecutionStatus.COMPLETED:
            raise ValidationError("Cannot cancel a completed execution.")
        if self._status == ExecutionStatus.CANCELLED:
            raise ValidationError("Execution already cancelled.")

        moment = cancelled_at or utcnow()
        self._check_order(self._started_at, moment)

        self._status = ExecutionStatus.CANCELLED
        self._completed_at = moment
        self._remarks = optional_text(remarks)
        self.touch()

    # ------------------------------------------------------------------
    # Direct mutation
    # ------------------------------------------------------------------

    def set_status(self, status: Union[ExecutionStatus, int, str]) -> None:
        """
        Overwrite the status directly.

        Raises:
            ValidationError: If this would reopen a completed execution
        """
        new_status = ExecutionStatus.parse(status)
        if self._status == ExecutionStatus.COMPLETED and new_status != ExecutionStatus.COMPLETED:
            raise ValidationError("Cannot change the status of a completed execution.")
        self._status = new_status
        self.touch()

    def set_times(self, started_at: Optional[datetime], completed_at: Optional[datetime]) -> None:
        self._check_order(started_at, completed_at)
        self._started_at = started_at
        self._completed_at = completed_at
        self.touch()

    def set_remarks(self, remarks: Optional[str]) -> None:
        self._remarks = optional_text(remarks)
        self.touch()

    @staticmethod
    def _check_order(started_at: Optional[datetime], completed_at: Optional[datetime]) -> None:
        if started_at is not None and completed_at is not None and completed_at < started_at:
            raise ValidationError("Completion time cannot be earlier than start time.")

    @classmethod
    def reconstitute(
        cls,
        id: int,
        process_id: int,
        step_id: int,
        user_id: Optional[int],
        status: Union[ExecutionStatus, int, str],
        started_at: Optional[datetime],
        completed_at: Optional[datetime],
        remarks: Optional[str],
        created_at: datetime,
        updated_at: Optional[datetime] = None,
    ) -> "ProcessExecution":
        """Rebuild a persisted execution without replaying transitions."""
        execution = cls(process_id, step_id, user_id)
        execution._status = ExecutionStatus.parse(status)
        cls._check_order(started_at, completed_at)
        execution._started_at = started_at
        execution._completed_at = completed_at
        execution._remarks = remarks
        execution._restore_identity(id, created_at, updated_at)
        return execution

    def __repr__(self) -> str:
        return (
            f"<ProcessExecution(id={self.id}, process_id={self.process_id}, "
            f"step_id={self.step_id}, status={self.status.label})>"
        )
