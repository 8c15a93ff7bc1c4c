"""
Process aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
"""
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from ..exceptions import NotFoundError, ValidationError
from .base import BaseEntity, optional_text, require_text
from .process_execution import ProcessExecution
from .process_step import ProcessStep


class Process(BaseEntity):
    """
    Named, ordered definition of steps.

    Owns step-order uniqueness for its in-memory step collection. The
    orchestrator re-checks against persisted steps before inserting.
    """

    def __init__(
        self,
        name: str,
        department_id: Optional[int] = None,
        description: Optional[str] = None,
        created_by_id: Optional[int] = None,
    ) -> None:
        super().__init__()
        self._name = require_text(name, "Process name is required.")
        self._department_id = department_id
        self._description = optional_text(description)
        self._created_by_id = created_by_id
        self._steps: List[ProcessStep] = []

    @classmethod
    def create(
        cls,
        name: str,
        department_id: Optional[int] = None,
        description: Optional[str] = None,
        created_by_id: Optional[int] = None,
    ) -> "Process":
        """Factory for a new, not yet persisted process."""
        return cls(name, department_id, description, created_by_id)

    @property
    def name(self) -> str:
        return self._name

    @property
    def department_id(self) -> Optional[int]:
        return self._department_id

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def created_by_id(self) -> Optional[int]:
        return self._created_by_id

    @property
    def steps(self) -> Tuple[ProcessStep, ...]:
        """Steps ordered by step order."""
        return tuple(sorted(self._steps, key=lambda s: s.order))

    def set_name(self, name: str) -> None:
        self._name = require_text(name, "Process name is required.")
        self.touch()

    def set_description(self, description: Optional[str]) -> None:
        self._description = optional_text(description)
        self.touch()

    def set_department(self, department_id: Optional[int]) -> None:
        self._department_id = department_id
        self.touch()

    def add_step(
        self,
        step_name: str,
        order: int,
        assigned_role_id: Optional[int] = None,
    ) -> ProcessStep:
        """
        Append a new step bound to this process.

        Raises:
            ValidationError: Empty name, duplicate order, or the process
                has no id yet
        """
        name = require_text(step_name, "Step name is required.")
        if any(s.order == order for s in self._steps):
            raise ValidationError(f"A step with order {order} already exists for this process.")
        if self.id is None:
            raise ValidationError("Process must be persisted before steps can be added.")

        step = ProcessStep(self.id, name, order, assigned_role_id)
        self._steps.append(step)
        self.touch()
        return step

    def remove_step(self, step_id: int) -> None:
        step = self._find_step(step_id)
        if step is None:
            raise NotFoundError("Step", "Step not found in process.")
        self._steps.remove(step)
        self.touch()

    def start_execution(self, step_id: int, user_id: Optional[int] = None) -> ProcessExecution:
        """
        Create a PENDING execution for one of this process's steps.

        Convenience path; external callers go through the orchestrator,
        which checks persisted state.
        """
        step = self._find_step(step_id)
        if step is None:
            raise NotFoundError("Step", "Step not found in process.")

        execution = ProcessExecution(self.id, step.id, user_id)
        self.touch()
        return execution

    def _find_step(self, step_id: int) -> Optional[ProcessStep]:
        return next((s for s in self._steps if s.id is not None and s.id == step_id), None)

    @classmethod
    def reconstitute(
        cls,
        id: int,
        name: str,
        department_id: Optional[int],
        description: Optional[str],
        created_by_id: Optional[int],
        created_at: datetime,
        updated_at: Optional[datetime] = None,
        steps: Iterable[ProcessStep] = (),
    ) -> "Process":
        """Rebuild a persisted process with its steps."""
        process = cls(name, department_id, description, created_by_id)
        process._restore_identity(id, created_at, updated_at)
        process._steps = list(steps)
        return process

    def __repr__(self) -> str:
        return f"<Process(id={self.id}, name={self.name!r}, steps={len(self._steps)})>"
