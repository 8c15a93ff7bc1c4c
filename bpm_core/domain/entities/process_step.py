"""Process step: one ordered unit of work within a process definition."""
from datetime import datetime
from typing import Optional

from ..exceptions import ValidationError
from .base import BaseEntity, require_positive_id, require_text


class ProcessStep(BaseEntity):
    """
    Static definition row of a process.

    ``process_id`` is fixed at construction; name, order and assigned
    role are re-validated on every change.
    """

    def __init__(
        self,
        process_id: int,
        name: str,
        order: int,
        assigned_role_id: Optional[int] = None,
    ) -> None:
        super().__init__()
        self._process_id = require_positive_id(process_id, "Invalid process id for step.")
        self._name = require_text(name, "Step name is required.")
        self._order = self._validate_order(order)
        self._assigned_role_id = self._validate_role(assigned_role_id)

    @property
    def process_id(self) -> int:
        return self._process_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def order(self) -> int:
        return self._order

    @property
    def assigned_role_id(self) -> Optional[int]:
        return self._assigned_role_id

    def set_name(self, name: str) -> None:
        self._name = require_text(name, "Step name is required.")
        self.touch()

    def set_order(self, order: int) -> None:
        self._order = self._validate_order(order)
        self.touch()

    def assign_role(self, role_id: Optional[int]) -> None:
        self._assigned_role_id = self._validate_role(role_id)
        self.touch()

    @staticmethod
    def _validate_order(order: int) -> int:
        if order is None or order < 0:
            raise ValidationError("Step order must be >= 0.")
        return order

    @staticmethod
    def _validate_role(role_id: Optional[int]) -> Optional[int]:
        if role_id is not None and role_id <= 0:
            raise ValidationError("Assigned role id must be positive.")
        return role_id

    @classmethod
    def reconstitute(
        cls,
        id: int,
        process_id: int,
        name: str,
        order: int,
        assigned_role_id: Optional[int],
        created_at: datetime,
        updated_at: Optional[datetime] = None,
    ) -> "ProcessStep":
        """Rebuild a persisted step."""
        step = cls(process_id, name, order, assigned_role_id)
        step._restore_identity(id, created_at, updated_at)
        return step

    def __repr__(self) -> str:
        return f"<ProcessStep(id={self.id}, process_id={self.process_id}, order={self.order})>"
