"""
Execution Status Enum.

Status values for process executions. Persisted as the ordinal,
rendered at the boundary by the canonical label.
"""
from enum import IntEnum
from typing import Union

from ..exceptions import ValidationError


class ExecutionStatus(IntEnum):
    """Execution status values."""

    PENDING = 0
    STARTED = 1
    COMPLETED = 2
    CANCELLED = 3

    @property
    def label(self) -> str:
        """Canonical label (``Pending``, ``Started``, ...)."""
        return self.name.capitalize()

    @property
    def is_terminal(self) -> bool:
        return self in (ExecutionStatus.COMPLETED, ExecutionStatus.CANCELLED)

    @classmethod
    def parse(cls, value: Union["ExecutionStatus", int, str]) -> "ExecutionStatus":
        """
        Parse a status from a member, an ordinal or a label.

        Labels are matched case-insensitively.

        Raises:
            ValidationError: If the value maps to no status
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, bool):
            raise ValidationError(f"Invalid execution status: {value!r}")

        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValidationError(f"Invalid execution status: {value!r}") from None

        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls.parse(int(text))
            for member in cls:
                if member.label.lower() == text.lower():
                    return member

        raise ValidationError(f"Invalid execution status: {value!r}")
