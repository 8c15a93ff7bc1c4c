"""Domain entities."""

from .base import BaseEntity
from .organization import Department, Role, User
from .process import Process
from .process_execution import ProcessExecution
from .process_step import ProcessStep

__all__ = [
    "BaseEntity",
    "Department",
    "Process",
    "ProcessExecution",
    "ProcessStep",
    "Role",
    "User",
]
