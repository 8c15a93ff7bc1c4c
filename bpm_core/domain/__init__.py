"""Domain layer - pure domain models and interfaces."""

from .entities import Department, Process, ProcessExecution, ProcessStep, Role, User
from .enums import ExecutionStatus
from .exceptions import ConflictError, DomainError, NotFoundError, ValidationError
from .repositories import UnitOfWork
from .services import ProcessOrchestrator

__all__ = [
    "ConflictError",
    "Department",
    "DomainError",
    "ExecutionStatus",
    "NotFoundError",
    "Process",
    "ProcessExecution",
    "ProcessOrchestrator",
    "ProcessStep",
    "Role",
    "UnitOfWork",
    "User",
    "ValidationError",
]
