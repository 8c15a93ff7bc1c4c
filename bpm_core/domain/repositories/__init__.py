"""Repository interfaces (persistence boundary)."""

from .base import Repository
from .process_repositories import (
    DepartmentRepository,
    ProcessExecutionRepository,
    ProcessRepository,
    ProcessStepRepository,
    RoleRepository,
    UserRepository,
)
from .unit_of_work import UnitOfWork

__all__ = [
    "DepartmentRepository",
    "ProcessExecutionRepository",
    "ProcessRepository",
    "ProcessStepRepository",
    "Repository",
    "RoleRepository",
    "UnitOfWork",
    "UserRepository",
]
