"""Database models."""

from .base import Base
from .organization_model import DepartmentModel, RoleModel, UserModel
from .process_model import ProcessExecutionModel, ProcessModel, ProcessStepModel

__all__ = [
    "Base",
    "DepartmentModel",
    "ProcessExecutionModel",
    "ProcessModel",
    "ProcessStepModel",
    "RoleModel",
    "UserModel",
]
