"""SQLAlchemy repository implementations."""

from .base import SqlAlchemyRepository
from .organization_repository_impl import (
    SqlAlchemyDepartmentRepository,
    SqlAlchemyRoleRepository,
    SqlAlchemyUserRepository,
)
from .process_repository_impl import (
    SqlAlchemyProcessExecutionRepository,
    SqlAlchemyProcessRepository,
    SqlAlchemyProcessStepRepository,
)

__all__ = [
    "SqlAlchemyDepartmentRepository",
    "SqlAlchemyProcessExecutionRepository",
    "SqlAlchemyProcessRepository",
    "SqlAlchemyProcessStepRepository",
    "SqlAlchemyRepository",
    "SqlAlchemyRoleRepository",
    "SqlAlchemyUserRepository",
]
