"""Static mappers for domain entities ↔ database models."""

from datetime import datetime, timezone
from typing import Optional

from bpm_core.domain.entities import (
    Department,
    Process,
    ProcessExecution,
    ProcessStep,
    Role,
    User,
)
from bpm_core.domain.enums import ExecutionStatus

from .models import (
    DepartmentModel,
    ProcessExecutionModel,
    ProcessModel,
    ProcessStepModel,
    RoleModel,
    UserModel,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive values (SQLite drops the offset)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class DepartmentMapper:
    """Static mapper for Department ↔ DepartmentModel."""

    @staticmethod
    def to_domain(model: DepartmentModel) -> Department:
        return Department.reconstitute(
            id=model.id,
            name=model.name,
            description=model.description,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    @staticmethod
    def to_persistence(entity: Department) -> DepartmentModel:
        return DepartmentModel(
            name=entity.name,
            description=entity.description,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def update_persistence(entity: Department, model: DepartmentModel) -> DepartmentModel:
        model.name = entity.name
        model.description = entity.description
        model.updated_at = entity.updated_at
        return model


class RoleMapper:
    """Static mapper for Role ↔ RoleModel."""

    @staticmethod
    def to_domain(model: RoleModel) -> Role:
        return Role.reconstitute(
            id=model.id,
            name=model.name,
            description=model.description,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    @staticmethod
    def to_persistence(entity: Role) -> RoleModel:
        return RoleModel(
            name=entity.name,
            description=entity.description,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def update_persistence(entity: Role, model: RoleModel) -> RoleModel:
        model.name = entity.name
        model.description = entity.description
        model.updated_at = entity.updated_at
        return model


class UserMapper:
    """Static mapper for User ↔ UserModel."""

    @staticmethod
    def to_domain(model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            username=model.username,
            department_id=model.department_id,
            email=model.email,
            is_active=bool(model.is_active),
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    @staticmethod
    def to_persistence(entity: User) -> UserModel:
        return UserModel(
            username=entity.username,
            email=entity.email,
            department_id=entity.department_id,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def update_persistence(entity: User, model: UserModel) -> UserModel:
        model.username = entity.username
        model.email = entity.email
        model.department_id = entity.department_id
        model.is_active = entity.is_active
        model.updated_at = entity.updated_at
        return model


class ProcessStepMapper:
    """Static mapper for ProcessStep ↔ ProcessStepModel."""

    @staticmethod
    def to_domain(model: ProcessStepModel) -> ProcessStep:
        return ProcessStep.reconstitute(
            id=model.id,
            process_id=model.process_id,
            name=model.name,
            order=model.step_order,
            assigned_role_id=model.assigned_role_id,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    @staticmethod
    def to_persistence(entity: ProcessStep) -> ProcessStepModel:
        return ProcessStepModel(
            process_id=entity.process_id,
            name=entity.name,
            step_order=entity.order,
            assigned_role_id=entity.assigned_role_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def update_persistence(entity: ProcessStep, model: ProcessStepModel) -> ProcessStepModel:
        model.name = entity.name
        model.step_order = entity.order
        model.assigned_role_id = entity.assigned_role_id
        model.updated_at = entity.updated_at
        return model


class ProcessMapper:
    """Static mapper for Process ↔ ProcessModel (steps loaded, never written)."""

    @staticmethod
    def to_domain(model: ProcessModel) -> Process:
        return Process.reconstitute(
            id=model.id,
            name=model.name,
            department_id=model.department_id,
            description=model.description,
            created_by_id=model.created_by_id,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
            steps=[ProcessStepMapper.to_domain(s) for s in model.steps],
        )

    @staticmethod
    def to_persistence(entity: Process) -> ProcessModel:
        return ProcessModel(
            name=entity.name,
            description=entity.description,
            department_id=entity.department_id,
            created_by_id=entity.created_by_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def update_persistence(entity: Process, model: ProcessModel) -> ProcessModel:
        """Copy scalar fields only; steps are persisted through their own repository."""
        model.name = entity.name
        model.description = entity.description
        model.department_id = entity.department_id
        model.updated_at = entity.updated_at
        return model


class ProcessExecutionMapper:
    """Static mapper for ProcessExecution ↔ ProcessExecutionModel."""

    @staticmethod
    def to_domain(model: ProcessExecutionModel) -> ProcessExecution:
        return ProcessExecution.reconstitute(
            id=model.id,
            process_id=model.process_id,
            step_id=model.step_id,
            user_id=model.user_id,
            status=ExecutionStatus(model.status),
            started_at=_as_utc(model.started_at),
            completed_at=_as_utc(model.completed_at),
            remarks=model.remarks,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    @staticmethod
    def to_persistence(entity: ProcessExecution) -> ProcessExecutionModel:
        return ProcessExecutionModel(
            process_id=entity.process_id,
            step_id=entity.step_id,
            user_id=entity.user_id,
            status=int(entity.status),
            started_at=entity.started_at,
            completed_at=entity.completed_at,
            remarks=entity.remarks,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def update_persistence(
        entity: ProcessExecution, model: ProcessExecutionModel
    ) -> ProcessExecutionModel:
        model.user_id = entity.user_id
        model.status = int(entity.status)
        model.started_at = entity.started_at
        model.completed_at = entity.completed_at
        model.remarks = entity.remarks
        model.updated_at = entity.updated_at
        return model
