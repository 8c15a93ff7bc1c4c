"""Unit of Work interface: one logical transaction over all repositories."""

from abc import ABC, abstractmethod

from .process_repositories import (
    DepartmentRepository,
    ProcessExecutionRepository,
    ProcessRepository,
    ProcessStepRepository,
    RoleRepository,
    UserRepository,
)


class UnitOfWork(ABC):
    """
    Transactional commit boundary.

    Usage:
        async with uow:
            process = await uow.processes.get_by_id(process_id)
            ...
            await uow.commit()

    Leaving the context with an exception rolls back staged writes.
    """

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            await self.rollback()

    @property
    @abstractmethod
    def departments(self) -> DepartmentRepository:
        pass

    @property
    @abstractmethod
    def users(self) -> UserRepository:
        pass

    @property
    @abstractmethod
    def roles(self) -> RoleRepository:
        pass

    @property
    @abstractmethod
    def processes(self) -> ProcessRepository:
        pass

    @property
    @abstractmethod
    def process_steps(self) -> ProcessStepRepository:
        pass

    @property
    @abstractmethod
    def process_executions(self) -> ProcessExecutionRepository:
        pass

    @abstractmethod
    async def commit(self) -> int:
        """Atomically persist staged writes.

        Returns:
            Number of affected rows (informational)
        """
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard staged writes."""
        pass
