"""Repository interfaces for the process aggregate and its rows."""

from abc import abstractmethod
from typing import List

from ..entities import Department, Process, ProcessExecution, ProcessStep, Role, User
from .base import Repository


class ProcessRepository(Repository[Process]):
    """Abstract repository for Process aggregate persistence."""

    @abstractmethod
    async def get_by_department(self, department_id: int) -> List[Process]:
        """List processes owned by a department."""
        pass


class ProcessStepRepository(Repository[ProcessStep]):
    """Abstract repository for process steps."""

    @abstractmethod
    async def get_by_process_id(self, process_id: int) -> List[ProcessStep]:
        """List the steps of a process.

        Returns:
            Steps ordered by step order ascending
        """
        pass


class ProcessExecutionRepository(Repository[ProcessExecution]):
    """Abstract repository for process executions."""

    @abstractmethod
    async def get_by_process(self, process_id: int) -> List[ProcessExecution]:
        """List the executions of a process."""
        pass


class DepartmentRepository(Repository[Department]):
    """Department lookups."""


class UserRepository(Repository[User]):
    """User lookups."""


class RoleRepository(Repository[Role]):
    """Role lookups."""
