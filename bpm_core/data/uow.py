"""Unit of Work pattern for atomic transactions."""

import logging
from typing import Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bpm_core.domain.repositories import UnitOfWork

from .repositories import (
    SqlAlchemyDepartmentRepository,
    SqlAlchemyProcessExecutionRepository,
    SqlAlchemyProcessRepository,
    SqlAlchemyProcessStepRepository,
    SqlAlchemyRoleRepository,
    SqlAlchemyUserRepository,
)


logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of Work over one SQLAlchemy async session.

    Responsibilities:
    1. Manage session lifecycle (opened on enter, closed on exit)
    2. Atomic commit/rollback of all repository operations
    3. Lazy initialization of repositories
    4. Count rows written in the transaction (reported by ``commit``)
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._rows_written = 0

        # Lazy-loaded repositories
        self._departments: Optional[SqlAlchemyDepartmentRepository] = None
        self._users: Optional[SqlAlchemyUserRepository] = None
        self._roles: Optional[SqlAlchemyRoleRepository] = None
        self._processes: Optional[SqlAlchemyProcessRepository] = None
        self._process_steps: Optional[SqlAlchemyProcessStepRepository] = None
        self._process_executions: Optional[SqlAlchemyProcessExecutionRepository] = None

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        self._rows_written = 0
        event.listen(self._session.sync_session, "after_flush", self._count_rows)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception, then close the session."""
        try:
            if exc_type is not None:
                logger.error(f"Transaction failed: {exc_val}")
                await self.rollback()
        finally:
            await self._session.close()
            self._session = None

    def _count_rows(self, session, flush_context) -> None:
        # new/dirty/deleted still hold pre-flush state in after_flush
        self._rows_written += len(session.new) + len(session.dirty) + len(session.deleted)

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._session

    @property
    def departments(self) -> SqlAlchemyDepartmentRepository:
        if self._departments is None:
            self._departments = SqlAlchemyDepartmentRepository(self.session)
        return self._departments

    @property
    def users(self) -> SqlAlchemyUserRepository:
        if self._users is None:
            self._users = SqlAlchemyUserRepository(self.session)
        return self._users

    @property
    def roles(self) -> SqlAlchemyRoleRepository:
        if self._roles is None:
            self._roles = SqlAlchemyRoleRepository(self.session)
        return self._roles

    @property
    def processes(self) -> SqlAlchemyProcessRepository:
        if self._processes is None:
            self._processes = SqlAlchemyProcessRepository(self.session)
        return self._processes

    @property
    def process_steps(self) -> SqlAlchemyProcessStepRepository:
        if self._process_steps is None:
            self._process_steps = SqlAlchemyProcessStepRepository(self.session)
        return self._process_steps

    @property
    def process_executions(self) -> SqlAlchemyProcessExecutionRepository:
        if self._process_executions is None:
            self._process_executions = SqlAlchemyProcessExecutionRepository(self.session)
        return self._process_executions

    async def commit(self) -> int:
        """Commit all pending changes.

        Returns:
            Rows written in this transaction (informational)
        """
        try:
            await self.session.commit()
        except Exception as e:
            logger.error(f"Commit failed: {e}")
            await self.rollback()
            raise
        affected, self._rows_written = self._rows_written, 0
        logger.info(f"Transaction committed ({affected} row(s))")
        return affected

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        await self.session.rollback()
        self._rows_written = 0
        logger.warning("Transaction rolled back")


def create_uow(session_factory: async_sessionmaker) -> SqlAlchemyUnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        SqlAlchemyUnitOfWork instance
    """
    return SqlAlchemyUnitOfWork(session_factory)
