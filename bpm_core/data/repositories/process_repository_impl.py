"""SQLAlchemy implementations of the process repositories."""

from typing import List, Optional

from sqlalchemy import select

from bpm_core.domain.entities import Process, ProcessExecution, ProcessStep
from bpm_core.domain.repositories import (
    ProcessExecutionRepository,
    ProcessRepository,
    ProcessStepRepository,
)

from ..mappers import ProcessExecutionMapper, ProcessMapper, ProcessStepMapper
from ..models import ProcessExecutionModel, ProcessModel, ProcessStepModel
from .base import SqlAlchemyRepository


class SqlAlchemyProcessRepository(SqlAlchemyRepository, ProcessRepository):
    """Process aggregate repository; loads steps with the process."""

    model = ProcessModel
    mapper = ProcessMapper

    async def get_by_id(self, entity_id: int) -> Optional[Process]:
        # populate_existing refreshes a steps collection cached earlier in this session
        result = await self._session.execute(
            select(ProcessModel)
            .where(ProcessModel.id == entity_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return ProcessMapper.to_domain(model)

    async def get_by_department(self, department_id: int) -> List[Process]:
        result = await self._session.execute(
            select(ProcessModel)
            .where(ProcessModel.department_id == department_id)
            .order_by(ProcessModel.id)
        )
        return [ProcessMapper.to_domain(m) for m in result.scalars().all()]


class SqlAlchemyProcessStepRepository(SqlAlchemyRepository, ProcessStepRepository):
    model = ProcessStepModel
    mapper = ProcessStepMapper

    async def get_by_process_id(self, process_id: int) -> List[ProcessStep]:
        result = await self._session.execute(
            select(ProcessStepModel)
            .where(ProcessStepModel.process_id == process_id)
            .order_by(ProcessStepModel.step_order)
        )
        return [ProcessStepMapper.to_domain(m) for m in result.scalars().all()]


class SqlAlchemyProcessExecutionRepository(SqlAlchemyRepository, ProcessExecutionRepository):
    model = ProcessExecutionModel
    mapper = ProcessExecutionMapper

    async def get_by_process(self, process_id: int) -> List[ProcessExecution]:
        result = await self._session.execute(
            select(ProcessExecutionModel)
            .where(ProcessExecutionModel.process_id == process_id)
            .order_by(ProcessExecutionModel.id)
        )
        return [ProcessExecutionMapper.to_domain(m) for m in result.scalars().all()]
