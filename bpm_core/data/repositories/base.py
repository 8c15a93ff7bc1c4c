"""Generic SQLAlchemy repository."""

from typing import Any, List, Optional, Type

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession


class SqlAlchemyRepository:
    """
    Base implementation of the repository contract over one ORM model.

    Subclasses set ``model`` and ``mapper`` (a static mapper class with
    ``to_domain``, ``to_persistence`` and ``update_persistence``).
    """

    model: Type[Any]
    mapper: Type[Any]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def get_all(self) -> List[Any]:
        result = await self._session.execute(select(self.model).order_by(self.model.id))
        return [self.mapper.to_domain(m) for m in result.scalars().all()]

    async def get_by_id(self, entity_id: int) -> Optional[Any]:
        model = await self._session.get(self.model, entity_id)
        if model is None:
            return None
        return self.mapper.to_domain(model)

    async def insert(self, entity: Any) -> None:
        """Stage an insert and assign the generated id.

        Args:
            entity: New domain entity
        """
        model = self.mapper.to_persistence(entity)
        self._session.add(model)
        await self._session.flush()  # Propagate to DB without committing
        entity.assign_id(model.id)

    async def update(self, entity: Any) -> None:
        model = await self._require(entity.id)
        self.mapper.update_persistence(entity, model)
        await self._session.flush()

    async def delete(self, entity_id: int) -> None:
        model = await self._require(entity_id)
        await self._session.delete(model)
        await self._session.flush()

    async def _require(self, entity_id: Optional[int]) -> Any:
        model = await self._session.get(self.model, entity_id) if entity_id else None
        if model is None:
            raise LookupError(f"{self.model.__tablename__} row {entity_id!r} does not exist")
        return model
