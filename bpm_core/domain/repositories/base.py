"""Generic repository interface."""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from ..entities.base import BaseEntity

T = TypeVar("T", bound=BaseEntity)


class Repository(ABC, Generic[T]):
    """Abstract repository for one entity type."""

    @abstractmethod
    async def get_all(self) -> List[T]:
        """List every entity of this type."""
        pass

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[T]:
        """Retrieve an entity by id.

        Args:
            entity_id: Storage identity

        Returns:
            Entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, entity: T) -> None:
        """Stage an insert and assign the entity's id.

        Args:
            entity: New entity (``id`` is None)
        """
        pass

    @abstractmethod
    async def update(self, entity: T) -> None:
        """Stage an update of a persisted entity."""
        pass

    @abstractmethod
    async def delete(self, entity_id: int) -> None:
        """Stage a delete by id."""
        pass
