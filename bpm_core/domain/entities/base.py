"""
Base entity.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..exceptions import ValidationError


_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class BaseEntity:
    """
    Identity and audit timestamps shared by all entities.

    ``id`` stays ``None`` until the persistence boundary assigns it on
    insert, or the entity is rebuilt with ``reconstitute``.
    """

    def __init__(self) -> None:
        self._id: Optional[int] = None
        self._created_at: datetime = utcnow()
        self._updated_at: Optional[datetime] = None

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> Optional[datetime]:
        return self._updated_at

    def assign_id(self, entity_id: int) -> None:
        """
        Assign the storage identity. Allowed exactly once.

        Raises:
            ValidationError: If the id is not positive or already assigned
        """
        if entity_id is None or entity_id <= 0:
            raise ValidationError(f"Invalid id for {type(self).__name__}: {entity_id!r}")
        if self._id is not None and self._id != entity_id:
            raise ValidationError(
                f"{type(self).__name__} already has id {self._id}; cannot reassign to {entity_id}."
            )
        self._id = entity_id

    def touch(self) -> None:
        """Set ``updated_at`` to now, strictly after any previous value."""
        now = utcnow()
        if self._updated_at is not None and now <= self._updated_at:
            now = self._updated_at + _TICK
        self._updated_at = now

    def _restore_identity(
        self,
        entity_id: int,
        created_at: datetime,
        updated_at: Optional[datetime],
    ) -> None:
        self._id = None
        self.assign_id(entity_id)
        self._created_at = created_at
        self._updated_at = updated_at

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self._id})>"


def require_text(value: Optional[str], message: str) -> str:
    """Trim ``value``; raise ``ValidationError`` if it ends up empty."""
    if value is None or not value.strip():
        raise ValidationError(message)
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


def require_positive_id(value: Optional[int], message: str) -> int:
    if value is None or value <= 0:
        raise ValidationError(message)
    return value
