"""Data layer - SQLAlchemy persistence and mapping."""

from .models import Base
from .uow import SqlAlchemyUnitOfWork, create_uow

__all__ = [
    "Base",
    "create_uow",
    "SqlAlchemyUnitOfWork",
]
