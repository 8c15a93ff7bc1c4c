"""Application services."""

from .process_service import ProcessApplicationService

__all__ = ["ProcessApplicationService"]
