"""
Domain exceptions.

Raised by entities and the process orchestrator. Callers map them to
their own transport (e.g. 400 / 404 / 409).
"""
from typing import Optional


class DomainError(Exception):
    """Base class for business rule violations."""


class ValidationError(DomainError):
    """Input fails a domain invariant."""


class NotFoundError(DomainError):
    """A referenced entity does not exist."""

    def __init__(self, entity: str, message: Optional[str] = None):
        self.entity = entity
        super().__init__(message or f"{entity} not found.")


class ConflictError(DomainError):
    """A uniqueness invariant would be violated."""
