"""Persistence adapters."""

from .in_memory import InMemoryIntegrityError, InMemoryStore, InMemoryUnitOfWork

__all__ = ["InMemoryIntegrityError", "InMemoryStore", "InMemoryUnitOfWork"]
