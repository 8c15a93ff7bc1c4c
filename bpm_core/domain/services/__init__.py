"""Domain services."""

from .process_orchestrator import ProcessOrchestrator

__all__ = ["ProcessOrchestrator"]
