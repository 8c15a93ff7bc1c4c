"""Application DTOs."""

from .process_dto import (
    AddStepRequest,
    AdvanceExecutionRequest,
    CreateProcessRequest,
    ProcessDTO,
    ProcessExecutionDTO,
    ProcessStepDTO,
    StartExecutionRequest,
)

__all__ = [
    "AddStepRequest",
    "AdvanceExecutionRequest",
    "CreateProcessRequest",
    "ProcessDTO",
    "ProcessExecutionDTO",
    "ProcessStepDTO",
    "StartExecutionRequest",
]
