"""Application DTOs for process operations."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from bpm_core.domain.entities import Process, ProcessExecution, ProcessStep
from bpm_core.domain.enums import ExecutionStatus
from bpm_core.domain.exceptions import ValidationError as DomainValidationError


# =============================================================================
# REQUESTS
# =============================================================================

class CreateProcessRequest(BaseModel):
    """Request DTO for creating a process."""

    name: str = Field(..., description="Process name")
    department_id: Optional[int] = Field(None, gt=0, description="Owning department")
    description: Optional[str] = Field(None, description="Free-text description")
    created_by_id: Optional[int] = Field(None, gt=0, description="Creating user")

    model_config = {"frozen": True}


class AddStepRequest(BaseModel):
    """Request DTO for appending a step to a process."""

    name: str = Field(..., description="Step name")
    order: int = Field(..., ge=0, description="Step order (unique per process)")
    assigned_role_id: Optional[int] = Field(None, gt=0, description="Required role")

    model_config = {"frozen": True}


class StartExecutionRequest(BaseModel):
    """Request DTO for starting an execution of a step."""

    step_id: int = Field(..., gt=0, description="Step to execute")
    user_id: Optional[int] = Field(None, gt=0, description="Executing user")

    model_config = {"frozen": True}


class AdvanceExecutionRequest(BaseModel):
    """Request DTO for advancing an execution to the next step."""

    user_id: Optional[int] = Field(None, gt=0, description="User for the next execution")
    remarks: Optional[str] = Field(None, description="Remarks stored on the completed execution")

    model_config = {"frozen": True}


# =============================================================================
# RESPONSES
# =============================================================================

class ProcessStepDTO(BaseModel):
    """Response DTO for a process step."""

    id: int
    process_id: int
    name: str
    order: int
    assigned_role_id: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, step: ProcessStep) -> "ProcessStepDTO":
        return cls(
            id=step.id,
            process_id=step.process_id,
            name=step.name,
            order=step.order,
            assigned_role_id=step.assigned_role_id,
            created_at=step.created_at,
            updated_at=step.updated_at,
        )


class ProcessDTO(BaseModel):
    """Response DTO for process details."""

    id: int
    name: str
    department_id: Optional[int] = None
    description: Optional[str] = None
    created_by_id: Optional[int] = None
    steps: List[ProcessStepDTO] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, process: Process) -> "ProcessDTO":
        return cls(
            id=process.id,
            name=process.name,
            department_id=process.department_id,
            description=process.description,
            created_by_id=process.created_by_id,
            steps=[ProcessStepDTO.from_entity(s) for s in process.steps],
            created_at=process.created_at,
            updated_at=process.updated_at,
        )


class ProcessExecutionDTO(BaseModel):
    """
    Response DTO for an execution.

    ``status`` is the canonical label; any case of a label, or the
    ordinal, is accepted on input.
    """

    id: int
    process_id: int
    step_id: int
    user_id: Optional[int] = None
    status: str = Field(..., description="Pending | Started | Completed | Cancelled")
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    remarks: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @field_validator("status", mode="before")
    @classmethod
    def canonical_status(cls, value):
        try:
            return ExecutionStatus.parse(value).label
        except DomainValidationError as e:
            raise ValueError(str(e)) from e

    @property
    def status_value(self) -> ExecutionStatus:
        return ExecutionStatus.parse(self.status)

    @classmethod
    def from_entity(cls, execution: ProcessExecution) -> "ProcessExecutionDTO":
        return cls(
            id=execution.id,
            process_id=execution.process_id,
            step_id=execution.step_id,
            user_id=execution.user_id,
            status=execution.status.label,
            started_at=execution.started_at,
            completed_at=execution.completed_at,
            remarks=execution.remarks,
            created_at=execution.created_at,
            updated_at=execution.updated_at,
        )
