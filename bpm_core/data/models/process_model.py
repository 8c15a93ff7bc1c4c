"""SQLAlchemy ORM models for the process aggregate."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import Base


class ProcessModel(Base):
    """SQLAlchemy ORM model for processes table."""

    __tablename__ = "processes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    department_id = Column(
        Integer, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Loaded eagerly: async sessions cannot lazy-load on attribute access
    steps = relationship(
        "ProcessStepModel",
        back_populates="process",
        order_by="ProcessStepModel.step_order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("department_id", "name", name="uq_process_name_department"),
    )

    def __repr__(self):
        return f"<ProcessModel(id={self.id}, name={self.name})>"


class ProcessStepModel(Base):
    """SQLAlchemy ORM model for process_steps table."""

    __tablename__ = "process_steps"

    id = Column(Integer, primary_key=True, autoincrement=True)
    process_id = Column(
        Integer, ForeignKey("processes.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String(200), nullable=False)
    step_order = Column(Integer, nullable=False)
    assigned_role_id = Column(Integer, ForeignKey("roles.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    process = relationship("ProcessModel", back_populates="steps")

    # Backs the application-level duplicate-order check against concurrent writers
    __table_args__ = (
        UniqueConstraint("process_id", "step_order", name="uq_process_step_order"),
    )

    def __repr__(self):
        return f"<ProcessStepModel(id={self.id}, process_id={self.process_id}, order={self.step_order})>"


class ProcessExecutionModel(Base):
    """SQLAlchemy ORM model for process_executions table."""

    __tablename__ = "process_executions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    process_id = Column(
        Integer, ForeignKey("processes.id", ondelete="CASCADE"), nullable=False
    )
    step_id = Column(
        Integer, ForeignKey("process_steps.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    status = Column(SmallInteger, nullable=False, default=0)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    remarks = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_process_executions_process_status", "process_id", "status"),
    )

    def __repr__(self):
        return f"<ProcessExecutionModel(id={self.id}, step_id={self.step_id}, status={self.status})>"
