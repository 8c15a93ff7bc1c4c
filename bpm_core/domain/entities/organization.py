"""
Organization entities referenced by processes.

Departments, users and roles are owned elsewhere; the process core only
needs to resolve them by id and, for users, check ``is_active``.
"""
from datetime import datetime
from typing import Optional

from .base import BaseEntity, optional_text, require_text


class Department(BaseEntity):
    """Organizational unit that may own processes."""

    def __init__(self, name: str, description: Optional[str] = None) -> None:
        super().__init__()
        self.name = require_text(name, "Department name is required.")
        self.description = optional_text(description)

    @classmethod
    def reconstitute(
        cls,
        id: int,
        name: str,
        description: Optional[str],
        created_at: datetime,
        updated_at: Optional[datetime] = None,
    ) -> "Department":
        department = cls(name, description)
        department._restore_identity(id, created_at, updated_at)
        return department


class Role(BaseEntity):
    """Role a step may require."""

    def __init__(self, name: str, description: Optional[str] = None) -> None:
        super().__init__()
        self.name = require_text(name, "Role name is required.")
        self.description = optional_text(description)

    @classmethod
    def reconstitute(
        cls,
        id: int,
        name: str,
        description: Optional[str],
        created_at: datetime,
        updated_at: Optional[datetime] = None,
    ) -> "Role":
        role = cls(name, description)
        role._restore_identity(id, created_at, updated_at)
        return role


class User(BaseEntity):
    """Actor that creates processes and executes steps."""

    def __init__(
        self,
        username: str,
        department_id: Optional[int] = None,
        email: Optional[str] = None,
        is_active: bool = True,
    ) -> None:
        super().__init__()
        self.username = require_text(username, "Username is required.")
        self.department_id = department_id
        self.email = optional_text(email)
        self._is_active = is_active

    @property
    def is_active(self) -> bool:
        return self._is_active

    def activate(self) -> None:
        if self._is_active:
            return
        self._is_active = True
        self.touch()

    def deactivate(self) -> None:
        if not self._is_active:
            return
        self._is_active = False
        self.touch()

    @classmethod
    def reconstitute(
        cls,
        id: int,
        username: str,
        department_id: Optional[int],
        email: Optional[str],
        is_active: bool,
        created_at: datetime,
        updated_at: Optional[datetime] = None,
    ) -> "User":
        user = cls(username, department_id, email, is_active)
        user._restore_identity(id, created_at, updated_at)
        return user
